"""Configuration models for the retrieval assistant."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class ChunkingConfig(BaseModel):
    """Configures greedy paragraph packing."""

    max_chunk_size: int = Field(default=800, ge=1)
    strip_paragraphs: bool = False


class RetrievalConfig(BaseModel):
    """Configures lexical ranking and result limits."""

    top_k: int = Field(default=3, ge=1)
    context_top_k: int = Field(default=5, ge=1)
    # Query tokens shorter than this are ignored ("fee" is dropped, "fees" kept).
    min_token_length: int = Field(default=4, ge=1)


class ApiConfig(BaseModel):
    """Configures the HTTP surface."""

    log_level: str = Field(default="INFO")
    allowed_extensions: tuple[str, ...] = (".txt", ".md")
    max_document_bytes: int = Field(default=5 * 1024 * 1024, ge=1)

    @classmethod
    def from_env(cls) -> "ApiConfig":
        values: dict[str, object] = {}
        log_level = os.getenv("RAG_ASSISTANT_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.upper()
        max_bytes = os.getenv("RAG_ASSISTANT_MAX_DOCUMENT_BYTES")
        if max_bytes:
            values["max_document_bytes"] = max_bytes
        return cls.model_validate(values)
