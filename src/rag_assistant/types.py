"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal


@dataclass(slots=True)
class ParsedDocument:
    """A parsed source document before chunking."""

    doc_id: str
    text: str
    metadata: dict[str, Any]


@dataclass(frozen=True, slots=True)
class LoadedDocument:
    """Chunks produced from one document, owned by a session."""

    doc_id: str
    source: str
    chunks: tuple[str, ...]


@dataclass(slots=True)
class ScoredChunk:
    """A chunk paired with its relevance score for one retrieval call."""

    chunk: str
    score: float
    index: int
    rank: int = 0


Role = Literal["user", "model"]


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
