"""Greedy paragraph-packing chunker."""

from __future__ import annotations

import logging
import re

from rag_assistant.config import ChunkingConfig
from rag_assistant.types import ParsedDocument

logger = logging.getLogger(__name__)

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_PARAGRAPH_JOIN = "\n\n"


class ParagraphChunker:
    """Packs whole paragraphs into chunks bounded by `max_chunk_size` characters.

    Paragraphs are appended to the running chunk while the combined length of
    the chunk and the next paragraph stays strictly below the limit (the
    `"\\n\\n"` joiner is not counted). When a paragraph does not fit, the
    running chunk is emitted and the paragraph starts a new one.

    Paragraphs are never split, so a single paragraph longer than the limit
    becomes a chunk of its own.
    """

    def __init__(self, config: ChunkingConfig | None = None) -> None:
        self.config = config or ChunkingConfig()

    def chunk_document(self, document: ParsedDocument) -> list[str]:
        chunks = self.chunk_text(document.text)
        logger.debug(
            "Chunked document %s into %d chunks (max_chunk_size=%d)",
            document.doc_id,
            len(chunks),
            self.config.max_chunk_size,
        )
        return chunks

    def chunk_text(self, text: str) -> list[str]:
        return segment(
            text,
            self.config.max_chunk_size,
            strip_paragraphs=self.config.strip_paragraphs,
        )


def segment(
    text: str, max_chunk_size: int = 800, *, strip_paragraphs: bool = False
) -> list[str]:
    """Split `text` into ordered, non-empty chunks of whole paragraphs.

    Paragraphs are kept verbatim, so indentation and trailing newlines count
    towards the size check and survive in the chunk text. With
    `strip_paragraphs`, each paragraph is trimmed and blank ones are skipped.
    """

    chunks: list[str] = []
    current = ""

    paragraphs = split_paragraphs(text)
    if strip_paragraphs:
        paragraphs = [part.strip() for part in paragraphs if part.strip()]

    for paragraph in paragraphs:
        if len(current) + len(paragraph) < max_chunk_size:
            current = f"{current}{_PARAGRAPH_JOIN}{paragraph}" if current else paragraph
            continue
        if current:
            chunks.append(current)
        current = paragraph

    if current:
        chunks.append(current)
    return chunks


def split_paragraphs(text: str) -> list[str]:
    return _PARAGRAPH_SPLIT.split(text)
