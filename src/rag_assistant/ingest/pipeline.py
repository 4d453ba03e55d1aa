"""Ingest pipeline: parse -> chunk."""

from __future__ import annotations

import logging
from pathlib import Path

from rag_assistant.ingest.chunker import ParagraphChunker
from rag_assistant.ingest.parser import ParserRegistry
from rag_assistant.types import LoadedDocument, ParsedDocument

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Coordinates parser and chunker stages.

    Ingestion runs once per uploaded document; the resulting chunks are handed
    to a session and reused unchanged for every query against it.
    """

    def __init__(
        self,
        parser_registry: ParserRegistry | None = None,
        chunker: ParagraphChunker | None = None,
    ) -> None:
        self._parser_registry = parser_registry or ParserRegistry()
        self._chunker = chunker or ParagraphChunker()

    def ingest_path(self, path: str | Path, *, doc_id: str | None = None) -> LoadedDocument:
        """Ingest a single source file from disk."""

        return self._load(self._parser_registry.parse_path(path, doc_id=doc_id))

    def ingest_upload(
        self, filename: str, data: bytes, *, doc_id: str | None = None
    ) -> LoadedDocument:
        """Ingest the raw bytes of an uploaded file."""

        return self._load(self._parser_registry.parse_upload(filename, data, doc_id=doc_id))

    def ingest_text(self, text: str, *, doc_id: str, source: str | None = None) -> LoadedDocument:
        return self._load(
            ParsedDocument(
                doc_id=doc_id,
                text=text,
                metadata={"source": source or doc_id, "format": "text"},
            )
        )

    def _load(self, parsed: ParsedDocument) -> LoadedDocument:
        chunks = self._chunker.chunk_document(parsed)
        source = str(parsed.metadata.get("source", parsed.doc_id))
        logger.info("Ingested %s: %d characters, %d chunks", source, len(parsed.text), len(chunks))
        return LoadedDocument(doc_id=parsed.doc_id, source=source, chunks=tuple(chunks))
