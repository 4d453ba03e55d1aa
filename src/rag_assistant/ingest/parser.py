"""Parsing interfaces for plain-text knowledge sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rag_assistant.errors import UnsupportedDocumentError
from rag_assistant.types import ParsedDocument


class Parser(ABC):
    """Base parser interface used by the ingest pipeline."""

    extensions: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, path: Path, *, doc_id: str | None = None) -> ParsedDocument:
        """Parse a file into normalized text + metadata."""

    @abstractmethod
    def parse_bytes(
        self, data: bytes, filename: str, *, doc_id: str | None = None
    ) -> ParsedDocument:
        """Parse uploaded file content into normalized text + metadata."""


class TextParser(Parser):
    """Parser for plain text and markdown documents."""

    extensions = (".txt", ".md", ".markdown", ".log")

    def parse(self, path: Path, *, doc_id: str | None = None) -> ParsedDocument:
        return self.parse_bytes(path.read_bytes(), str(path), doc_id=doc_id)

    def parse_bytes(
        self, data: bytes, filename: str, *, doc_id: str | None = None
    ) -> ParsedDocument:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise UnsupportedDocumentError(f"{filename} is not valid UTF-8 text") from exc
        path = Path(filename)
        return ParsedDocument(
            doc_id=doc_id or path.stem,
            text=text,
            metadata={
                "source": filename,
                "format": "markdown" if path.suffix.lower() in {".md", ".markdown"} else "text",
            },
        )


class ParserRegistry:
    """Maps file extension to parser implementation."""

    def __init__(self, parsers: list[Parser] | None = None) -> None:
        self._parsers: dict[str, Parser] = {}
        for parser in parsers or [TextParser()]:
            self.register(parser)

    def register(self, parser: Parser) -> None:
        for extension in parser.extensions:
            self._parsers[extension.lower()] = parser

    def supports(self, filename: str) -> bool:
        return Path(filename).suffix.lower() in self._parsers

    def parse_path(self, path: str | Path, *, doc_id: str | None = None) -> ParsedDocument:
        file_path = Path(path)
        return self._parser_for(file_path.name).parse(file_path, doc_id=doc_id)

    def parse_upload(
        self, filename: str, data: bytes, *, doc_id: str | None = None
    ) -> ParsedDocument:
        return self._parser_for(filename).parse_bytes(data, filename, doc_id=doc_id)

    def _parser_for(self, filename: str) -> Parser:
        suffix = Path(filename).suffix
        parser = self._parsers.get(suffix.lower())
        if parser is None:
            raise UnsupportedDocumentError(f"No parser registered for extension: {suffix}")
        return parser
