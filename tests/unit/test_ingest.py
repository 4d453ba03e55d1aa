import pytest

from rag_assistant.config import ChunkingConfig
from rag_assistant.errors import UnsupportedDocumentError
from rag_assistant.ingest.chunker import ParagraphChunker
from rag_assistant.ingest.parser import ParserRegistry
from rag_assistant.ingest.pipeline import IngestPipeline


def test_ingest_path_reads_and_chunks(tmp_path) -> None:
    doc = tmp_path / "admissions.txt"
    doc.write_text("Fees are 5000.\n\nLibrary opens at 9.", encoding="utf-8")

    loaded = IngestPipeline().ingest_path(doc)

    assert loaded.doc_id == "admissions"
    assert loaded.source == str(doc)
    assert loaded.chunks == ("Fees are 5000.\n\nLibrary opens at 9.",)


def test_ingest_upload_uses_chunk_size() -> None:
    pipeline = IngestPipeline(ParserRegistry(), ParagraphChunker(ChunkingConfig(max_chunk_size=10)))

    loaded = pipeline.ingest_upload("notes.md", "# Fees\n\n5000 per term".encode("utf-8"))

    assert loaded.doc_id == "notes"
    assert loaded.chunks == ("# Fees", "5000 per term")


def test_ingest_text_defaults_source_to_doc_id() -> None:
    loaded = IngestPipeline().ingest_text("", doc_id="blank")

    assert loaded.source == "blank"
    assert loaded.chunks == ()


def test_unknown_extension_rejected(tmp_path) -> None:
    doc = tmp_path / "brochure.pdf"
    doc.write_bytes(b"%PDF-1.7")

    with pytest.raises(UnsupportedDocumentError):
        IngestPipeline().ingest_path(doc)


def test_non_utf8_upload_rejected() -> None:
    registry = ParserRegistry()

    with pytest.raises(UnsupportedDocumentError):
        registry.parse_upload("latin.txt", "café".encode("latin-1"))


def test_parser_metadata_and_bom_handling() -> None:
    registry = ParserRegistry()

    parsed = registry.parse_upload("guide.markdown", "\ufeffHello".encode("utf-8"), doc_id="g")

    assert parsed.text == "Hello"
    assert parsed.doc_id == "g"
    assert parsed.metadata == {"source": "guide.markdown", "format": "markdown"}
    assert registry.supports("README.TXT")
    assert not registry.supports("image.png")
