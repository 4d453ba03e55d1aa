"""Document-grounded QA retrieval package."""

from .config import ChunkingConfig, RetrievalConfig
from .ingest.chunker import segment
from .retrieval.retriever import retrieve

__all__ = ["ChunkingConfig", "RetrievalConfig", "retrieve", "segment"]
