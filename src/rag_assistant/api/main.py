"""FastAPI entrypoint for document upload, search and trace endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from rag_assistant.config import ApiConfig, ChunkingConfig, RetrievalConfig
from rag_assistant.errors import (
    EmptyKnowledgeBaseError,
    SessionNotFoundError,
    UnsupportedDocumentError,
)
from rag_assistant.ingest.chunker import ParagraphChunker
from rag_assistant.ingest.parser import ParserRegistry
from rag_assistant.ingest.pipeline import IngestPipeline
from rag_assistant.obs.tracing import Timer, TraceStore
from rag_assistant.retrieval.scoring import KeywordOverlapScorer
from rag_assistant.retrieval.tools import chunk_id
from rag_assistant.session import KnowledgeSession, SessionStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class DocumentRequest(BaseModel):
    filename: str = Field(min_length=1)
    text: str
    doc_id: str | None = None


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    # Falls back to the session's RetrievalConfig.top_k.
    top_k: int | None = Field(default=None, ge=1, le=20)


class MessageRequest(BaseModel):
    role: Literal["user", "model"]
    text: str = Field(min_length=1)


_api_config = ApiConfig.from_env()
configure_logging(_api_config.log_level)

app = FastAPI(title="Document QA Retrieval", version="0.1.0")

_retrieval_config = RetrievalConfig()
_ingest_pipeline = IngestPipeline(ParserRegistry(), ParagraphChunker(ChunkingConfig()))
_term_scorer = KeywordOverlapScorer(_retrieval_config.min_token_length)
_sessions = SessionStore(_retrieval_config)
_trace_store = TraceStore()


def _session_or_404(session_id: str) -> KnowledgeSession:
    try:
        return _sessions.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "session_count": len(_sessions),
        "trace_count": len(_trace_store),
    }


@app.post("/sessions/{session_id}/documents")
def upload_document(session_id: str, request: DocumentRequest) -> dict[str, Any]:
    suffix = Path(request.filename).suffix.lower()
    data = request.text.encode("utf-8")
    try:
        if suffix not in _api_config.allowed_extensions:
            raise UnsupportedDocumentError(f"Unsupported file type: {request.filename}")
        if len(data) > _api_config.max_document_bytes:
            raise UnsupportedDocumentError(
                f"{request.filename} exceeds {_api_config.max_document_bytes} bytes"
            )
        document = _ingest_pipeline.ingest_upload(request.filename, data, doc_id=request.doc_id)
    except UnsupportedDocumentError as exc:
        logger.warning("Rejected upload %s: %s", request.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    session = _sessions.get_or_create(session_id)
    session.load(document)
    return {
        "session_id": session.session_id,
        "doc_id": document.doc_id,
        "chunks_created": len(document.chunks),
    }


@app.get("/sessions/{session_id}")
def session_detail(session_id: str) -> dict[str, Any]:
    session = _session_or_404(session_id)
    document = session.document
    return {
        "session_id": session.session_id,
        "source": document.source if document else None,
        "chunk_count": len(session.chunks),
        "message_count": len(session.history),
    }


@app.post("/sessions/{session_id}/search")
def search(session_id: str, request: SearchRequest) -> dict[str, Any]:
    session = _session_or_404(session_id)
    try:
        with Timer() as timer:
            hits = session.search(request.query, top_k=request.top_k)
    except EmptyKnowledgeBaseError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    record = _trace_store.create_record(
        session_id=session_id,
        query=request.query,
        query_terms=_term_scorer.query_terms(request.query),
        results=hits,
        latency_ms=timer.elapsed_ms,
    )
    return {
        "trace_id": record.trace_id,
        "items": [
            {
                "chunk_id": chunk_id(hit.index),
                "rank": hit.rank,
                "score": hit.score,
                "text": hit.chunk,
            }
            for hit in hits
        ],
    }


@app.post("/sessions/{session_id}/messages")
def record_message(session_id: str, request: MessageRequest) -> dict[str, Any]:
    session = _session_or_404(session_id)
    message = session.record(request.role, request.text)
    return {"role": message.role, "text": message.text, "timestamp": message.timestamp.isoformat()}


@app.delete("/sessions/{session_id}/messages")
def reset_messages(session_id: str) -> dict[str, Any]:
    session = _session_or_404(session_id)
    session.reset_conversation()
    return {"session_id": session_id, "message_count": 0}


@app.get("/traces")
def traces(limit: int = 20) -> dict[str, Any]:
    records = [asdict(record) for record in _trace_store.list_recent(limit=limit)]
    return {"items": records}


@app.get("/traces/{trace_id}")
def trace_detail(trace_id: str) -> dict[str, Any]:
    try:
        record = _trace_store.get(trace_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _trace_store.summary()
