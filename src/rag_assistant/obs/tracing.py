"""Retrieval tracing and latency accounting."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from rag_assistant.types import ScoredChunk


@dataclass(slots=True)
class RetrievalTrace:
    trace_id: str
    timestamp_utc: str
    session_id: str
    query: str
    query_terms: list[str]
    returned: int
    top_score: float
    latency_ms: float


class TraceStore:
    """In-memory trace storage for API-level observability."""

    def __init__(self, max_records: int = 1000) -> None:
        self._records: dict[str, RetrievalTrace] = {}
        self._max_records = max_records

    def create_record(
        self,
        *,
        session_id: str,
        query: str,
        query_terms: list[str],
        results: list[ScoredChunk],
        latency_ms: float,
    ) -> RetrievalTrace:
        record = RetrievalTrace(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            session_id=session_id,
            query=query,
            query_terms=query_terms,
            returned=len(results),
            top_score=results[0].score if results else 0.0,
            latency_ms=latency_ms,
        )
        self._records[record.trace_id] = record
        while len(self._records) > self._max_records:
            del self._records[next(iter(self._records))]
        return record

    def get(self, trace_id: str) -> RetrievalTrace:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def __len__(self) -> int:
        return len(self._records)

    def list_recent(self, limit: int = 20) -> list[RetrievalTrace]:
        if limit <= 0:
            return []
        return list(self._records.values())[-limit:]

    def summary(self) -> dict[str, float | int]:
        """Aggregate retrieval metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_requests": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "zero_hit_ratio": 0.0,
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        # A zero top score means no query term matched any chunk.
        zero_hits = sum(1 for record in records if record.top_score <= 0)

        return {
            "total_requests": total,
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "zero_hit_ratio": zero_hits / total,
        }


class Timer:
    """Simple context timer used around retrieval calls."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
