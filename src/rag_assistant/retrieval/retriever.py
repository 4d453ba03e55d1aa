"""Top-k retriever over an in-memory chunk sequence."""

from __future__ import annotations

from collections.abc import Sequence

from rag_assistant.config import RetrievalConfig
from rag_assistant.retrieval.scoring import KeywordOverlapScorer, Scorer
from rag_assistant.types import ScoredChunk


class LexicalRetriever:
    """Ranks chunks with a pluggable `Scorer` and keeps the best `top_k`.

    Sorting is stable: chunks with equal scores keep their input order, so an
    identical query always yields an identical result.
    """

    def __init__(
        self,
        scorer: Scorer | None = None,
        config: RetrievalConfig | None = None,
    ) -> None:
        self.config = config or RetrievalConfig()
        self.scorer = scorer or KeywordOverlapScorer(self.config.min_token_length)

    def rank(
        self,
        query: str,
        chunks: Sequence[str],
        *,
        top_k: int | None = None,
    ) -> list[ScoredChunk]:
        limit = self.config.top_k if top_k is None else top_k
        if limit <= 0 or not chunks:
            return []

        scores = self.scorer.score_many(query, chunks)
        scored = [
            ScoredChunk(chunk=chunk, score=score, index=i)
            for i, (chunk, score) in enumerate(zip(chunks, scores, strict=True))
        ]
        ranked = sorted(scored, key=lambda item: item.score, reverse=True)
        return [
            ScoredChunk(chunk=item.chunk, score=item.score, index=item.index, rank=i + 1)
            for i, item in enumerate(ranked[:limit])
        ]

    def retrieve(
        self,
        query: str,
        chunks: Sequence[str],
        *,
        top_k: int | None = None,
    ) -> list[str]:
        return [item.chunk for item in self.rank(query, chunks, top_k=top_k)]


_default_retriever = LexicalRetriever()


def retrieve(query: str, chunks: Sequence[str], top_k: int = 3) -> list[str]:
    """Return up to `top_k` chunks ordered by keyword overlap with `query`."""

    return _default_retriever.retrieve(query, chunks, top_k=top_k)
