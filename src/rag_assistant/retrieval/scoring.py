"""Relevance scoring strategies."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

_NON_WORD = re.compile(r"\W+")


class Scorer(ABC):
    """Scores one chunk against a query. Higher is more relevant."""

    @abstractmethod
    def score(self, query: str, chunk: str) -> float:
        """Score a single chunk."""

    def score_many(self, query: str, chunks: Sequence[str]) -> list[float]:
        """Score every chunk, preserving input order."""
        return [self.score(query, chunk) for chunk in chunks]


class KeywordOverlapScorer(Scorer):
    """Counts query terms that occur as substrings of the chunk.

    Matching is case-insensitive substring containment, so "admission" also
    matches "readmission". Repeated query terms are counted once per
    occurrence in the query.
    """

    def __init__(self, min_token_length: int = 4) -> None:
        self.min_token_length = min_token_length

    def score(self, query: str, chunk: str) -> int:
        return _count_hits(self.query_terms(query), chunk)

    def score_many(self, query: str, chunks: Sequence[str]) -> list[float]:
        terms = self.query_terms(query)
        return [_count_hits(terms, chunk) for chunk in chunks]

    def query_terms(self, query: str) -> list[str]:
        return [
            token
            for token in _NON_WORD.split(query.lower())
            if len(token) >= self.min_token_length
        ]


def _count_hits(terms: list[str], chunk: str) -> int:
    lowered = chunk.lower()
    return sum(1 for term in terms if term in lowered)
