"""LangChain adapters for generation collaborators."""

from __future__ import annotations

from typing import Any

from langchain_core.documents import Document
from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from rag_assistant.session import KnowledgeSession
from rag_assistant.types import ScoredChunk


class SearchToolInput(BaseModel):
    query: str = Field(min_length=1)
    top_k: int = Field(default=5, ge=1, le=20)


def to_documents(results: list[ScoredChunk], *, source: str) -> list[Document]:
    return [
        Document(
            page_content=item.chunk,
            metadata={
                "source": source,
                "chunk_id": chunk_id(item.index),
                "chunk_index": item.index,
                "score": item.score,
                "rank": item.rank,
            },
        )
        for item in results
    ]


def build_search_tool(session: KnowledgeSession) -> StructuredTool:
    """Expose `session.search` as a tool returning cited chunk lines."""

    def _search(**kwargs: Any) -> str:
        input_data = SearchToolInput.model_validate(kwargs)
        hits = session.search(input_data.query, top_k=input_data.top_k)
        lines = []
        for hit in hits:
            snippet = _truncate(hit.chunk.replace("\n", " "), 220)
            lines.append(f"[{chunk_id(hit.index)}] score={hit.score:g} {snippet}")
        if not lines:
            return "NO_RESULTS"
        return "\n".join(lines)

    return StructuredTool.from_function(
        name="document_search",
        description="Search the uploaded knowledge source and return cited chunks.",
        args_schema=SearchToolInput,
        func=_search,
    )


def chunk_id(index: int) -> str:
    return f"chunk-{index:04d}"


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
