"""Caller-owned session state: loaded chunks plus conversation history."""

from __future__ import annotations

import logging
import threading
import uuid

from rag_assistant.config import RetrievalConfig
from rag_assistant.errors import EmptyKnowledgeBaseError, SessionNotFoundError
from rag_assistant.retrieval.retriever import LexicalRetriever
from rag_assistant.types import ChatMessage, LoadedDocument, Role, ScoredChunk

logger = logging.getLogger(__name__)


class KnowledgeSession:
    """One user's knowledge source and chat transcript.

    The chunk tuple is replaced wholesale when a new document is loaded and is
    never mutated in place, so results handed out earlier stay valid.
    """

    def __init__(
        self,
        session_id: str | None = None,
        *,
        retriever: LexicalRetriever | None = None,
        config: RetrievalConfig | None = None,
    ) -> None:
        self.session_id = session_id or str(uuid.uuid4())
        self.config = config or RetrievalConfig()
        self.retriever = retriever or LexicalRetriever(config=self.config)
        self._document: LoadedDocument | None = None
        self._history: list[ChatMessage] = []

    @property
    def document(self) -> LoadedDocument | None:
        return self._document

    @property
    def chunks(self) -> tuple[str, ...]:
        return self._document.chunks if self._document else ()

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        return tuple(self._history)

    def load(self, document: LoadedDocument) -> None:
        """Replace the knowledge source and start a fresh conversation."""
        self._document = document
        self._history.clear()
        logger.info(
            "Session %s loaded %s (%d chunks)",
            self.session_id,
            document.source,
            len(document.chunks),
        )

    def search(self, query: str, *, top_k: int | None = None) -> list[ScoredChunk]:
        if not self.chunks:
            raise EmptyKnowledgeBaseError(
                "No document loaded; upload a knowledge source before asking questions."
            )
        return self.retriever.rank(query, self.chunks, top_k=top_k)

    def context_chunks(self, query: str) -> list[str]:
        """Chunks to ground a generation call for `query`."""
        return [item.chunk for item in self.search(query, top_k=self.config.context_top_k)]

    def record(self, role: Role, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text)
        self._history.append(message)
        return message

    def reset_conversation(self) -> None:
        self._history.clear()


class SessionStore:
    """In-memory registry of sessions keyed by id. Safe to share across threads."""

    def __init__(self, config: RetrievalConfig | None = None) -> None:
        self._sessions: dict[str, KnowledgeSession] = {}
        self._config = config or RetrievalConfig()
        self._lock = threading.Lock()

    def create(self, session_id: str | None = None) -> KnowledgeSession:
        session = KnowledgeSession(session_id, config=self._config)
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> KnowledgeSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def get_or_create(self, session_id: str) -> KnowledgeSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = KnowledgeSession(session_id, config=self._config)
                self._sessions[session_id] = session
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")

    def __len__(self) -> int:
        return len(self._sessions)
