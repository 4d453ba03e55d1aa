"""Exceptions raised by the ingestion, session and API layers.

The chunker and retriever themselves never raise; these cover file handling
and session lookups around them.
"""

from __future__ import annotations


class RagAssistantError(Exception):
    """Base class for all assistant errors."""


class UnsupportedDocumentError(RagAssistantError, ValueError):
    """The uploaded document cannot be turned into text."""


class EmptyKnowledgeBaseError(RagAssistantError, LookupError):
    """A search was attempted before any document was loaded."""


class SessionNotFoundError(RagAssistantError, KeyError):
    """No session exists for the requested id."""
