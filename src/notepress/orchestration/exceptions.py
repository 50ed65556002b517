"""Exceptions for the orchestration module."""

from notepress.exceptions import NotepressError


class OrchestrationError(NotepressError):
    """Base exception for orchestration errors."""


class DocumentNotFoundError(OrchestrationError):
    """Raised when a requested document is not part of the corpus."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}")
