"""
Error taxonomy for indexing and retrieval.

EmbeddingGenerationError - the embedding service failed or returned nothing usable
StoreError               - an insert or search against the backing index failed
InputError               - a source document could not be read

During indexing all three are per-item failures: the item is reported and
the batch continues. During retrieval they abort the query.
"""

from __future__ import annotations


class VectorSearchError(Exception):
    """Base class. Keeps the underlying exception on `cause`."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}: {type(self.cause).__name__}: {self.cause}"
        return message


class EmbeddingGenerationError(VectorSearchError):
    """Remote embedding call failed or returned an empty vector."""


class StoreError(VectorSearchError):
    """Backing index rejected an operation."""

    def __init__(
        self,
        message: str,
        operation: str,
        identifier: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.operation = operation  # "put" or "search"
        self.identifier = identifier


class InputError(VectorSearchError):
    """Source item was unreadable or malformed."""

    def __init__(self, message: str, identifier: str, cause: BaseException | None = None):
        super().__init__(message, cause)
        self.identifier = identifier
