"""
Core module - shared protocols, result types and errors.

USAGE:
------
from vector_search_pipeline.core import DocumentStore, EmbeddingProvider

class MyDocumentStore:
    '''Implements DocumentStore protocol.'''
    ...
"""

from vector_search_pipeline.core.errors import (
    VectorSearchError,
    EmbeddingGenerationError,
    StoreError,
    InputError,
)
from vector_search_pipeline.core.protocols import (
    # Protocols
    EmbeddingProvider,
    DocumentStore,
    # Data classes
    SearchResult,
)

__all__ = [
    # Errors
    "VectorSearchError",
    "EmbeddingGenerationError",
    "StoreError",
    "InputError",
    # Protocols
    "EmbeddingProvider",
    "DocumentStore",
    # Data classes
    "SearchResult",
]
