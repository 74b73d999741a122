"""
Retrieval module - document persistence and vector similarity search.

This module provides:
- Document: The persisted record
- PgVectorStore: PostgreSQL production store
- InMemoryDocumentStore: Testing/development store
- get_document_store(): Factory function
- cosine_similarity / similarity_score: Shared scoring
"""

from vector_search_pipeline.retrieval.document import Document
from vector_search_pipeline.retrieval.similarity import (
    SCORE_OFFSET,
    cosine_similarity,
    similarity_score,
)
from vector_search_pipeline.retrieval.store import (
    PgVectorStore,
    InMemoryDocumentStore,
    get_document_store,
)

__all__ = [
    # Document
    "Document",
    # Scoring
    "SCORE_OFFSET",
    "cosine_similarity",
    "similarity_score",
    # Implementations
    "PgVectorStore",
    "InMemoryDocumentStore",
    # Factory
    "get_document_store",
]
