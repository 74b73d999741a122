"""
Core protocols defining contracts between the pipelines and infrastructure.

PATTERN:
- Protocol defines the contract
- Production implementation (OpenAIEmbeddings, PgVectorStore)
- Test double (MockEmbeddings, InMemoryDocumentStore)
- Factory function for instantiation

Both pipelines depend only on these protocols, so they agree on the
document schema without depending on each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from vector_search_pipeline.retrieval.document import Document


# ---------------------------------------------------------------------------
# EMBEDDING PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    Implementations:
    - OpenAIEmbeddings (production)
    - MockEmbeddings (testing)

    Failures are raised as EmbeddingGenerationError.
    """

    @property
    def dimensions(self) -> int:
        """Length of every vector this provider returns."""
        ...

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


# ---------------------------------------------------------------------------
# DOCUMENT STORE PROTOCOL
# ---------------------------------------------------------------------------


@dataclass
class SearchResult:
    """A stored document ranked against a query vector."""
    identifier: str
    score: float  # cosine similarity + 1.0, in [0, 2]
    content: str

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "score": self.score,
            "content": self.content,
        }


@runtime_checkable
class DocumentStore(Protocol):
    """
    Contract for vector similarity storage.

    Implementations:
    - PgVectorStore (production with PostgreSQL)
    - InMemoryDocumentStore (testing/development)

    Failures are raised as StoreError.
    """

    def connect(self) -> None:
        """Establish connection to the store."""
        ...

    def close(self) -> None:
        """Close connection to the store."""
        ...

    def put(self, document: Document) -> None:
        """Insert or overwrite a document under its identifier."""
        ...

    def search(self, query_vector: np.ndarray, top_k: int = 1) -> list[SearchResult]:
        """Return up to top_k documents ranked by shifted cosine similarity."""
        ...

    def count(self) -> int:
        """Number of stored documents."""
        ...
