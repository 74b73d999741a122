"""
Embeddings module - text embedding generation.

1. Protocol (EmbeddingProvider) defines the interface
2. Production implementation (OpenAIEmbeddings)
3. Test double (MockEmbeddings) for fast testing
4. Factory function (get_embedding_provider)
"""

from vector_search_pipeline.embeddings.openai_embeddings import (
    MODEL_DIMENSIONS,
    OpenAIEmbeddings,
    MockEmbeddings,
    get_embedding_provider,
)
from vector_search_pipeline.core.protocols import EmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "MODEL_DIMENSIONS",
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "get_embedding_provider",
]
