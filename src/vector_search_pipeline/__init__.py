"""
vector_search_pipeline - embed text documents, store them in a vector
index and retrieve the best matches for a free-text query.

Components, leaf-first:
- embeddings: text -> fixed-length vector (OpenAI)
- retrieval: Document model, similarity scoring, pgvector/in-memory stores
- pipelines: IndexingPipeline and RetrievalPipeline
"""

from vector_search_pipeline.config import EmbeddingConfig, PipelineConfig, StoreConfig
from vector_search_pipeline.core import (
    DocumentStore,
    EmbeddingGenerationError,
    EmbeddingProvider,
    InputError,
    SearchResult,
    StoreError,
    VectorSearchError,
)
from vector_search_pipeline.pipelines import (
    BatchResult,
    IndexingPipeline,
    ItemOutcome,
    ItemStatus,
    RetrievalPipeline,
)
from vector_search_pipeline.retrieval import Document

__version__ = "0.1.0"

__all__ = [
    "EmbeddingConfig",
    "PipelineConfig",
    "StoreConfig",
    "DocumentStore",
    "EmbeddingProvider",
    "SearchResult",
    "Document",
    "VectorSearchError",
    "EmbeddingGenerationError",
    "StoreError",
    "InputError",
    "BatchResult",
    "IndexingPipeline",
    "ItemOutcome",
    "ItemStatus",
    "RetrievalPipeline",
]
