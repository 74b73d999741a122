"""
Retrieval Pipeline - embed a free-text query and rank stored documents.

Unlike indexing there is only one item in flight, so any failure aborts
the query: EmbeddingGenerationError and StoreError propagate to the
caller and no partial results are returned.
"""

from __future__ import annotations

import logging

from vector_search_pipeline.core.errors import EmbeddingGenerationError
from vector_search_pipeline.core.protocols import (
    DocumentStore,
    EmbeddingProvider,
    SearchResult,
)
from vector_search_pipeline.observability import get_config, get_tracer
from vector_search_pipeline.observability.attributes import PIPELINE_QUERY, STORE_TOP_K

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 1


class RetrievalPipeline:
    """Orchestrates Embedding Client -> Document Store search."""

    def __init__(self, embeddings: EmbeddingProvider, store: DocumentStore):
        self._embeddings = embeddings
        self._store = store

    def retrieve(self, query: str, top_k: int = DEFAULT_TOP_K) -> list[SearchResult]:
        """
        Return up to top_k stored documents ranked by score descending.

        Raises:
            EmbeddingGenerationError: the query could not be embedded
            StoreError: the similarity search failed
        """
        tracer = get_tracer()
        with tracer.start_span("pipeline.retrieve", attributes={STORE_TOP_K: top_k}) as span:
            if get_config().capture_content:
                span.set_attribute(PIPELINE_QUERY, query)

            query_vector = self._embeddings.embed(query)
            if query_vector is None or len(query_vector) == 0:
                raise EmbeddingGenerationError("Embedding service returned an empty vector")

            results = self._store.search(query_vector, top_k=top_k)

        logger.debug(f"Query matched {len(results)} documents (top_k={top_k})")
        return results
