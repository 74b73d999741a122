"""
Pipelines - orchestration over the embedding provider and document store.

IndexingPipeline and RetrievalPipeline do not depend on each other; they
share only the Document schema and the core protocols.
"""

from vector_search_pipeline.pipelines.indexing import (
    ItemStatus,
    ItemOutcome,
    BatchResult,
    IndexingPipeline,
)
from vector_search_pipeline.pipelines.retrieval import (
    DEFAULT_TOP_K,
    RetrievalPipeline,
)

__all__ = [
    "ItemStatus",
    "ItemOutcome",
    "BatchResult",
    "IndexingPipeline",
    "DEFAULT_TOP_K",
    "RetrievalPipeline",
]
