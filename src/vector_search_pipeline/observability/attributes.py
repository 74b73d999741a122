"""
Semantic Conventions for Span Attributes

GenAI keys follow the OpenTelemetry GenAI conventions; the store and
pipeline namespaces are local.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

from typing import Any

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

GEN_AI_SYSTEM = "gen_ai.system"
GEN_AI_OPERATION_NAME = "gen_ai.operation.name"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"

# ---------------------------------------------------------------------------
# STORE NAMESPACE
# ---------------------------------------------------------------------------

STORE_BACKEND = "store.backend"  # "pgvector", "memory"
STORE_OPERATION = "store.operation"  # "put", "search"
STORE_TABLE = "store.table"
STORE_DOCUMENT_ID = "store.document.id"
STORE_TOP_K = "store.search.top_k"
STORE_RESULT_COUNT = "store.search.result_count"

# ---------------------------------------------------------------------------
# PIPELINE NAMESPACE
# ---------------------------------------------------------------------------

PIPELINE_ITEM_COUNT = "pipeline.items.total"
PIPELINE_STORED_COUNT = "pipeline.items.stored"
PIPELINE_FAILED_COUNT = "pipeline.items.failed"
PIPELINE_QUERY = "pipeline.query"


def embedding_attributes(model: str, input_count: int) -> dict[str, Any]:
    return {
        GEN_AI_SYSTEM: "openai",
        GEN_AI_OPERATION_NAME: "embeddings",
        GEN_AI_REQUEST_MODEL: model,
        "embedding.input_count": input_count,
    }


def store_attributes(
    backend: str,
    operation: str,
    table: str | None = None,
    identifier: str | None = None,
    top_k: int | None = None,
) -> dict[str, Any]:
    """Build attributes for a store span, omitting unset values."""
    attrs: dict[str, Any] = {
        STORE_BACKEND: backend,
        STORE_OPERATION: operation,
    }
    if table is not None:
        attrs[STORE_TABLE] = table
    if identifier is not None:
        attrs[STORE_DOCUMENT_ID] = identifier
    if top_k is not None:
        attrs[STORE_TOP_K] = top_k
    return attrs
