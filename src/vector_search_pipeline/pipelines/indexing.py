"""
Indexing Pipeline - embed each source text and persist it as a Document.

Per-item state machine:

    PENDING -> EMBEDDED -> STORED
        \\          \\
         -> FAILED    -> FAILED

Failures are isolated: an unreadable source, an embedding failure or a
rejected insert marks only that item FAILED and the batch moves on.
There is no rollback; a batch that ends with some items STORED and some
FAILED is a normal result. Callers inspect the returned BatchResult
instead of parsing log output.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

from vector_search_pipeline.core.errors import (
    EmbeddingGenerationError,
    InputError,
    StoreError,
)
from vector_search_pipeline.core.protocols import DocumentStore, EmbeddingProvider
from vector_search_pipeline.observability import get_tracer
from vector_search_pipeline.observability.attributes import (
    PIPELINE_FAILED_COUNT,
    PIPELINE_ITEM_COUNT,
    PIPELINE_STORED_COUNT,
)
from vector_search_pipeline.retrieval.document import Document
from vector_search_pipeline.sources import SourceDocument

logger = logging.getLogger(__name__)

SourceItem = Union[SourceDocument, tuple[str, str]]


class ItemStatus(str, Enum):
    PENDING = "pending"
    EMBEDDED = "embedded"
    STORED = "stored"
    FAILED = "failed"


@dataclass
class ItemOutcome:
    """Terminal state of one input item."""
    identifier: str
    status: ItemStatus
    stage: str | None = None  # "read", "embed" or "store" when FAILED
    error_type: str | None = None
    error_message: str | None = None

    @property
    def stored(self) -> bool:
        return self.status is ItemStatus.STORED

    @property
    def reason(self) -> str | None:
        """Human-readable failure reason, or None when stored."""
        if self.error_type is None:
            return None
        return f"{self.error_type}: {self.error_message}"


@dataclass
class BatchResult:
    """Outcomes of one indexing run, in input order."""
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def stored(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status is ItemStatus.STORED]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status is ItemStatus.FAILED]

    @property
    def stored_count(self) -> int:
        return len(self.stored)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def all_stored(self) -> bool:
        return self.failed_count == 0

    def __iter__(self):
        return iter(self.outcomes)


def _item_identifier(item: object) -> str:
    if isinstance(item, SourceDocument):
        return item.identifier
    if isinstance(item, (tuple, list)) and item:
        return str(item[0])
    return repr(item)


def _as_source(item: SourceItem) -> SourceDocument:
    if isinstance(item, SourceDocument):
        return item
    try:
        identifier, text = item
    except (TypeError, ValueError) as e:
        raise InputError(
            "Expected an (identifier, text) pair", identifier=_item_identifier(item), cause=e
        ) from e
    return SourceDocument(identifier=str(identifier), text=text)


class IndexingPipeline:
    """
    Orchestrates Embedding Client -> Document Store for a batch of texts.

    Items are processed one at a time by default. With max_workers > 1
    they are fanned out over a bounded thread pool; each item still fails
    on its own and outcomes keep input order.
    """

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        store: DocumentStore,
        max_workers: int = 1,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._embeddings = embeddings
        self._store = store
        self.max_workers = max_workers

    def index_one(self, item: SourceItem) -> ItemOutcome:
        """Run one item through the state machine; failures come back as FAILED."""
        identifier = _item_identifier(item)
        status = ItemStatus.PENDING
        stage = "read"

        try:
            text = _as_source(item).read()

            stage = "embed"
            vector = self._embeddings.embed(text)
            if vector is None or len(vector) == 0:
                raise EmbeddingGenerationError("Embedding service returned an empty vector")
            status = ItemStatus.EMBEDDED

            stage = "store"
            self._store.put(Document(identifier=identifier, content=text, embedding=vector))
            status = ItemStatus.STORED
        except (InputError, EmbeddingGenerationError, StoreError) as e:
            logger.error(f"Failed to index {identifier} at {stage} (state {status.value}): {e}")
            return ItemOutcome(
                identifier=identifier,
                status=ItemStatus.FAILED,
                stage=stage,
                error_type=type(e).__name__,
                error_message=str(e),
            )

        logger.info(f"Indexed document: {identifier}")
        return ItemOutcome(identifier=identifier, status=status)

    def index(self, items: Iterable[SourceItem]) -> BatchResult:
        """Index every item and report per-item outcomes."""
        tracer = get_tracer()
        with tracer.start_span("pipeline.index") as span:
            if self.max_workers == 1:
                outcomes = [self.index_one(item) for item in items]
            else:
                with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                    outcomes = list(pool.map(self.index_one, list(items)))

            result = BatchResult(outcomes=outcomes)
            span.set_attribute(PIPELINE_ITEM_COUNT, result.total)
            span.set_attribute(PIPELINE_STORED_COUNT, result.stored_count)
            span.set_attribute(PIPELINE_FAILED_COUNT, result.failed_count)

        logger.info(
            f"Indexing finished: {result.stored_count} stored, "
            f"{result.failed_count} failed of {result.total}"
        )
        return result


__all__ = [
    "ItemStatus",
    "ItemOutcome",
    "BatchResult",
    "IndexingPipeline",
]
