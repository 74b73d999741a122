"""
Unit Tests for InMemoryDocumentStore and the Document model

PATTERNS:
---------
1. Test through the DocumentStore protocol interface
2. Hand-picked vectors, no embedding provider needed
3. Verify ranking, tie-breaking and top_k bounds
"""

import numpy as np
import pytest

from vector_search_pipeline.core.errors import StoreError
from vector_search_pipeline.core.protocols import DocumentStore, SearchResult
from vector_search_pipeline.retrieval import (
    Document,
    InMemoryDocumentStore,
    PgVectorStore,
    get_document_store,
)


def _doc(identifier, vector, content=None):
    return Document(
        identifier=identifier,
        content=content or f"content of {identifier}",
        embedding=np.array(vector, dtype=np.float32),
    )


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def store_with_docs(store):
    store.put(_doc("cat.txt", [1.0, 0.0], "The cat sat."))
    store.put(_doc("dog.txt", [0.0, 1.0], "The dog ran."))
    store.put(_doc("both.txt", [0.7, 0.7], "Cats and dogs."))
    return store


# ---------------------------------------------------------------------------
# PUT
# ---------------------------------------------------------------------------


class TestPut:
    def test_put_makes_document_searchable(self, store):
        store.put(_doc("a.txt", [1.0, 0.0]))

        results = store.search(np.array([1.0, 0.0]), top_k=5)

        assert [r.identifier for r in results] == ["a.txt"]

    def test_put_overwrites_same_identifier(self, store):
        store.put(_doc("a.txt", [1.0, 0.0], "old"))
        store.put(_doc("a.txt", [0.0, 1.0], "new"))

        assert store.count() == 1
        assert store.get("a.txt").content == "new"

    def test_put_rejects_missing_embedding(self, store):
        with pytest.raises(StoreError) as exc_info:
            store.put(Document(identifier="a.txt", content="text"))

        assert exc_info.value.operation == "put"
        assert exc_info.value.identifier == "a.txt"
        assert store.count() == 0

    def test_put_rejects_empty_embedding(self, store):
        with pytest.raises(StoreError):
            store.put(Document(identifier="a.txt", content="text", embedding=np.array([])))

    def test_stored_copy_is_independent(self, store):
        vector = np.array([1.0, 0.0], dtype=np.float32)
        store.put(Document(identifier="a.txt", content="text", embedding=vector))

        vector[0] = 0.0

        np.testing.assert_array_equal(store.get("a.txt").embedding, [1.0, 0.0])


# ---------------------------------------------------------------------------
# SEARCH
# ---------------------------------------------------------------------------


class TestSearch:
    def test_empty_store_returns_empty_list(self, store):
        assert store.search(np.array([1.0, 0.0]), top_k=5) == []

    def test_exact_embedding_scores_two(self, store_with_docs):
        results = store_with_docs.search(np.array([0.0, 1.0]), top_k=1)

        assert results[0].identifier == "dog.txt"
        assert results[0].score == pytest.approx(2.0, abs=1e-6)

    def test_results_ranked_descending(self, store_with_docs):
        results = store_with_docs.search(np.array([0.9, 0.1]), top_k=3)

        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert results[0].identifier == "cat.txt"
        assert results[-1].identifier == "dog.txt"

    def test_returns_content(self, store_with_docs):
        result = store_with_docs.search(np.array([1.0, 0.0]), top_k=1)[0]

        assert isinstance(result, SearchResult)
        assert result.content == "The cat sat."

    def test_top_k_one_returns_at_most_one(self, store_with_docs):
        assert len(store_with_docs.search(np.array([0.5, 0.5]), top_k=1)) == 1

    def test_top_k_larger_than_store_returns_all(self, store_with_docs):
        results = store_with_docs.search(np.array([0.5, 0.5]), top_k=50)

        assert len(results) == 3

    def test_non_positive_top_k_returns_empty(self, store_with_docs):
        assert store_with_docs.search(np.array([0.5, 0.5]), top_k=0) == []

    def test_ties_broken_by_insertion_order(self, store):
        store.put(_doc("first.txt", [1.0, 0.0]))
        store.put(_doc("second.txt", [2.0, 0.0]))
        store.put(_doc("third.txt", [3.0, 0.0]))

        results = store.search(np.array([1.0, 0.0]), top_k=3)

        assert [r.identifier for r in results] == ["first.txt", "second.txt", "third.txt"]

    def test_overwrite_keeps_insertion_position(self, store):
        store.put(_doc("first.txt", [1.0, 0.0]))
        store.put(_doc("second.txt", [1.0, 0.0]))
        store.put(_doc("first.txt", [1.0, 0.0], "rewritten"))

        results = store.search(np.array([1.0, 0.0]), top_k=2)

        assert [r.identifier for r in results] == ["first.txt", "second.txt"]

    def test_zero_embedding_scores_one(self, store):
        store.put(_doc("zero.txt", [0.0, 0.0]))

        results = store.search(np.array([0.3, 0.7]), top_k=1)

        assert results[0].score == 1.0

    def test_scaling_stored_embedding_keeps_rank(self, store):
        query = np.array([0.9, 0.1])
        store.put(_doc("a.txt", [1.0, 0.1]))
        store.put(_doc("b.txt", [0.2, 1.0]))
        baseline = [r.identifier for r in store.search(query, top_k=2)]

        scaled = InMemoryDocumentStore()
        scaled.put(_doc("a.txt", [100.0, 10.0]))
        scaled.put(_doc("b.txt", [0.2, 1.0]))

        assert [r.identifier for r in scaled.search(query, top_k=2)] == baseline

    def test_dimension_mismatch_raises_store_error(self, store_with_docs):
        with pytest.raises(StoreError) as exc_info:
            store_with_docs.search(np.array([1.0, 0.0, 0.0]), top_k=1)

        assert exc_info.value.operation == "search"


# ---------------------------------------------------------------------------
# DOCUMENT MODEL
# ---------------------------------------------------------------------------


class TestDocument:
    def test_default_embedding_is_none(self):
        doc = Document(identifier="a.txt", content="text")

        assert doc.embedding is None
        assert not doc.has_embedding

    def test_has_embedding(self):
        assert _doc("a.txt", [0.1]).has_embedding


# ---------------------------------------------------------------------------
# FACTORY + PROTOCOL
# ---------------------------------------------------------------------------


class TestGetDocumentStore:
    def test_in_memory_by_default(self):
        assert isinstance(get_document_store(), InMemoryDocumentStore)

    def test_postgres_when_requested(self):
        store = get_document_store(use_postgres=True)

        assert isinstance(store, PgVectorStore)
        assert store._conn is None  # connects lazily

    def test_in_memory_satisfies_protocol(self):
        assert isinstance(InMemoryDocumentStore(), DocumentStore)
