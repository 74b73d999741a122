"""
End-to-End Smoke Tests

Index a small corpus and query it through both pipelines, sharing one
in-memory store. Embeddings are stubbed with fixed vectors so rankings
are deterministic.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from vector_search_pipeline.embeddings import MockEmbeddings
from vector_search_pipeline.pipelines import IndexingPipeline, RetrievalPipeline
from vector_search_pipeline.retrieval import InMemoryDocumentStore
from vector_search_pipeline.sources import iter_directory


@pytest.fixture
def stub_embeddings():
    vectors = {
        "The cat sat.": [1.0, 0.0],
        "The dog ran.": [0.0, 1.0],
        "feline pet": [0.9, 0.1],
    }
    embeddings = MagicMock()
    embeddings.embed.side_effect = lambda text: np.array(vectors[text], dtype=np.float32)
    return embeddings


class TestCatDogRanking:
    def test_feline_query_ranks_cat_first(self, stub_embeddings):
        store = InMemoryDocumentStore()
        batch = IndexingPipeline(stub_embeddings, store).index([
            ("cat.txt", "The cat sat."),
            ("dog.txt", "The dog ran."),
        ])
        assert batch.all_stored

        results = RetrievalPipeline(stub_embeddings, store).retrieve("feline pet", top_k=2)

        assert [r.identifier for r in results] == ["cat.txt", "dog.txt"]
        assert results[0].score > results[1].score
        assert results[0].content == "The cat sat."

    def test_default_query_returns_single_best_match(self, stub_embeddings):
        store = InMemoryDocumentStore()
        IndexingPipeline(stub_embeddings, store).index([
            ("cat.txt", "The cat sat."),
            ("dog.txt", "The dog ran."),
        ])

        results = RetrievalPipeline(stub_embeddings, store).retrieve("feline pet")

        assert len(results) == 1
        assert results[0].identifier == "cat.txt"


class TestDirectoryRoundTrip:
    def test_index_directory_and_find_each_document(self, tmp_path):
        texts = {
            "a.txt": "Staś lubi grać w piłkę.",
            "b.txt": "Ala ma kota.",
            "c.txt": "Pogoda jest dziś słoneczna.",
        }
        for name, text in texts.items():
            (tmp_path / name).write_text(text, encoding="utf-8")

        embeddings = MockEmbeddings(dimensions=64)
        store = InMemoryDocumentStore()
        batch = IndexingPipeline(embeddings, store).index(iter_directory(tmp_path))

        assert batch.stored_count == 3
        retrieval = RetrievalPipeline(embeddings, store)
        for name, text in texts.items():
            best = retrieval.retrieve(text)[0]
            assert best.identifier == name
            assert best.score == pytest.approx(2.0, abs=1e-5)
