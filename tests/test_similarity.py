"""
Unit Tests for Similarity Scoring
"""

import numpy as np
import pytest

from vector_search_pipeline.retrieval.similarity import (
    SCORE_OFFSET,
    cosine_similarity,
    similarity_score,
)


class TestCosineSimilarity:
    def test_identical_vectors(self):
        v = np.array([0.3, 0.4, 0.5])

        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity(np.array([1.0, 2.0]), np.array([-1.0, -2.0])) == pytest.approx(-1.0)

    def test_symmetric(self):
        a = np.array([0.2, 0.9, -0.1])
        b = np.array([0.5, -0.3, 0.8])

        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_zero_vector_is_zero_similarity(self):
        assert cosine_similarity(np.zeros(3), np.array([1.0, 2.0, 3.0])) == 0.0
        assert cosine_similarity(np.zeros(3), np.zeros(3)) == 0.0

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError):
            cosine_similarity(np.ones(2), np.ones(3))


class TestSimilarityScore:
    def test_offset(self):
        assert SCORE_OFFSET == 1.0

    def test_exact_match_scores_two(self):
        v = np.array([0.1, 0.7, 0.2], dtype=np.float32)

        assert similarity_score(v, v) == pytest.approx(2.0)

    def test_zero_vector_scores_exactly_one(self):
        assert similarity_score(np.array([0.9, 0.1]), np.zeros(2)) == 1.0

    def test_score_range(self):
        rng = np.random.default_rng(7)
        for _ in range(20):
            a, b = rng.standard_normal(5), rng.standard_normal(5)
            assert 0.0 <= similarity_score(a, b) <= 2.0

    def test_scale_invariant(self):
        query = np.array([0.9, 0.1])
        doc = np.array([1.0, 0.2])

        assert similarity_score(query, doc * 42.0) == pytest.approx(similarity_score(query, doc))
