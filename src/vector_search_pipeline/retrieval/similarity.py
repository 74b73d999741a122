"""
Similarity scoring shared by the document stores.

score = cosine_similarity(query, doc) + 1.0, so scores fall in [0, 2]
and are never negative. Cosine similarity against an all-zero vector is
defined as 0, giving a score of exactly 1.0.
"""

import numpy as np

SCORE_OFFSET = 1.0


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product over the product of magnitudes; 0.0 if either is zero."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Dimension mismatch: {a.shape} vs {b.shape}")

    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0.0:
        return 0.0
    # Clip float error so identical vectors never exceed 1.0
    return float(np.clip(np.dot(a, b) / norm, -1.0, 1.0))


def similarity_score(query: np.ndarray, embedding: np.ndarray) -> float:
    """Shifted cosine similarity used for ranking."""
    return cosine_similarity(query, embedding) + SCORE_OFFSET
