"""
Document model for the retrieval system.

Single responsibility: define the record persisted by document stores.
The schema {identifier, embedding, content} is shared by the indexing
and retrieval pipelines.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class Document:
    """
    A text with its embedding, stored once and never mutated.

    identifier is the external key (usually the source file name).
    embedding dimension order must match the provider that produced it.
    """
    identifier: str
    content: str
    embedding: np.ndarray | None = None

    @property
    def has_embedding(self) -> bool:
        """True when a non-empty vector is attached."""
        return self.embedding is not None and np.asarray(self.embedding).size > 0
