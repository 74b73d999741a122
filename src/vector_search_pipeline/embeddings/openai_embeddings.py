"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert text to a fixed-length vector.
- No database logic, no document handling
- Easy to swap for different embedding providers

Failures of any kind (network, authentication, rate limit, timeout,
malformed or empty payload) surface as EmbeddingGenerationError with the
original exception on `cause`. Retries with exponential backoff and the
per-request timeout are delegated to the openai client.
"""

from __future__ import annotations

import hashlib
import logging

import numpy as np
from openai import OpenAI, OpenAIError

from vector_search_pipeline.config import EmbeddingConfig
from vector_search_pipeline.core.errors import EmbeddingGenerationError
from vector_search_pipeline.core.protocols import EmbeddingProvider
from vector_search_pipeline.observability import get_tracer
from vector_search_pipeline.observability.attributes import embedding_attributes

logger = logging.getLogger(__name__)

MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddings:
    """
    OpenAI-based embedding provider.

    Uses text-embedding-ada-002 by default (1536 dimensions).
    """

    def __init__(
        self,
        config: EmbeddingConfig | None = None,
        client: OpenAI | None = None,
    ):
        self.config = config or EmbeddingConfig()
        self.model = self.config.model
        if client is not None:
            self._client = client
            return
        try:
            self._client = OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=self.config.max_retries,
            )
        except OpenAIError as e:
            # Raised by the SDK when no API key is configured
            raise EmbeddingGenerationError("Could not create OpenAI client", cause=e) from e

    @property
    def dimensions(self) -> int:
        """Return embedding dimensions for the model."""
        return MODEL_DIMENSIONS.get(self.model, 1536)

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        if not text or not text.strip():
            raise EmbeddingGenerationError("Cannot embed empty text")

        tracer = get_tracer()
        with tracer.start_span(
            "embedding.embed", attributes=embedding_attributes(self.model, 1)
        ) as span:
            try:
                response = self._client.embeddings.create(input=text, model=self.model)
                vector = np.asarray(response.data[0].embedding, dtype=np.float32)
            except OpenAIError as e:
                span.record_exception(e)
                span.set_status("error", str(e))
                raise EmbeddingGenerationError(
                    f"Embedding request to {self.model} failed", cause=e
                ) from e
            except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
                span.set_status("error", "malformed response")
                raise EmbeddingGenerationError(
                    "Malformed embedding response", cause=e
                ) from e

            if vector.ndim != 1 or vector.size == 0:
                span.set_status("error", "empty embedding")
                raise EmbeddingGenerationError("Embedding service returned an empty vector")

            span.set_attribute("embedding.dimensions", int(vector.size))
            span.set_status("ok")
        return vector

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts in one request."""
        if not texts:
            return []
        if any(not t or not t.strip() for t in texts):
            raise EmbeddingGenerationError("Cannot embed empty text")

        try:
            response = self._client.embeddings.create(input=texts, model=self.model)
            vectors = [
                np.asarray(item.embedding, dtype=np.float32)
                for item in response.data
            ]
        except OpenAIError as e:
            raise EmbeddingGenerationError(
                f"Batch embedding request to {self.model} failed", cause=e
            ) from e
        except (AttributeError, TypeError, ValueError) as e:
            raise EmbeddingGenerationError("Malformed embedding response", cause=e) from e

        if len(vectors) != len(texts) or any(v.size == 0 for v in vectors):
            raise EmbeddingGenerationError(
                f"Expected {len(texts)} embeddings, got {len(vectors)} usable"
            )
        logger.debug(f"Embedded batch of {len(texts)} texts with {self.model}")
        return vectors


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Generates deterministic pseudo-embeddings seeded from text hashes.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = 1536):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str) -> np.ndarray:
        """Generate deterministic pseudo-embedding from text hash."""
        if not text or not text.strip():
            raise EmbeddingGenerationError("Cannot embed empty text")
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:8], "big")
        rng = np.random.default_rng(seed)
        vector = rng.standard_normal(self._dimensions).astype(np.float32)
        return vector / np.linalg.norm(vector)

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        return [self.embed(text) for text in texts]


def get_embedding_provider(
    config: EmbeddingConfig | None = None,
    use_mock: bool = False,
    dimensions: int | None = None,
) -> EmbeddingProvider:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        config: Embedding service settings (defaults if not provided)
        use_mock: If True, return MockEmbeddings (for testing)
        dimensions: Mock vector length; defaults to the configured model's
    """
    config = config or EmbeddingConfig()
    if use_mock:
        return MockEmbeddings(dimensions or MODEL_DIMENSIONS.get(config.model, 1536))
    return OpenAIEmbeddings(config)
