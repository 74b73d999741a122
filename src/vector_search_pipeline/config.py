"""
Pipeline configuration loaded from environment variables.

Every component receives its configuration explicitly through its
constructor. Nothing in the core reads the environment on its own;
only the from_env() classmethods do, and only the CLI calls them.

Environment Variables:
    OPENAI_API_KEY: Bearer credential for the embedding service
    EMBEDDING_MODEL: Embedding model (default: text-embedding-ada-002)
    OPENAI_BASE_URL: Alternative OpenAI-compatible endpoint (optional)
    EMBEDDING_TIMEOUT: Per-request timeout in seconds (default: 30)
    EMBEDDING_MAX_RETRIES: Retries with exponential backoff (default: 2)
    DATABASE_URL: PostgreSQL connection string
    VECTOR_TABLE: Table holding the documents (default: my_vector_index)
    EMBEDDING_DIM: Vector column dimensionality (default: 1536)
    DATABASE_SSLMODE: libpq sslmode (default: verify-full)
    DATABASE_CONNECT_TIMEOUT: Connection timeout in seconds (default: 10)
    DATABASE_STATEMENT_TIMEOUT: Per-statement timeout in ms, 0 disables (default: 30000)
    USE_MOCK_EMBEDDINGS: Use deterministic offline embeddings (default: false)
    USE_POSTGRES: Use the pgvector store instead of memory (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_EMBEDDING_MODEL = "text-embedding-ada-002"
DEFAULT_TABLE_NAME = "my_vector_index"
DEFAULT_EMBEDDING_DIM = 1536


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass
class EmbeddingConfig:
    """Settings for the remote embedding service."""

    model: str = DEFAULT_EMBEDDING_MODEL
    api_key: str | None = field(default=None, repr=False)
    base_url: str | None = None
    timeout: float = 30.0
    max_retries: int = 2

    @classmethod
    def from_env(cls) -> "EmbeddingConfig":
        return cls(
            model=os.environ.get("EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL),
            api_key=os.environ.get("OPENAI_API_KEY") or None,
            base_url=os.environ.get("OPENAI_BASE_URL") or None,
            timeout=float(os.environ.get("EMBEDDING_TIMEOUT", "30")),
            max_retries=int(os.environ.get("EMBEDDING_MAX_RETRIES", "2")),
        )


@dataclass
class StoreConfig:
    """
    Settings for the pgvector document store.

    sslmode defaults to verify-full: the server certificate is always
    checked unless a weaker mode is configured explicitly.
    """

    connection_string: str = field(default="postgresql://localhost/vector_search", repr=False)
    table_name: str = DEFAULT_TABLE_NAME
    embedding_dim: int = DEFAULT_EMBEDDING_DIM
    sslmode: str = "verify-full"
    sslrootcert: str | None = None
    connect_timeout: int = 10
    statement_timeout_ms: int = 30000

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            connection_string=os.environ.get(
                "DATABASE_URL", "postgresql://localhost/vector_search"
            ),
            table_name=os.environ.get("VECTOR_TABLE", DEFAULT_TABLE_NAME),
            embedding_dim=int(os.environ.get("EMBEDDING_DIM", str(DEFAULT_EMBEDDING_DIM))),
            sslmode=os.environ.get("DATABASE_SSLMODE", "verify-full"),
            sslrootcert=os.environ.get("DATABASE_SSLROOTCERT") or None,
            connect_timeout=int(os.environ.get("DATABASE_CONNECT_TIMEOUT", "10")),
            statement_timeout_ms=int(os.environ.get("DATABASE_STATEMENT_TIMEOUT", "30000")),
        )


@dataclass
class PipelineConfig:
    """Top-level configuration bundle handed to the factories."""

    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    use_mock_embeddings: bool = False
    use_postgres: bool = True

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        return cls(
            embedding=EmbeddingConfig.from_env(),
            store=StoreConfig.from_env(),
            use_mock_embeddings=_env_flag("USE_MOCK_EMBEDDINGS", "false"),
            use_postgres=_env_flag("USE_POSTGRES", "true"),
        )
