"""
Document store implementations.

Pattern: Protocol -> Production impl -> Test double -> Factory

This module contains:
1. PgVectorStore - PostgreSQL with pgvector (production)
2. InMemoryDocumentStore - In-memory store (testing/development)
3. get_document_store() - Factory function

Both stores score with cosine similarity shifted by +1.0, rank by score
descending and break ties by insertion order. Overwriting an identifier
keeps its original insertion position.
"""

from __future__ import annotations

import itertools
import logging
import threading

import numpy as np
import psycopg
from pgvector.psycopg import register_vector
from psycopg import sql

from vector_search_pipeline.config import StoreConfig
from vector_search_pipeline.core.errors import StoreError
from vector_search_pipeline.core.protocols import DocumentStore, SearchResult
from vector_search_pipeline.observability import get_tracer
from vector_search_pipeline.observability.attributes import (
    STORE_RESULT_COUNT,
    store_attributes,
)
from vector_search_pipeline.retrieval.document import Document
from vector_search_pipeline.retrieval.similarity import similarity_score

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# PGVECTOR STORE (Production)
# ---------------------------------------------------------------------------


class PgVectorStore:
    """
    PostgreSQL document store using pgvector.

    Configuration is INJECTED, not read from the environment here.

    Consistency: the connection runs in autocommit mode, so a document
    written by put() is visible to the next search() on any connection.

    Search is an exact scan ordered by score. The HNSW index created by
    create_schema() serves ad-hoc nearest-neighbour queries on the same
    table but is not used for the tie-broken ordering.
    """

    backend = "pgvector"

    def __init__(self, config: StoreConfig):
        self.config = config
        self._conn: psycopg.Connection | None = None
        self._table = sql.Identifier(config.table_name)

    def __enter__(self) -> "PgVectorStore":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def connect(self) -> None:
        """Establish database connection."""
        if self._conn is not None:
            return

        options = {
            "sslmode": self.config.sslmode,
            "connect_timeout": self.config.connect_timeout,
        }
        if self.config.sslrootcert:
            options["sslrootcert"] = self.config.sslrootcert
        if self.config.statement_timeout_ms > 0:
            options["options"] = f"-c statement_timeout={self.config.statement_timeout_ms}"

        try:
            conn = psycopg.connect(self.config.connection_string, autocommit=True, **options)
            conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
            register_vector(conn)
        except psycopg.Error as e:
            raise StoreError("Could not connect to PostgreSQL", operation="connect", cause=e) from e

        self._conn = conn
        logger.info(f"Connected to pgvector store (table={self.config.table_name})")

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def _connection(self) -> psycopg.Connection:
        if self._conn is None:
            self.connect()
        return self._conn

    def create_schema(self) -> None:
        """Create the documents table and its cosine HNSW index."""
        conn = self._connection()
        try:
            conn.execute(
                sql.SQL(
                    f"""
                    CREATE TABLE IF NOT EXISTS {{table}} (
                        identifier TEXT PRIMARY KEY,
                        content TEXT NOT NULL,
                        embedding vector({int(self.config.embedding_dim)}) NOT NULL,
                        seq BIGSERIAL
                    )
                    """
                ).format(table=self._table)
            )
            conn.execute(
                sql.SQL(
                    """
                    CREATE INDEX IF NOT EXISTS {index}
                    ON {table}
                    USING hnsw (embedding vector_cosine_ops)
                    """
                ).format(
                    index=sql.Identifier(f"{self.config.table_name}_embedding_idx"),
                    table=self._table,
                )
            )
        except psycopg.Error as e:
            raise StoreError("Could not create schema", operation="create_schema", cause=e) from e

    def put(self, document: Document) -> None:
        """Insert a document, overwriting any existing row with the same identifier."""
        if not document.has_embedding:
            raise StoreError(
                "Refusing to store a document without an embedding",
                operation="put",
                identifier=document.identifier,
            )
        embedding = np.asarray(document.embedding, dtype=np.float32)
        if embedding.size != self.config.embedding_dim:
            raise StoreError(
                f"Expected {self.config.embedding_dim} dimensions, got {embedding.size}",
                operation="put",
                identifier=document.identifier,
            )

        tracer = get_tracer()
        with tracer.start_span(
            "store.put",
            attributes=store_attributes(
                self.backend, "put", self.config.table_name, identifier=document.identifier
            ),
        ) as span:
            try:
                self._connection().execute(
                    sql.SQL(
                        """
                        INSERT INTO {table} (identifier, content, embedding)
                        VALUES (%s, %s, %s)
                        ON CONFLICT (identifier) DO UPDATE SET
                            content = EXCLUDED.content,
                            embedding = EXCLUDED.embedding
                        """
                    ).format(table=self._table),
                    (document.identifier, document.content, embedding),
                )
            except psycopg.Error as e:
                span.record_exception(e)
                span.set_status("error", str(e))
                raise StoreError(
                    f"Insert failed for {document.identifier}",
                    operation="put",
                    identifier=document.identifier,
                    cause=e,
                ) from e
            span.set_status("ok")

    def search(self, query_vector: np.ndarray, top_k: int = 1) -> list[SearchResult]:
        """Rank all stored documents against query_vector."""
        if top_k <= 0:
            return []

        query = np.asarray(query_vector, dtype=np.float32)
        tracer = get_tracer()
        with tracer.start_span(
            "store.search",
            attributes=store_attributes(self.backend, "search", self.config.table_name, top_k=top_k),
        ) as span:
            try:
                # <=> is cosine distance; it is NaN when either vector is all-zero
                rows = self._connection().execute(
                    sql.SQL(
                        """
                        SELECT identifier, content,
                               CASE WHEN distance = 'NaN'::float8 THEN 1.0
                                    ELSE 2.0 - distance
                               END AS score
                        FROM (
                            SELECT identifier, content, seq,
                                   embedding <=> %s AS distance
                            FROM {table}
                        ) AS scored
                        ORDER BY score DESC, seq ASC
                        LIMIT %s
                        """
                    ).format(table=self._table),
                    (query, top_k),
                ).fetchall()
            except psycopg.Error as e:
                span.record_exception(e)
                span.set_status("error", str(e))
                raise StoreError("Similarity search failed", operation="search", cause=e) from e

            span.set_attribute(STORE_RESULT_COUNT, len(rows))
            span.set_status("ok")

        return [
            SearchResult(identifier=row[0], content=row[1], score=float(row[2]))
            for row in rows
        ]

    def count(self) -> int:
        try:
            row = self._connection().execute(
                sql.SQL("SELECT count(*) FROM {table}").format(table=self._table)
            ).fetchone()
        except psycopg.Error as e:
            raise StoreError("Count failed", operation="count", cause=e) from e
        return int(row[0]) if row else 0


# ---------------------------------------------------------------------------
# IN-MEMORY STORE (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryDocumentStore:
    """
    In-memory document store for development/testing.

    Implements the same interface as PgVectorStore but doesn't require
    Postgres. Writes are visible immediately.
    """

    backend = "memory"

    def __init__(self):
        self._documents: dict[str, tuple[int, Document]] = {}
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    def __enter__(self) -> "InMemoryDocumentStore":
        return self

    def __exit__(self, *exc_info) -> None:
        pass

    def connect(self) -> None:
        """No-op for in-memory store."""
        pass

    def close(self) -> None:
        """No-op for in-memory store."""
        pass

    def create_schema(self) -> None:
        """No-op for in-memory store."""
        pass

    def put(self, document: Document) -> None:
        """Insert document into memory."""
        if not document.has_embedding:
            raise StoreError(
                "Refusing to store a document without an embedding",
                operation="put",
                identifier=document.identifier,
            )
        stored = Document(
            identifier=document.identifier,
            content=document.content,
            embedding=np.asarray(document.embedding, dtype=np.float32).copy(),
        )
        with get_tracer().start_span(
            "store.put",
            attributes=store_attributes(self.backend, "put", identifier=document.identifier),
        ) as span:
            with self._lock:
                existing = self._documents.get(document.identifier)
                seq = existing[0] if existing else next(self._sequence)
                self._documents[document.identifier] = (seq, stored)
            span.set_status("ok")

    def search(self, query_vector: np.ndarray, top_k: int = 1) -> list[SearchResult]:
        """Search using shifted cosine similarity."""
        if top_k <= 0:
            return []

        with self._lock:
            entries = list(self._documents.values())

        with get_tracer().start_span(
            "store.search",
            attributes=store_attributes(self.backend, "search", top_k=top_k),
        ) as span:
            try:
                scored = [
                    (seq, doc, similarity_score(query_vector, doc.embedding))
                    for seq, doc in entries
                ]
            except ValueError as e:
                span.record_exception(e)
                span.set_status("error", str(e))
                raise StoreError("Similarity search failed", operation="search", cause=e) from e

            # Score descending, then insertion order
            scored.sort(key=lambda item: (-item[2], item[0]))
            span.set_attribute(STORE_RESULT_COUNT, min(top_k, len(scored)))
            span.set_status("ok")

        return [
            SearchResult(identifier=doc.identifier, score=score, content=doc.content)
            for _, doc, score in scored[:top_k]
        ]

    def count(self) -> int:
        return len(self._documents)

    def get(self, identifier: str) -> Document | None:
        """Look up a stored document by identifier."""
        entry = self._documents.get(identifier)
        return entry[1] if entry else None


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_document_store(
    config: StoreConfig | None = None,
    use_postgres: bool = False,
) -> DocumentStore:
    """
    Factory function to get the appropriate document store.

    Args:
        config: Store configuration (uses defaults if not provided)
        use_postgres: Use PostgreSQL store (default: False for dev)
    """
    if use_postgres:
        return PgVectorStore(config or StoreConfig())
    return InMemoryDocumentStore()
