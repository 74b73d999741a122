"""
CLI commands - entry points for indexing and querying.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment and configuration
3. Build the embedding provider and document store
4. Run the pipeline
5. Print results and return an exit code

The commands are thin wrappers; all behaviour lives in the pipelines.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TextIO

from dotenv import load_dotenv

from vector_search_pipeline.config import PipelineConfig
from vector_search_pipeline.core import DocumentStore, EmbeddingProvider, SearchResult
from vector_search_pipeline.core.errors import VectorSearchError
from vector_search_pipeline.embeddings import get_embedding_provider
from vector_search_pipeline.observability import init_phoenix, shutdown_phoenix
from vector_search_pipeline.pipelines import (
    DEFAULT_TOP_K,
    BatchResult,
    IndexingPipeline,
    RetrievalPipeline,
)
from vector_search_pipeline.retrieval import get_document_store
from vector_search_pipeline.sources import iter_directory

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def _load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _common_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Use the in-memory store instead of PostgreSQL",
    )
    parser.add_argument(
        "--mock-embeddings",
        action="store_true",
        help="Use deterministic offline embeddings (no API calls)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _build_components(
    config: PipelineConfig,
    args: argparse.Namespace,
) -> tuple[EmbeddingProvider, DocumentStore]:
    use_mock = config.use_mock_embeddings or args.mock_embeddings
    use_postgres = config.use_postgres and not args.in_memory
    embeddings = get_embedding_provider(
        config.embedding,
        use_mock=use_mock,
        dimensions=config.store.embedding_dim,
    )
    store = get_document_store(config.store, use_postgres=use_postgres)
    return embeddings, store


def render_results(results: list[SearchResult], out: TextIO | None = None) -> None:
    """Print ranked results, one block per document."""
    out = out or sys.stdout
    if not results:
        print("No similar documents found.", file=out)
        return
    print("Similar documents:", file=out)
    for result in results:
        print(f"Document ID: {result.identifier}, Score: {result.score:.4f}", file=out)
        print(result.content, file=out)


def render_results_json(results: list[SearchResult], out: TextIO | None = None) -> None:
    """Print ranked results as a JSON array."""
    out = out or sys.stdout
    print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2), file=out)


def render_batch(batch: BatchResult, out: TextIO | None = None) -> None:
    """Print per-item status followed by a summary line."""
    out = out or sys.stdout
    for outcome in batch:
        if outcome.stored:
            print(f"  [STORED] {outcome.identifier}", file=out)
        else:
            print(f"  [FAILED] {outcome.identifier} ({outcome.stage}): {outcome.reason}", file=out)
    print(f"\nStored: {batch.stored_count}/{batch.total}", file=out)


def run_init_schema_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for creating the pgvector table."""
    parser = argparse.ArgumentParser(
        prog="vector-search init-schema",
        description="Create the document table and vector index",
        parents=[_common_parser()],
    )
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    config = PipelineConfig.from_env()
    store = get_document_store(config.store, use_postgres=config.use_postgres and not args.in_memory)
    try:
        with store:
            store.create_schema()
    except VectorSearchError as e:
        logger.error(f"Schema creation failed: {e}")
        return 1

    print(f"Schema ready: {config.store.table_name}")
    return 0


def run_index_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for indexing a directory of text files."""
    parser = argparse.ArgumentParser(
        prog="vector-search index",
        description="Embed and store every text file in a directory",
        parents=[_common_parser()],
    )
    parser.add_argument("directory", help="Directory containing the documents")
    parser.add_argument("--pattern", default="*.txt", help="File glob (default: *.txt)")
    parser.add_argument("--workers", type=_positive_int, default=1, help="Items indexed concurrently")
    parser.add_argument(
        "--query",
        default=None,
        help="Run a query against the store once indexing finishes",
    )
    parser.add_argument("--top-k", type=int, default=DEFAULT_TOP_K)
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    config = PipelineConfig.from_env()
    init_phoenix()
    try:
        embeddings, store = _build_components(config, args)
        with store:
            if config.use_postgres and not args.in_memory:
                store.create_schema()
            pipeline = IndexingPipeline(embeddings, store, max_workers=args.workers)
            batch = pipeline.index(iter_directory(args.directory, pattern=args.pattern))
            render_batch(batch)

            if args.query:
                results = RetrievalPipeline(embeddings, store).retrieve(args.query, top_k=args.top_k)
                render_results(results)
    except VectorSearchError as e:
        logger.error(f"Indexing failed: {e}")
        return 1
    finally:
        shutdown_phoenix()

    return 0 if batch.all_stored else 1


def run_query_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for a similarity query."""
    parser = argparse.ArgumentParser(
        prog="vector-search query",
        description="Find the stored documents most similar to a query",
        parents=[_common_parser()],
    )
    parser.add_argument("text", help="Free-text query")
    parser.add_argument(
        "--top-k",
        type=int,
        default=DEFAULT_TOP_K,
        help=f"Number of results (default: {DEFAULT_TOP_K})",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    config = PipelineConfig.from_env()
    init_phoenix()
    try:
        embeddings, store = _build_components(config, args)
        with store:
            results = RetrievalPipeline(embeddings, store).retrieve(args.text, top_k=args.top_k)
    except VectorSearchError as e:
        logger.error(f"Error searching for similar documents: {e}")
        return 1
    finally:
        shutdown_phoenix()

    if args.json:
        render_results_json(results)
    else:
        render_results(results)
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        vector-search init-schema              # Create table and index
        vector-search index ./requests         # Index *.txt files
        vector-search query "feline pet"       # Best match
        vector-search query "feline pet" --top-k 3
    """
    _load_env()

    parser = argparse.ArgumentParser(
        prog="vector-search",
        description="Embedding indexing and similarity search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  init-schema  Create the pgvector table and HNSW index
  index        Embed and store a directory of text files
  query        Embed a query and print the best matches

Examples:
  vector-search index ./requests --workers 4
  vector-search query "Co lubi robic Stas?" --top-k 3
  vector-search index ./docs --in-memory --mock-embeddings --query "cat"
        """,
    )
    parser.add_argument(
        "command",
        choices=["init-schema", "index", "query"],
        help="Command to run",
    )

    args, remaining = parser.parse_known_args(argv if argv is not None else sys.argv[1:])

    commands = {
        "init-schema": run_init_schema_cli,
        "index": run_index_cli,
        "query": run_query_cli,
    }

    try:
        return commands[args.command](remaining)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
