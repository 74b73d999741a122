"""
CLI module - unified command-line interface.

Provides entry points for:
- Creating the pgvector schema
- Indexing a directory of text files
- Running similarity queries
"""

from vector_search_pipeline.cli.commands import (
    main,
    run_init_schema_cli,
    run_index_cli,
    run_query_cli,
    render_results,
    render_batch,
)

__all__ = [
    "main",
    "run_init_schema_cli",
    "run_index_cli",
    "run_query_cli",
    "render_results",
    "render_batch",
]
