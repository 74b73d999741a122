"""
Input sources for the indexing pipeline.

A source is any iterable of SourceDocument (or plain (identifier, text)
tuples). Reading is deferred to SourceDocument.read() so that an
unreadable file fails only its own item instead of the whole iteration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from vector_search_pipeline.core.errors import InputError

logger = logging.getLogger(__name__)


@dataclass
class SourceDocument:
    """An (identifier, text) pair whose text may be loaded lazily."""
    identifier: str
    text: str | None = None
    path: Path | None = None
    encoding: str = "utf-8"

    def read(self) -> str:
        """Return the text, loading it from `path` if needed."""
        if self.text is not None:
            if not isinstance(self.text, str):
                raise InputError(
                    f"Expected str text, got {type(self.text).__name__}",
                    identifier=self.identifier,
                )
            return self.text
        if self.path is None:
            raise InputError("Source has neither text nor path", identifier=self.identifier)
        try:
            return self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Could not read {self.path}", identifier=self.identifier, cause=e) from e


def iter_directory(
    directory: str | Path,
    pattern: str = "*.txt",
    encoding: str = "utf-8",
) -> Iterator[SourceDocument]:
    """
    Yield one SourceDocument per file in `directory` matching `pattern`.

    Files are yielded in name order; the identifier is the file name.
    Sub-directories are not traversed.
    """
    root = Path(directory)
    if not root.is_dir():
        raise InputError(f"Not a directory: {root}", identifier=str(root))

    paths = sorted(p for p in root.glob(pattern) if p.is_file())
    logger.debug(f"Found {len(paths)} files matching {pattern} in {root}")
    for path in paths:
        yield SourceDocument(identifier=path.name, path=path, encoding=encoding)
