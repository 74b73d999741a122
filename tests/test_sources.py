"""
Unit Tests for directory sources
"""

import pytest

from vector_search_pipeline.core.errors import InputError
from vector_search_pipeline.sources import SourceDocument, iter_directory


@pytest.fixture
def corpus(tmp_path):
    (tmp_path / "dog.txt").write_text("The dog ran.", encoding="utf-8")
    (tmp_path / "cat.txt").write_text("The cat sat.", encoding="utf-8")
    (tmp_path / "notes.md").write_text("# not indexed", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "deep.txt").write_text("skipped", encoding="utf-8")
    return tmp_path


class TestIterDirectory:
    def test_yields_matching_files_sorted(self, corpus):
        identifiers = [doc.identifier for doc in iter_directory(corpus)]

        assert identifiers == ["cat.txt", "dog.txt"]

    def test_reads_utf8_text(self, corpus):
        (corpus / "stas.txt").write_text("Co lubi robić Staś?", encoding="utf-8")

        docs = {doc.identifier: doc for doc in iter_directory(corpus)}

        assert docs["stas.txt"].read() == "Co lubi robić Staś?"

    def test_custom_pattern(self, corpus):
        identifiers = [doc.identifier for doc in iter_directory(corpus, pattern="*.md")]

        assert identifiers == ["notes.md"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(InputError):
            list(iter_directory(tmp_path / "missing"))


class TestSourceDocument:
    def test_inline_text(self):
        assert SourceDocument(identifier="a", text="hello").read() == "hello"

    def test_non_str_text_raises_input_error(self):
        with pytest.raises(InputError, match="bytes"):
            SourceDocument(identifier="a", text=b"hello").read()

    def test_unreadable_file_raises_input_error(self, tmp_path):
        doc = SourceDocument(identifier="gone.txt", path=tmp_path / "gone.txt")

        with pytest.raises(InputError) as exc_info:
            doc.read()

        assert exc_info.value.identifier == "gone.txt"
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_invalid_encoding_raises_input_error(self, tmp_path):
        path = tmp_path / "latin.txt"
        path.write_bytes(b"caf\xe9")

        with pytest.raises(InputError):
            SourceDocument(identifier="latin.txt", path=path).read()

    def test_no_text_or_path(self):
        with pytest.raises(InputError):
            SourceDocument(identifier="empty").read()
