"""Tests for the extension-based document reader registry."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from flipbook.io import get_extension, open_document
from flipbook.utils.errors import LoadFailure, UnsupportedFormatError


def test_unknown_extension_raises(tmp_path: Path) -> None:
    path = tmp_path / "book.epub"
    path.write_bytes(b"data")
    with pytest.raises(UnsupportedFormatError):
        open_document(path)


def test_unsupported_format_is_load_failure() -> None:
    assert issubclass(UnsupportedFormatError, LoadFailure)


def test_get_extension_lowercases() -> None:
    assert get_extension("A/B/STORY.PDF") == ".pdf"
    assert get_extension("README") == ""


def test_open_and_release(make_pdf: Callable[..., Path]) -> None:
    path = make_pdf([(200, 300), (200, 300)])
    with open_document(path) as doc:
        assert doc.page_count == 2
        assert not doc.is_closed  # type: ignore[attr-defined]
    assert doc.is_closed  # type: ignore[attr-defined]


def test_extension_case_insensitive(make_pdf: Callable[..., Path]) -> None:
    path = make_pdf(name="STORY.PDF")
    with open_document(path) as doc:
        assert doc.page_count == 1


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LoadFailure) as info:
        with open_document(tmp_path / "missing.pdf"):
            pass
    assert "missing.pdf" in str(info.value)


def test_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "corrupt.pdf"
    path.write_bytes(b"this is not a pdf at all")
    with pytest.raises(LoadFailure):
        with open_document(path):
            pass


def test_document_released_when_body_raises(make_pdf: Callable[..., Path]) -> None:
    path = make_pdf()
    seen = []
    with pytest.raises(RuntimeError):
        with open_document(path) as doc:
            seen.append(doc)
            raise RuntimeError("boom")
    assert seen[0].is_closed
