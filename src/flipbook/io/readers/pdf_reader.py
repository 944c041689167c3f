"""PDF document reader.

Purpose:
    Open PDF files with PyMuPDF as scoped document handles.

Key responsibilities:
    - Translate missing files, corrupt data, non-PDF content and
      password-protected documents into :class:`LoadFailure`.
    - Release the underlying document exactly once on every exit path.

Notes/Edge cases:
    - PyMuPDF happily opens images and other formats as documents; those are
      rejected because the reader only presents fixed-page PDFs.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import fitz

from flipbook.utils.errors import LoadFailure
from flipbook.utils.logging import get_logger

__all__ = ["open_pdf"]

log = get_logger(__name__)


@contextmanager
def open_pdf(path: str | os.PathLike[str]) -> Iterator[fitz.Document]:
    """Open ``path`` and yield the document, closing it on exit.

    Raises
    ------
    LoadFailure
        If the file is missing, unreadable, not a PDF or encrypted.
    """

    file_path = Path(path)
    if not file_path.is_file():
        raise LoadFailure(f"Document not found: {file_path}")
    try:
        doc = fitz.open(str(file_path))
    except Exception as exc:
        raise LoadFailure(f"Cannot open {file_path}: {exc}") from exc
    try:
        if not doc.is_pdf:
            raise LoadFailure(f"Not a PDF document: {file_path}")
        if doc.needs_pass:
            raise LoadFailure(f"Document is password protected: {file_path}")
        log.debug("opened %s (%d pages)", file_path, doc.page_count)
        yield doc
    finally:
        doc.close()
