"""Extension based registry for document readers.

Only a ``.pdf`` reader is registered by default.  Readers are callables that
take a path and return a context manager yielding an open document handle;
leaving the context releases the document.

``UnsupportedFormatError`` is raised when opening a file whose extension has
no registered reader.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable

from ..render.base import DocumentHandle
from ..utils.errors import UnsupportedFormatError
from .readers.pdf_reader import open_pdf
from .writers.png_writer import to_data_url, write_pages

DocumentOpener = Callable[[str | os.PathLike[str]], AbstractContextManager[DocumentHandle]]

_READERS: dict[str, DocumentOpener] = {}


def register_reader(ext: str, opener: DocumentOpener) -> None:
    """Register ``opener`` for files ending with ``ext``.

    Parameters
    ----------
    ext:
        File extension including the dot (e.g. ``".pdf"``).  Matching is
        case-insensitive.
    opener:
        Callable returning a context manager over an open document.
    """

    _READERS[ext.lower()] = opener


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased file extension of ``path`` (including the dot).

    Returns an empty string when the path has no extension.
    """

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def open_document(path: str | os.PathLike[str]) -> AbstractContextManager[DocumentHandle]:
    """Open ``path`` using the registered reader for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    opener = _READERS.get(ext)
    if opener is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return opener(path)


register_reader(".pdf", open_pdf)

__all__ = [
    "DocumentOpener",
    "register_reader",
    "get_extension",
    "open_document",
    "to_data_url",
    "write_pages",
]
