"""PNG page writer.

:func:`write_pages` persists a published :class:`PageSequence` to a directory:
one ``page_NNN.png`` file per rendered document page and a ``manifest.json``
describing every entry of the sequence, cover included.  The cover is never
written as an image because its ``image`` is an opaque reference supplied by
the caller; the manifest records that reference verbatim.

Directories required to store the files are created automatically.
"""

from __future__ import annotations

import base64
import json
import os
from pathlib import Path

from flipbook.render.base import Page, PageSequence

PathLikeStr = os.PathLike[str]

MANIFEST_NAME = "manifest.json"


def page_filename(page: Page) -> str:
    """Return the file name used for a rendered document page."""

    return f"page_{page.ordinal:03d}.png"


def to_data_url(page: Page) -> str:
    """Return ``page.image`` as something an ``<img src>`` can consume.

    Rendered pages are encoded as ``data:image/png;base64,...`` URLs; the
    cover reference is returned unchanged.
    """

    if isinstance(page.image, str):
        return page.image
    return "data:image/png;base64," + base64.b64encode(page.image).decode("ascii")


def write_pages(sequence: PageSequence, out_dir: str | PathLikeStr) -> dict[str, str]:
    """Write the pages of ``sequence`` into ``out_dir``.

    Returns
    -------
    dict[str, str]
        Mapping of ``"manifest"`` and ``"page_<ordinal>"`` keys to the written
        paths.
    """

    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written: dict[str, str] = {}
    entries: list[dict[str, object]] = []
    for page in sequence:
        entry: dict[str, object] = {
            "ordinal": page.ordinal,
            "aspect_ratio": page.aspect_ratio,
            "is_cover": page.is_cover,
        }
        if isinstance(page.image, bytes):
            target = directory / page_filename(page)
            target.write_bytes(page.image)
            entry["file"] = target.name
            written[f"page_{page.ordinal}"] = str(target)
        else:
            entry["image"] = page.image
        entries.append(entry)

    manifest = directory / MANIFEST_NAME
    payload = {"page_count": len(sequence) - 1, "pages": entries}
    manifest.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    written["manifest"] = str(manifest)
    return written


__all__ = ["MANIFEST_NAME", "page_filename", "to_data_url", "write_pages"]
