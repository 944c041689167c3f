"""Tests for exporting page sequences."""

from __future__ import annotations

import base64
import json
from pathlib import Path

from flipbook.io import to_data_url, write_pages
from flipbook.render.base import Page, PageSequence


def _sequence() -> PageSequence:
    return PageSequence(
        [
            Page.cover("/books/cover.jpg", 0.75),
            Page(1, b"\x89PNG-one", 0.75),
            Page(2, b"\x89PNG-two", 1.5),
        ]
    )


def test_write_pages_layout(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "pages"
    written = write_pages(_sequence(), out)
    assert (out / "page_001.png").read_bytes() == b"\x89PNG-one"
    assert (out / "page_002.png").read_bytes() == b"\x89PNG-two"
    assert not (out / "page_000.png").exists()
    assert written["manifest"] == str(out / "manifest.json")
    assert set(written) == {"manifest", "page_1", "page_2"}


def test_manifest_contents(tmp_path: Path) -> None:
    write_pages(_sequence(), tmp_path)
    data = json.loads((tmp_path / "manifest.json").read_text(encoding="utf-8"))
    assert data["page_count"] == 2
    assert data["pages"][0] == {
        "ordinal": 0,
        "aspect_ratio": 0.75,
        "is_cover": True,
        "image": "/books/cover.jpg",
    }
    assert data["pages"][2]["file"] == "page_002.png"
    assert [p["ordinal"] for p in data["pages"]] == [0, 1, 2]


def test_data_url() -> None:
    seq = _sequence()
    assert to_data_url(seq.cover) == "/books/cover.jpg"
    url = to_data_url(seq[1])
    assert url.startswith("data:image/png;base64,")
    assert base64.b64decode(url.split(",", 1)[1]) == b"\x89PNG-one"
