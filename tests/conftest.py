"""Shared fixtures: generated PDFs and in-memory stand-ins for the pipeline."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import fitz
import pytest

from flipbook.render.base import RasterImage
from flipbook.render.pipeline import RenderPipeline
from flipbook.utils.errors import RenderFailure

PageSize = tuple[float, float]


class FakeDocument:
    """Document exposing a page count and counting ``close`` calls."""

    def __init__(self, aspects: Sequence[float]) -> None:
        self.aspects = list(aspects)
        self.close_calls = 0

    @property
    def page_count(self) -> int:
        return len(self.aspects)

    def close(self) -> None:
        self.close_calls += 1


class FakeOpener:
    def __init__(self, document: FakeDocument | None = None, error: Exception | None = None) -> None:
        self.document = document
        self.error = error
        self.opened: list[object] = []

    @contextmanager
    def __call__(self, path: object) -> Iterator[FakeDocument]:
        self.opened.append(path)
        if self.error is not None:
            raise self.error
        assert self.document is not None
        try:
            yield self.document
        finally:
            self.document.close()


class FakeRasterizer:
    def __init__(
        self,
        fail_on: int | None = None,
        on_render: Callable[[int], None] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.fail_on = fail_on
        self.on_render = on_render
        self.error = error
        self.calls: list[int] = []

    def rasterize(self, document: FakeDocument, ordinal: int) -> RasterImage:
        self.calls.append(ordinal)
        if self.on_render is not None:
            self.on_render(ordinal)
        if ordinal == self.fail_on:
            if self.error is not None:
                raise self.error
            raise RenderFailure(ordinal, "malformed content")
        return RasterImage(f"png-{ordinal}".encode(), document.aspects[ordinal - 1], 10, 10)


def fake_pipeline(
    aspects: Sequence[float] = (0.75, 0.75, 0.75),
    *,
    rasterizer: FakeRasterizer | None = None,
    error: Exception | None = None,
) -> tuple[RenderPipeline, FakeOpener, FakeRasterizer]:
    """Return a pipeline over an in-memory document plus its collaborators."""

    opener = FakeOpener(FakeDocument(aspects), error=error)
    rasterizer = rasterizer if rasterizer is not None else FakeRasterizer()
    pipeline = RenderPipeline(rasterizer, "/books/cover.jpg", opener=opener)
    return pipeline, opener, rasterizer


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a PDF with one page per ``(width, height)`` entry."""

    def _make(sizes: Sequence[PageSize] = ((200, 300),), name: str = "doc.pdf") -> Path:
        path = tmp_path / name
        doc = fitz.open()
        for number, (width, height) in enumerate(sizes, start=1):
            page = doc.new_page(width=width, height=height)
            page.insert_text((20, 40), f"Page {number}", fontsize=14)
        doc.save(str(path))
        doc.close()
        return path

    return _make
