"""Core rendering model and protocol definitions.

A :class:`Page` is one entry of the reader's page sequence.  Ordinal ``0`` is
reserved for the synthetic cover whose ``image`` is an opaque reference to a
pre-supplied static image; ordinals ``1..N`` are rasterized document pages in
document order whose ``image`` holds encoded PNG bytes.  A
:class:`PageSequence` is only ever built complete: the constructor validates
that ordinals are contiguous from zero and that the single cover comes first.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, overload, runtime_checkable

from flipbook.utils.constants import COVER_ORDINAL


class RenderStatus(Enum):
    """Lifecycle status of a render session."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class RasterImage:
    """Result of rasterizing a single document page."""

    image: bytes
    aspect_ratio: float
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class Page:
    """A single page of the reader.

    ``aspect_ratio`` is width divided by height of the rendered content and
    must be positive.  ``is_cover`` holds exactly when ``ordinal`` is zero.
    """

    ordinal: int
    image: bytes | str
    aspect_ratio: float
    is_cover: bool = False

    def __post_init__(self) -> None:
        if self.ordinal < 0:
            raise ValueError(f"ordinal must be non-negative, got {self.ordinal}")
        if not self.aspect_ratio > 0.0:
            raise ValueError("aspect_ratio must be positive")
        if self.is_cover != (self.ordinal == COVER_ORDINAL):
            raise ValueError("only ordinal 0 may be the cover")

    @classmethod
    def cover(cls, image: str, aspect_ratio: float) -> "Page":
        """Build the synthetic cover page."""

        return cls(COVER_ORDINAL, image, aspect_ratio, is_cover=True)

    @classmethod
    def from_raster(cls, ordinal: int, raster: RasterImage) -> "Page":
        return cls(ordinal, raster.image, raster.aspect_ratio)


class PageSequence(Sequence[Page]):
    """Ordered, read-only page list published by the pipeline."""

    __slots__ = ("_pages",)

    def __init__(self, pages: Iterable[Page]) -> None:
        pages = tuple(pages)
        if not pages or not pages[0].is_cover:
            raise ValueError("a page sequence must start with the cover")
        for expected, page in enumerate(pages):
            if page.ordinal != expected:
                raise ValueError(
                    f"ordinals must be contiguous: expected {expected}, got {page.ordinal}"
                )
        self._pages: tuple[Page, ...] = pages

    @overload
    def __getitem__(self, index: int) -> Page: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Page, ...]: ...

    def __getitem__(self, index: int | slice) -> Page | tuple[Page, ...]:
        return self._pages[index]

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __repr__(self) -> str:
        return f"PageSequence(pages={len(self._pages)})"

    @property
    def cover(self) -> Page:
        return self._pages[0]

    @property
    def document_pages(self) -> tuple[Page, ...]:
        """Rendered document pages without the cover."""

        return self._pages[1:]


class CancellationToken:
    """Cooperative cancellation flag checked between units of work."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@runtime_checkable
class DocumentHandle(Protocol):
    """Minimal view of an opened document needed by rasterizers."""

    @property
    def page_count(self) -> int: ...

    def close(self) -> None: ...


@runtime_checkable
class Rasterizer(Protocol):
    """Protocol for page rasterizers.

    Implementations render one page of an opened document and must raise
    :class:`~flipbook.utils.errors.RenderFailure` instead of returning a partial
    image.
    """

    def rasterize(self, document: DocumentHandle, ordinal: int) -> RasterImage:
        """Render the 1-based page ``ordinal`` of ``document``."""

        ...


__all__ = [
    "RenderStatus",
    "RasterImage",
    "Page",
    "PageSequence",
    "CancellationToken",
    "DocumentHandle",
    "Rasterizer",
]
