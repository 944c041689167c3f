"""Sequential, cancellable rendering pipeline.

:class:`RenderPipeline` opens a document, rasterizes pages ``1..N`` strictly in
page order and publishes a :class:`PageSequence` with a synthetic cover
prepended.  Opening the document and rasterizing each page run in a worker
thread so the event loop stays responsive; pages are never rendered in
parallel, which keeps memory bounded to one drawing surface at a time.

Cancellation is cooperative: the :class:`CancellationToken` is checked before
every page.  A page already being rasterized is allowed to finish, but nothing
further is scheduled and no sequence is published.  Cancellation is not an
error and :meth:`RenderPipeline.render` simply returns ``None``.  Cancelling
the surrounding task also sets the token; the worker thread is waited for
before the document is closed and :class:`asyncio.CancelledError` propagates.

:class:`RenderSession` wraps one pipeline run for the lifetime of a mounted
viewer and collapses :class:`LoadFailure` and :class:`RenderFailure` into a
single ``failed`` status with a fixed message.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractContextManager, ExitStack
from typing import TypeVar

from flipbook.utils.constants import DEFAULT_ASPECT_RATIO, LOAD_FAILED_MESSAGE
from flipbook.utils.errors import FlipbookError, LoadFailure, RenderFailure
from flipbook.utils.logging import get_logger

from .base import CancellationToken, DocumentHandle, Page, PageSequence, Rasterizer, RenderStatus

__all__ = ["ProgressCallback", "RenderPipeline", "RenderSession"]

log = get_logger(__name__)

T = TypeVar("T")

Opener = Callable[[str | os.PathLike[str]], AbstractContextManager[DocumentHandle]]
ProgressCallback = Callable[[int, int], None]


async def _run_in_thread(token: CancellationToken, func: Callable[..., T], *args: object) -> T:
    """Run ``func`` in a worker thread that outlives task cancellation.

    If the awaiting task is cancelled, ``token`` is set and the thread is
    allowed to finish before :class:`asyncio.CancelledError` propagates, so
    callers never release a document that a worker is still using.
    """

    work = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(work)
    except asyncio.CancelledError:
        token.cancel()
        log.debug("task cancelled; waiting for worker thread to finish")
        await asyncio.wait({work})
        if not work.cancelled():
            work.exception()  # mark retrieved; the cancellation wins
        raise


class RenderPipeline:
    """Turn a document path into a published page sequence.

    Parameters
    ----------
    rasterizer:
        Renders single pages; see :class:`~flipbook.render.base.Rasterizer`.
    cover_image:
        Opaque reference to the static cover image.
    opener:
        Callable returning a context manager over an open document.  Defaults
        to :func:`flipbook.io.open_document`.
    default_aspect_ratio:
        Cover aspect ratio used when the document has no pages.
    """

    def __init__(
        self,
        rasterizer: Rasterizer,
        cover_image: str,
        *,
        opener: Opener | None = None,
        default_aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    ) -> None:
        if opener is None:
            from flipbook.io import open_document

            opener = open_document
        self.rasterizer = rasterizer
        self.cover_image = cover_image
        self.default_aspect_ratio = default_aspect_ratio
        self._opener = opener

    async def iter_pages(
        self,
        document: DocumentHandle,
        token: CancellationToken,
        on_progress: ProgressCallback | None = None,
    ) -> AsyncIterator[Page]:
        """Yield rendered pages of ``document`` in page order until cancelled."""

        total = document.page_count
        for ordinal in range(1, total + 1):
            if token.cancelled:
                log.debug("cancelled before page %d of %d", ordinal, total)
                return
            try:
                raster = await _run_in_thread(token, self.rasterizer.rasterize, document, ordinal)
                page = Page.from_raster(ordinal, raster)
            except RenderFailure:
                raise
            except Exception as exc:
                raise RenderFailure(ordinal, str(exc) or type(exc).__name__) from exc
            log.debug("rendered page %d of %d", ordinal, total)
            if on_progress is not None:
                on_progress(ordinal, total)
            yield page

    def build_cover(self, pages: list[Page]) -> Page:
        """Return the synthetic cover matching the first page's aspect ratio."""

        aspect = pages[0].aspect_ratio if pages else self.default_aspect_ratio
        return Page.cover(self.cover_image, aspect)

    async def render(
        self,
        path: str | os.PathLike[str],
        token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> PageSequence | None:
        """Render the document at ``path``.

        Returns the published sequence, or ``None`` when ``token`` was
        cancelled before completion.

        Raises
        ------
        LoadFailure
            If the document cannot be opened.
        RenderFailure
            If any page cannot be rasterized.
        """

        token = token if token is not None else CancellationToken()
        with ExitStack() as stack:
            try:
                document = await _run_in_thread(token, stack.enter_context, self._opener(path))
            except LoadFailure:
                raise
            except Exception as exc:
                raise LoadFailure(f"Cannot open {path}: {exc}") from exc
            if on_progress is not None:
                on_progress(0, document.page_count)

            pages: list[Page] = []
            async for page in self.iter_pages(document, token, on_progress):
                pages.append(page)
            if token.cancelled:
                log.info("render of %s cancelled after %d pages", path, len(pages))
                return None

        return PageSequence([self.build_cover(pages), *pages])


class RenderSession:
    """Lifecycle of one pipeline run for a mounted viewer.

    The session starts in ``loading``.  It moves to ``ready`` when the
    sequence is published and to ``failed`` on any load or render error.  A
    cancelled session stays in ``loading`` and publishes nothing.
    """

    def __init__(
        self,
        pipeline: RenderPipeline,
        path: str | os.PathLike[str],
        *,
        failure_message: str = LOAD_FAILED_MESSAGE,
        on_change: Callable[["RenderSession"], None] | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.path = path
        self.failure_message = failure_message
        self.token = CancellationToken()
        self.status = RenderStatus.LOADING
        self.sequence: PageSequence | None = None
        self.error_message: str | None = None
        self.failure: FlipbookError | None = None
        self.progress: tuple[int, int] = (0, 0)
        self._on_change = on_change
        self._task: asyncio.Task[None] | None = None

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def start(self) -> asyncio.Task[None]:
        """Schedule the render on the running event loop."""

        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def run(self) -> None:
        try:
            sequence = await self.pipeline.render(self.path, self.token, self._record_progress)
        except FlipbookError as exc:
            if self.token.cancelled:
                log.debug("ignoring failure after cancellation: %s", exc)
                return
            log.warning("render of %s failed: %s", self.path, exc)
            self.failure = exc
            self.error_message = self.failure_message
            self._set_status(RenderStatus.FAILED)
            return
        if sequence is None or self.token.cancelled:
            return
        self.sequence = sequence
        self._set_status(RenderStatus.READY)

    async def wait(self) -> None:
        """Wait for the render task to finish."""

        if self._task is not None:
            await self._task

    def cancel(self) -> None:
        """Request cooperative cancellation."""

        self.token.cancel()

    async def close(self) -> None:
        """Cancel and wait until the document has been released."""

        self.cancel()
        await self.wait()

    def _record_progress(self, rendered: int, total: int) -> None:
        if not self.token.cancelled:
            self.progress = (rendered, total)

    def _set_status(self, status: RenderStatus) -> None:
        self.status = status
        log.info("render session %s", status.value)
        if self._on_change is not None:
            self._on_change(self)
