"""Viewer session composing rendering and navigation.

A :class:`ViewerSession` is created when a viewer mounts.  :meth:`mount`
starts rendering in the background; :meth:`step_forward` and
:meth:`step_backward` are the two commands produced by the input layer.  An
accepted step arms the animation timer, and the timer firing completes the
transition.  The navigation bound is the length of the published page
sequence, so commands issued while loading are harmless no-ops against an
empty sequence.  :meth:`unmount` disarms the timer, cancels rendering and
waits for the document to be released.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .config import ConfigModel, load_config
from .navigate.state import Direction, NavigationState
from .navigate.timer import AnimationTimer, AsyncioTimer, TimerHandle
from .render.base import Page, PageSequence, RenderStatus
from .render.pipeline import RenderPipeline, RenderSession
from .render.rasterizer import PdfRasterizer
from .utils.logging import get_logger

__all__ = ["ViewState", "ViewerSession"]

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ViewState:
    """Everything the presentation layer needs to draw one frame."""

    status: RenderStatus
    index: int
    length: int
    direction: Direction
    page: Page | None
    error_message: str | None
    progress: tuple[int, int]

    @property
    def label(self) -> str:
        return f"Spread {self.index + 1} / {self.length}"


class ViewerSession:
    """Integration point exposed to the presentation layer."""

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        config: ConfigModel | None = None,
        pipeline: RenderPipeline | None = None,
        timer: AnimationTimer | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.path = path if path is not None else self.config.source.document
        if pipeline is None:
            pipeline = RenderPipeline(
                PdfRasterizer(self.config.render.scale),
                self.config.assets.cover,
                default_aspect_ratio=self.config.render.default_aspect_ratio,
            )
        self.timer: AnimationTimer = timer if timer is not None else AsyncioTimer()
        self.navigation = NavigationState()
        self.render = RenderSession(
            pipeline,
            self.path,
            failure_message=self.config.messages.load_failed,
            on_change=self._on_render_change,
        )
        self._pending: TimerHandle | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        """Start rendering on the running event loop."""

        self.render.start()

    async def wait_until_loaded(self) -> RenderStatus:
        await self.render.wait()
        return self.status

    async def unmount(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        await self.render.close()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def step_forward(self) -> bool:
        return self._arm(self.navigation.step_forward())

    def step_backward(self) -> bool:
        return self._arm(self.navigation.step_backward())

    def _arm(self, accepted: bool) -> bool:
        if not accepted:
            return False
        try:
            self._pending = self.timer.schedule(
                self.config.animation.duration_ms, self._on_transition_elapsed
            )
        except Exception:
            # Nothing will ever complete the transition; stay on this page.
            self.navigation.abort_transition()
            raise
        return True

    def _on_transition_elapsed(self) -> None:
        self._pending = None
        self.navigation.transition_complete()

    def _on_render_change(self, render: RenderSession) -> None:
        if render.sequence is not None:
            self.navigation.set_length(len(render.sequence))
            log.debug("published %d pages", len(render.sequence))

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def status(self) -> RenderStatus:
        return self.render.status

    @property
    def sequence(self) -> PageSequence | None:
        return self.render.sequence

    @property
    def index(self) -> int:
        return self.navigation.index

    @property
    def length(self) -> int:
        return self.navigation.length

    @property
    def direction(self) -> Direction:
        return self.navigation.direction

    @property
    def error_message(self) -> str | None:
        return self.render.error_message

    @property
    def progress(self) -> tuple[int, int]:
        return self.render.progress

    @property
    def loading_image(self) -> str:
        return self.config.assets.loading_image

    @property
    def current_page(self) -> Page | None:
        sequence = self.render.sequence
        if sequence is None or not 0 <= self.navigation.index < len(sequence):
            return None
        return sequence[self.navigation.index]

    def snapshot(self) -> ViewState:
        return ViewState(
            status=self.status,
            index=self.index,
            length=self.length,
            direction=self.direction,
            page=self.current_page,
            error_message=self.error_message,
            progress=self.progress,
        )
