"""Typer-based command line interface for the page reader.

``render`` rasterizes a document and exports the page sequence as PNG files
plus a ``manifest.json``.  ``navigate`` renders a document, replays a list of
``next``/``prev`` steps through a :class:`ViewerSession` driven by a manual
timer and prints the spread label after every step.

Exit codes
----------
0 success
3 document could not be opened (missing file, unsupported or corrupt format)
4 configuration error
5 render failure (a page could not be rasterized)
"""

from __future__ import annotations

import asyncio
import os
import sys
from enum import Enum
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import List, Optional

import typer
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .io import write_pages
from .navigate.timer import ManualTimer
from .render.base import RenderStatus
from .render.pipeline import RenderPipeline
from .render.rasterizer import PdfRasterizer
from .session import ViewerSession
from .utils.errors import LoadFailure, RenderFailure
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="flipbook",
    help="Book-style PDF reader. Use 'flipbook render' to rasterize a document.",
)


class Step(str, Enum):
    next = "next"
    prev = "prev"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load(config_path: Path | None, scale: float | None) -> ConfigModel:
    try:
        cfg = load_config(config_path)
    except (ValidationError, OSError, ValueError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    if scale is not None:
        if scale <= 0:
            _safe_exit(4, "--scale must be positive")
        cfg = cfg.model_copy(deep=True)
        cfg.render.scale = scale
    return cfg


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


@app.callback()
def main() -> None:
    """Entry point for the flipbook command group."""
    pass


@app.command()
def render(
    in_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--in", "--input", help="Input PDF (defaults to source.document)"
    ),
    out_dir: Path = typer.Option(..., "--out", help="Directory for PNG pages"),  # noqa: B008
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    scale: Optional[float] = typer.Option(  # noqa: B008
        None, "--scale", help="Rasterization scale factor"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> dict[str, str]:
    """Rasterize ``in_path`` and write the page sequence to ``out_dir``."""

    configure_logging(verbose)
    cfg = _load(config_path, scale)
    source = in_path if in_path is not None else Path(cfg.source.document)

    pipeline = RenderPipeline(
        PdfRasterizer(cfg.render.scale),
        cfg.assets.cover,
        default_aspect_ratio=cfg.render.default_aspect_ratio,
    )

    def progress(rendered: int, total: int) -> None:
        if verbose and rendered:
            typer.echo(f"Rendered page {rendered} / {total}", err=True)

    try:
        with Timing() as t_render:
            sequence = asyncio.run(pipeline.render(source, on_progress=progress))
    except LoadFailure as exc:
        _safe_exit(3, str(exc))
    except RenderFailure as exc:
        _safe_exit(5, str(exc))
    if sequence is None:
        _safe_exit(5, "render cancelled")
    if verbose:
        typer.echo(f"Rendered {len(sequence) - 1} pages in {t_render.ms:.1f} ms", err=True)

    try:
        written = write_pages(sequence, out_dir)
    except OSError as exc:
        _safe_exit(3, str(exc))
    typer.echo(f"Wrote {len(sequence)} pages to {out_dir}")
    return written


async def _replay(session: ViewerSession, timer: ManualTimer, steps: list[Step]) -> list[str]:
    session.mount()
    try:
        if await session.wait_until_loaded() is not RenderStatus.READY:
            return []
        labels = [session.snapshot().label]
        for step in steps:
            if step is Step.next:
                session.step_forward()
            else:
                session.step_backward()
            timer.advance(session.config.animation.duration_ms)
            labels.append(session.snapshot().label)
        return labels
    finally:
        await session.unmount()


@app.command()
def navigate(
    in_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--in", "--input", help="Input PDF (defaults to source.document)"
    ),
    steps: List[Step] = typer.Option(  # noqa: B008
        [], "--step", help="Navigation step to replay; repeatable"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> list[str]:
    """Render ``in_path`` and print the spread shown after every step."""

    configure_logging(verbose)
    cfg = _load(config_path, None)
    timer = ManualTimer()
    session = ViewerSession(in_path, config=cfg, timer=timer)
    labels = asyncio.run(_replay(session, timer, list(steps)))
    if session.status is RenderStatus.FAILED:
        detail = str(session.render.failure) if verbose else None
        _safe_exit(3, f"{session.error_message} {detail}" if detail else session.error_message)
    for label in labels:
        typer.echo(label)
    return labels

