"""Fallback values shared by the pipeline, navigation and configuration."""

from __future__ import annotations

from typing import Final

__all__ = [
    "DEFAULT_SCALE",
    "DEFAULT_ASPECT_RATIO",
    "ANIMATION_DURATION_MS",
    "LOAD_FAILED_MESSAGE",
    "COVER_ORDINAL",
]

DEFAULT_SCALE: Final = 2.0
DEFAULT_ASPECT_RATIO: Final = 1.4
ANIMATION_DURATION_MS: Final = 260
LOAD_FAILED_MESSAGE: Final = "Failed to load PDF."
COVER_ORDINAL: Final = 0
