"""Pagination state machine and the timers that complete its transitions."""

from .state import Direction, NavigationState
from .timer import AnimationTimer, AsyncioTimer, ManualTimer, TimerHandle

__all__ = [
    "AnimationTimer",
    "AsyncioTimer",
    "Direction",
    "ManualTimer",
    "NavigationState",
    "TimerHandle",
]
