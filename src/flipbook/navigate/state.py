"""Single-flight page navigation.

:class:`NavigationState` has two states.  In *idle* (``locked`` is false) a
step command is accepted when it stays within ``[0, length - 1]``; accepting
it records the direction and enters *transitioning*.  While transitioning
every further step command is dropped, neither queued nor coalesced.  The
owner calls :meth:`NavigationState.transition_complete` once the slide
animation has played, which applies the pending move and returns to idle.

The machine knows nothing about time; whoever drives the animation decides
when the transition completes.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["Direction", "NavigationState"]


class Direction(Enum):
    """Direction of the pending transition."""

    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def delta(self) -> int:
        return _DELTAS[self]


_DELTAS = {Direction.NONE: 0, Direction.FORWARD: 1, Direction.BACKWARD: -1}


class NavigationState:
    """Current position within a page sequence of ``length`` entries."""

    __slots__ = ("index", "length", "direction")

    def __init__(self, length: int = 0) -> None:
        if length < 0:
            raise ValueError("length must be non-negative")
        self.index = 0
        self.length = length
        self.direction = Direction.NONE

    def __repr__(self) -> str:
        return (
            f"NavigationState(index={self.index}, length={self.length}, "
            f"direction={self.direction.value})"
        )

    @property
    def locked(self) -> bool:
        return self.direction is not Direction.NONE

    is_animating = locked

    @property
    def can_step_forward(self) -> bool:
        return not self.locked and self.index < self.length - 1

    @property
    def can_step_backward(self) -> bool:
        return not self.locked and self.index > 0

    def set_length(self, length: int) -> None:
        """Update the bound once the page sequence is published.

        The sequence only grows, which keeps the current index valid.
        """

        if length < self.length:
            raise ValueError(f"length may not shrink from {self.length} to {length}")
        self.length = length

    def step_forward(self) -> bool:
        """Start a forward transition; return whether it was accepted."""

        if not self.can_step_forward:
            return False
        self.direction = Direction.FORWARD
        return True

    def step_backward(self) -> bool:
        """Start a backward transition; return whether it was accepted."""

        if not self.can_step_backward:
            return False
        self.direction = Direction.BACKWARD
        return True

    def transition_complete(self) -> bool:
        """Apply the pending move and unlock.  No-op when idle."""

        if not self.locked:
            return False
        self.index += self.direction.delta
        self.direction = Direction.NONE
        return True

    def abort_transition(self) -> bool:
        """Unlock without moving.  No-op when idle."""

        if not self.locked:
            return False
        self.direction = Direction.NONE
        return True
