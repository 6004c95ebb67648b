"""Subscription records and the emission clock."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any


class CycleClock:
    """
    Logical clock advanced once per emission.

    A tracker records the clock value at creation; an emission only reaches
    trackers whose recorded cycle is strictly below the value it ticked to.
    """

    __slots__ = ("_value",)

    def __init__(self, start: int = 0):
        self._value = start

    @property
    def value(self) -> int:
        return self._value

    def tick(self) -> int:
        self._value += 1
        return self._value

    def __repr__(self) -> str:
        return f"CycleClock(value={self._value})"


# Shared by every Announcement that is not given its own clock.
GLOBAL_CLOCK = CycleClock()


@dataclass(eq=False, slots=True)
class Tracker:
    """One subscription: its topic, liveness, creation cycle and callbacks."""

    topic: Hashable
    cycle: int
    process: Callable[..., Any]
    kill: Callable[[], None] | None = None
    alive: bool = field(default=True)

    def terminate(self) -> bool:
        """Mark dead and run the termination callback. False if already dead."""
        if not self.alive:
            return False
        self.alive = False
        if self.kill is not None:
            self.kill()
        return True
