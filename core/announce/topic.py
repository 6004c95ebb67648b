"""Typed topic keys.

Any hashable value can name a topic. ``Topic[P]`` additionally ties the key
to a payload type so static checkers can verify ``on``, ``once`` and ``emit``
call sites:

    READY: Topic[None] = Topic("ready")        # emit(READY)
    SCORE: Topic[int] = Topic("score")         # emit(SCORE, 3)

The payload type exists only for type checkers. Two ``Topic`` instances with
the same name address the same channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

P = TypeVar("P")


@dataclass(frozen=True)
class Topic(Generic[P]):
    """Named topic whose payloads are of type ``P``."""

    name: str

    def __repr__(self) -> str:
        return f"Topic({self.name!r})"

    def __str__(self) -> str:
        return self.name
