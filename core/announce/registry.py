"""
Channel registry: topic -> trackers.

A topic with one subscriber maps straight to its ``Tracker``; a second
subscriber upgrades the entry to a list, and shrinking back to one
downgrades it again. A topic with no subscribers has no entry at all.

Emission walks a list by position while handlers may add or remove
trackers on the same topic. Appends land past the walk and are fenced off
by their cycle. In-place removals shift later trackers down by one, so every
walk in progress over that list registers a cursor here and has its position
pulled back when an earlier slot disappears. Lists dropped from the registry
(by a downgrade or a detach) are never mutated again, so a walk still
holding one keeps a stable view of it.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass

from announce.tracker import Tracker

Channel = Tracker | list[Tracker]


@dataclass(eq=False, slots=True)
class _Cursor:
    sequence: list[Tracker]
    position: int = 0


def _index_of(sequence: list[Tracker], tracker: Tracker) -> int:
    for index, candidate in enumerate(sequence):
        if candidate is tracker:
            return index
    return -1


class ChannelRegistry:
    """Maps topics to their trackers."""

    def __init__(self) -> None:
        self._channels: dict[Hashable, Channel] = {}
        self._cursors: list[_Cursor] = []

    def add(self, tracker: Tracker) -> None:
        topic = tracker.topic
        channel = self._channels.get(topic)
        if channel is None:
            self._channels[topic] = tracker
        elif isinstance(channel, list):
            channel.append(tracker)
        else:
            self._channels[topic] = [channel, tracker]

    def remove(self, tracker: Tracker) -> bool:
        """Remove ``tracker`` by identity. False if it is not registered."""
        topic = tracker.topic
        channel = self._channels.get(topic)
        if channel is None:
            return False
        if not isinstance(channel, list):
            if channel is not tracker:
                return False
            del self._channels[topic]
            return True

        index = _index_of(channel, tracker)
        if index < 0:
            return False
        if len(channel) == 2:
            # The old list is left as-is for any walk still holding it.
            self._channels[topic] = channel[1 - index]
            return True

        del channel[index]
        for cursor in self._cursors:
            if cursor.sequence is channel and index < cursor.position:
                cursor.position -= 1
        return True

    def get(self, topic: Hashable) -> Channel | None:
        return self._channels.get(topic)

    def count(self, topic: Hashable) -> int:
        channel = self._channels.get(topic)
        if channel is None:
            return 0
        if isinstance(channel, list):
            return len(channel)
        return 1

    def detach(self, topic: Hashable) -> list[Tracker]:
        """Drop the topic's entry and return its trackers in subscription order."""
        channel = self._channels.pop(topic, None)
        if channel is None:
            return []
        if isinstance(channel, list):
            return list(channel)
        return [channel]

    def walk(self, sequence: list[Tracker]) -> Iterator[Tracker]:
        """
        Yield the trackers of a live list by position.

        The list may change while the walk is suspended; see the module
        docstring. Close the generator (or exhaust it) to release the cursor.
        """
        cursor = _Cursor(sequence)
        self._cursors.append(cursor)
        try:
            while cursor.position < len(sequence):
                tracker = sequence[cursor.position]
                cursor.position += 1
                yield tracker
        finally:
            self._cursors.remove(cursor)

    def topics(self) -> list[Hashable]:
        return list(self._channels)

    def __contains__(self, topic: Hashable) -> bool:
        return topic in self._channels

    def __len__(self) -> int:
        return len(self._channels)
