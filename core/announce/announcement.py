"""
Announcement - synchronous in-process publish/subscribe.

Producers ``emit`` on a topic, consumers subscribe with ``on`` or wait for a
single occurrence with ``once``. Delivery happens on the caller's thread
before ``emit`` returns.

Handlers may call back into the same Announcement while an emission is in
progress. Each ``emit`` reaches exactly the subscribers that existed before
it started and are still subscribed when their turn comes:
- a subscriber added by a handler waits for the next ``emit``
- a subscriber disposed by a handler before its turn is skipped

Usage:
    bus = Announcement()

    listener = bus.on("saved", lambda path: print("saved", path))
    bus.emit("saved", "/tmp/report.txt")
    listener.dispose()

    payload = await bus.once("ready")
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from contextlib import closing
from typing import Any, TypeVar, overload

from announce.exceptions import OnceCancelledError
from announce.listener import Listener, Once
from announce.logging_config import get_logger
from announce.registry import ChannelRegistry
from announce.topic import Topic
from announce.tracker import GLOBAL_CLOCK, CycleClock, Tracker

logger = get_logger(__name__)

P = TypeVar("P")

_MISSING: Any = object()


class Announcement:
    """Topic-keyed synchronous event emitter."""

    def __init__(self, clock: CycleClock | None = None):
        self._registry = ChannelRegistry()
        self._clock = clock or GLOBAL_CLOCK

    # === Subscription ===

    @overload
    def on(self, topic: Topic[None], handler: Callable[[], Any]) -> Listener: ...

    @overload
    def on(self, topic: Topic[P], handler: Callable[[P], Any]) -> Listener: ...

    @overload
    def on(self, topic: Hashable, handler: Callable[..., Any]) -> Listener: ...

    def on(self, topic: Hashable, handler: Callable[..., Any]) -> Listener:
        """
        Subscribe ``handler`` to ``topic``.

        The handler is called with the payload, or with no arguments when the
        topic is emitted without one.

        Returns:
            Listener whose ``dispose()`` unsubscribes the handler
        """
        tracker = Tracker(topic=topic, cycle=self._clock.value, process=handler)
        self._registry.add(tracker)
        logger.debug("Listener subscribed", topic=topic, cycle=tracker.cycle)
        return Listener(
            dispose=lambda: self._dispose(tracker),
            is_alive=lambda: tracker.alive,
        )

    @overload
    def once(self, topic: Topic[P]) -> Once[P]: ...

    @overload
    def once(self, topic: Hashable) -> Once[Any]: ...

    def once(self, topic: Hashable) -> Once[Any]:
        """
        Wait for the next emission on ``topic``.

        The subscription removes itself on delivery. The returned Once
        resolves with the payload (``None`` if emitted without one) or raises
        ``OnceCancelledError`` if cancelled or cleared first.
        """

        def process(*args: Any) -> None:
            self._registry.remove(tracker)
            tracker.alive = False
            signal._resolve(args[0] if args else None)

        def kill() -> None:
            signal._reject(OnceCancelledError(topic))

        tracker = Tracker(topic=topic, cycle=self._clock.value, process=process, kill=kill)
        signal: Once[Any] = Once(dispose=lambda: self._dispose(tracker))
        self._registry.add(tracker)
        logger.debug("Once subscribed", topic=topic, cycle=tracker.cycle)
        return signal

    def _dispose(self, tracker: Tracker) -> bool:
        if not tracker.alive:
            return False
        self._registry.remove(tracker)
        tracker.terminate()
        logger.debug("Listener disposed", topic=tracker.topic)
        return True

    # === Emission ===

    @overload
    def emit(self, topic: Topic[None]) -> bool: ...

    @overload
    def emit(self, topic: Topic[P], payload: P) -> bool: ...

    @overload
    def emit(self, topic: Hashable, payload: Any = ...) -> bool: ...

    def emit(self, topic: Hashable, payload: Any = _MISSING) -> bool:
        """
        Deliver ``payload`` to the current subscribers of ``topic``.

        Handler exceptions propagate to the caller and end this emission.

        Returns:
            True if the topic had any subscriber
        """
        channel = self._registry.get(topic)
        if channel is None:
            return False

        now = self._clock.tick()
        args = () if payload is _MISSING else (payload,)

        # A sole tracker is alive and predates this tick: disposal and
        # clearing remove it from the registry immediately.
        if isinstance(channel, Tracker):
            channel.process(*args)
            return True

        with closing(self._registry.walk(channel)) as trackers:
            for tracker in trackers:
                if tracker.alive and tracker.cycle < now:
                    tracker.process(*args)
        return True

    # === Inspection ===

    def count(self, topic: Hashable) -> int:
        """Number of subscribers currently registered on ``topic``."""
        return self._registry.count(topic)

    def topics(self) -> list[Hashable]:
        """Topics that currently have at least one subscriber."""
        return self._registry.topics()

    def clear(self, topic: Hashable) -> bool:
        """
        Remove and terminate every subscriber of ``topic``.

        Pending ``once`` waits on the topic are rejected. Subscriptions made
        by termination callbacks while clearing go to a fresh channel and
        are left alone, and so is a nested ``clear`` of the same topic: it
        only sees that fresh channel.

        Returns:
            True if the topic had any subscriber
        """
        trackers = self._registry.detach(topic)
        if not trackers:
            return False

        terminated = 0
        for tracker in trackers:
            if tracker.terminate():
                terminated += 1

        logger.debug("Channel cleared", topic=topic, terminated=terminated)
        return True

    def __repr__(self) -> str:
        return f"<Announcement channels={len(self._registry)}>"
