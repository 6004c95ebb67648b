"""
Handles returned to subscribers.

``Listener`` is the disposable returned by ``Announcement.on``. ``Once`` is
the awaitable returned by ``Announcement.once``: it resolves with the first
payload delivered after subscription, or raises ``OnceCancelledError`` when
the subscription is cancelled or cleared first.

Usage:
    listener = bus.on("tick", handle_tick)
    ...
    listener.dispose()

    with bus.on("tick", handle_tick):
        bus.emit("tick", 1)

    payload = await bus.once("ready")
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Generator
from concurrent.futures import Future
from typing import Any, Generic, TypeVar

P = TypeVar("P")


def _consume(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()


class Listener:
    """Disposable subscription handle."""

    __slots__ = ("_dispose", "_is_alive")

    def __init__(self, dispose: Callable[[], bool], is_alive: Callable[[], bool]):
        self._dispose = dispose
        self._is_alive = is_alive

    def dispose(self) -> bool:
        """Unsubscribe. Returns False if the subscription was already gone."""
        return self._dispose()

    @property
    def active(self) -> bool:
        return self._is_alive()

    def __enter__(self) -> Listener:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._dispose()

    def __repr__(self) -> str:
        state = "active" if self.active else "disposed"
        return f"<Listener {state}>"


class Once(Generic[P]):
    """
    Single-resolution result of a one-shot subscription.

    Backed by a ``concurrent.futures.Future`` so it can be created and
    resolved with no event loop running; ``await`` bridges it onto the
    current loop. Awaiting it more than once yields the same outcome, and
    cancelling an awaiting task (a ``wait_for`` timeout, say) leaves the
    subscription in place.

    Each await goes through ``asyncio.shield`` over one wrapped future per
    loop, so repeated timed-out waits do not pile up callbacks.
    """

    __slots__ = ("_future", "_dispose", "_waiter")

    def __init__(self, dispose: Callable[[], bool]):
        self._future: Future = Future()
        # Running futures refuse cancel(), which wrap_future forwards from
        # the asyncio side.
        self._future.set_running_or_notify_cancel()
        self._dispose = dispose
        self._waiter: asyncio.Future | None = None

    def cancel(self) -> bool:
        """
        Drop the subscription and reject this Once.

        Returns False if it already resolved, was rejected, or was cleared.
        """
        return self._dispose()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> P:
        """Payload of a delivered Once; raises ``OnceCancelledError`` if rejected."""
        return self._future.result(timeout)

    def exception(self, timeout: float | None = None) -> BaseException | None:
        return self._future.exception(timeout)

    def add_done_callback(self, fn: Callable[[Once[P]], Any]) -> None:
        self._future.add_done_callback(lambda _: fn(self))

    def __await__(self) -> Generator[Any, None, P]:
        return asyncio.shield(self._loop_waiter()).__await__()

    def _loop_waiter(self) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        waiter = self._waiter
        if waiter is None or waiter.get_loop() is not loop:
            waiter = self._waiter = asyncio.wrap_future(self._future, loop=loop)
            # Retrieve the outcome so an unawaited rejection is not reported.
            waiter.add_done_callback(_consume)
        return waiter

    # Called by the owning Announcement only.

    def _resolve(self, payload: Any) -> None:
        self._future.set_result(payload)

    def _reject(self, error: BaseException) -> None:
        self._future.set_exception(error)

    def __repr__(self) -> str:
        if not self._future.done():
            state = "pending"
        elif self._future.exception() is not None:
            state = "cancelled"
        else:
            state = "resolved"
        return f"<Once {state}>"
