"""Pytest configuration and fixtures."""

import logging

import pytest
import structlog

from announce import Announcement, CycleClock


class Recorder:
    """Callable handler that records every payload it receives."""

    def __init__(self, name: str = "", log: list | None = None):
        self.name = name
        self.calls: list[tuple] = []
        self._log = log

    def __call__(self, *args):
        self.calls.append(args)
        if self._log is not None:
            self._log.append((self.name, *args))

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture
def clock():
    """Private clock so tests do not depend on the process-wide one."""
    return CycleClock()


@pytest.fixture
def announcement(clock):
    """Fresh Announcement for each test."""
    return Announcement(clock=clock)


@pytest.fixture
def recorder():
    """Factory for recording handlers sharing one ordered call log."""
    log: list[tuple] = []

    def make(name: str = "") -> Recorder:
        return Recorder(name, log)

    make.log = log
    return make


@pytest.fixture
def restore_logging():
    """Undo global structlog and stdlib logging changes made by a test."""
    saved = structlog.get_config()
    was_configured = structlog.is_configured()
    root = logging.getLogger()
    root_handlers = list(root.handlers)
    root_level = root.level
    package_logger = logging.getLogger("announce")
    package_level = package_logger.level

    yield

    if was_configured:
        structlog.configure(**saved)
    else:
        structlog.reset_defaults()
    for handler in root.handlers[:]:
        if handler not in root_handlers:
            root.removeHandler(handler)
    root.setLevel(root_level)
    package_logger.setLevel(package_level)
