"""Typed, synchronous in-process publish/subscribe."""

from .announcement import Announcement
from .exceptions import AnnounceError, ConfigurationError, OnceCancelledError
from .listener import Listener, Once
from .topic import Topic
from .tracker import CycleClock

__all__ = [
    "Announcement",
    "AnnounceError",
    "ConfigurationError",
    "CycleClock",
    "Listener",
    "Once",
    "OnceCancelledError",
    "Topic",
]
