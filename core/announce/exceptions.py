"""
Announce Exceptions.

A small exception hierarchy for the pub/sub engine. Registry operations are
total (unknown topics give empty or false results), so the only exception
raised in normal operation is the rejection of a pending ``Once`` whose
subscription was removed before it fired.

All exceptions include:
- Descriptive messages with context
- Optional original exception chaining
- Structured error codes for programmatic handling
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class AnnounceError(Exception):
    """
    Base exception for all announce errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for categorization
        context: Additional context dict for debugging
        original_error: The underlying exception if this wraps another error
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_code = error_code or "ANNOUNCE_ERROR"
        self.context = context or {}
        self.original_error = original_error

        full_message = message
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            full_message = f"{message} [{context_str}]"

        super().__init__(full_message)

        if original_error:
            self.__cause__ = original_error


class OnceCancelledError(AnnounceError):
    """
    Raised when awaiting a ``Once`` that was cancelled or cleared before it fired.

    This is a routine termination notice, not an application fault. It carries
    no event payload; ``topic`` is kept for debugging only.
    """

    def __init__(self, topic: Hashable, **kwargs: Any):
        self.topic = topic
        context = kwargs.pop("context", {})
        context["topic"] = topic
        super().__init__(
            "Once subscription terminated before delivery",
            error_code="ONCE_CANCELLED",
            context=context,
            **kwargs,
        )


class ConfigurationError(AnnounceError):
    """Raised when logging configuration is invalid, e.g. an unknown level name."""

    def __init__(self, message: str, setting: str | None = None, **kwargs: Any):
        context = kwargs.pop("context", {})
        if setting:
            context["setting"] = setting
        super().__init__(message, error_code="CONFIGURATION_ERROR", context=context, **kwargs)


__all__ = [
    "AnnounceError",
    "OnceCancelledError",
    "ConfigurationError",
]
