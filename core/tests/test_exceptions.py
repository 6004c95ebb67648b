"""Tests for the announce exception hierarchy.

Run with:
    cd core
    pytest tests/test_exceptions.py -v
"""

from announce.exceptions import AnnounceError, ConfigurationError, OnceCancelledError


class TestAnnounceErrorBase:
    """Test base AnnounceError functionality."""

    def test_basic_message(self):
        """Test basic error with just a message."""
        error = AnnounceError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.error_code == "ANNOUNCE_ERROR"

    def test_with_context(self):
        """Test error with context dict."""
        error = AnnounceError("Failed", context={"key": "value", "count": 42})
        assert str(error) == "Failed [key=value, count=42]"
        assert error.context == {"key": "value", "count": 42}

    def test_with_original_error(self):
        """Test exception chaining."""
        original = ValueError("original problem")
        error = AnnounceError("Wrapped error", original_error=original)
        assert error.original_error is original
        assert error.__cause__ is original


class TestOnceCancelledError:
    """Rejection of a terminated once() subscription."""

    def test_topic_and_code(self):
        """Test topic attribute and error code."""
        error = OnceCancelledError("ready")
        assert error.topic == "ready"
        assert error.error_code == "ONCE_CANCELLED"
        assert "topic=ready" in str(error)
        assert isinstance(error, AnnounceError)

    def test_non_string_topic(self):
        """Test that non-string topics are kept as-is."""
        sentinel = object()
        error = OnceCancelledError(sentinel)
        assert error.topic is sentinel
        assert error.context["topic"] is sentinel


class TestConfigurationError:
    """Invalid configuration."""

    def test_setting_in_context(self):
        """Test that the setting name lands in the context."""
        error = ConfigurationError("Unknown log level: LOUD", setting="log_level")
        assert error.error_code == "CONFIGURATION_ERROR"
        assert error.context == {"setting": "log_level"}
        assert isinstance(error, AnnounceError)
