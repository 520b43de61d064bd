"""Tests for the netgearctl exception hierarchy."""

import pytest

from netgearctl.exceptions import (
    AuthenticationError,
    CommandTimeoutError,
    ConnectionFailedError,
    EscalationError,
    PortError,
    SwitchError,
)


class TestExceptionHierarchy:
    """Test exception inheritance and structure."""

    def test_switch_error_inherits_from_exception(self):
        """SwitchError should inherit from Exception."""
        assert issubclass(SwitchError, Exception)
        assert str(SwitchError("test")) == "test"

    @pytest.mark.parametrize(
        "exc_class",
        [ConnectionFailedError, AuthenticationError, CommandTimeoutError, EscalationError, PortError],
    )
    def test_all_errors_are_switch_errors(self, exc_class):
        """Every library error can be caught as SwitchError."""
        assert issubclass(exc_class, SwitchError)
        exc = exc_class("failed")
        assert isinstance(exc, SwitchError)
        assert str(exc) == "failed"

    def test_authentication_error_is_connection_failure(self):
        """A rejected login is a kind of connection failure."""
        assert issubclass(AuthenticationError, ConnectionFailedError)
        assert not issubclass(EscalationError, ConnectionFailedError)


class TestCommandTimeoutError:
    """Test CommandTimeoutError specific functionality."""

    def test_partial_output_kept(self):
        """The output read before the timeout is preserved."""
        exc = CommandTimeoutError("timed out", partial_output="show env\r\nTemp")
        assert exc.partial_output == "show env\r\nTemp"
        assert str(exc) == "timed out"

    def test_partial_output_defaults_empty(self):
        """Without partial output the attribute is an empty string."""
        assert CommandTimeoutError("timed out").partial_output == ""
