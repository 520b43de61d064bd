"""Tests for the terminator-driven read loop shared by all transports."""

from collections import deque

import pytest

from netgearctl.base.transport import BaseTransport
from netgearctl.exceptions import AuthenticationError, CommandTimeoutError, ConnectionFailedError
from netgearctl.models.command import TerminatorMatch, TerminatorSet


class PipeTransport(BaseTransport):
    """In-memory byte pipe: chunks queued by the test come back from _recv."""

    def __init__(self, chunks=(), timeout: float = 0.5, replies: dict | None = None):
        super().__init__("10.0.0.1", "admin", "secret", 23, timeout=timeout)
        self.incoming = deque(chunks)
        self.replies = replies or {}
        self.written: list[str] = []
        self.open = True
        self.closed_by_peer = False

    def connect(self) -> None:
        self.open = True

    def disconnect(self) -> None:
        self.open = False

    def is_connected(self) -> bool:
        return self.open

    def _write(self, data: str) -> None:
        self.written.append(data)
        self.incoming.extend(self.replies.get(data, ()))

    def _recv(self, wait: float) -> str | None:
        if self.incoming:
            return self.incoming.popleft()
        if self.closed_by_peer:
            return None
        return ""


class TestTerminatorSet:
    """Test terminator classification."""

    def test_classify(self):
        """Error markers win over success markers; anything else is NONE."""
        markers = TerminatorSet(success=("#", "\n"), errors=("% Invalid input",))

        assert markers.classify("(sw) #") is TerminatorMatch.SUCCESS
        assert markers.classify("line\n") is TerminatorMatch.SUCCESS
        assert markers.classify("% Invalid input") is TerminatorMatch.ERROR
        assert markers.classify("partial") is TerminatorMatch.NONE
        assert markers.classify("") is TerminatorMatch.NONE


class TestExecute:
    """Test BaseTransport.execute."""

    def test_reads_chunks_until_prompt(self):
        """Chunks are concatenated until the output ends with a terminator."""
        transport = PipeTransport(["show poe\r\nPoE..", "..ON\r\n(M4300) ", "#"])

        result = transport.execute("show poe")

        assert transport.written == ["show poe\n"]
        assert result.text == "show poe\r\nPoE....ON\r\n(M4300) #"
        assert result.match is TerminatorMatch.SUCCESS
        assert result.ok

    def test_more_prompt_terminates_a_page(self):
        """The pagination prompt ends an exchange."""
        transport = PipeTransport(["rows\r\n--More-- or (q)uit"])
        result = transport.execute("show environment")
        assert result.text.endswith("--More-- or (q)uit")

    def test_invalid_input_marks_result_rejected(self):
        """Output carrying the invalid-input marker is flagged as rejected."""
        transport = PipeTransport(["\r\n% Invalid input detected at '^' marker.\r\n\r\n(M4300) #"])

        result = transport.execute("interface 9/9/9")

        assert result.rejected is True
        assert result.ok is False

    def test_timeout_without_terminator(self):
        """No terminator before the timeout raises with the partial output."""
        transport = PipeTransport(["still going"], timeout=0.3)

        with pytest.raises(CommandTimeoutError) as exc_info:
            transport.execute("show environment")
        assert exc_info.value.partial_output == "still going"

    def test_peer_close_mid_exchange(self):
        """A channel closed before any terminator raises ConnectionFailedError."""
        transport = PipeTransport(["half a line"])
        transport.closed_by_peer = True

        with pytest.raises(ConnectionFailedError):
            transport.execute("reload")

    def test_not_connected(self):
        """Executing on a closed channel raises instead of writing."""
        transport = PipeTransport()
        transport.open = False

        with pytest.raises(ConnectionFailedError):
            transport.execute("en")
        assert transport.written == []

    def test_send_returns_text(self):
        """send() is execute() reduced to the response text."""
        transport = PipeTransport(["en\r\n(M4300) #"])
        assert transport.send("en") == "en\r\n(M4300) #"


class TestLogin:
    """Test the shared login sequence."""

    def test_login_sequence(self):
        """Username and password answer their prompts in order."""
        transport = PipeTransport(
            ["\r\nUser:"],
            replies={"admin\n": ["Password:"], "secret\n": ["\r\n(M4300) >"]},
        )

        output = transport._login("User:", "Password:", (">",))

        assert transport.written == ["admin\n", "secret\n"]
        assert output.endswith(">")

    def test_login_timeout_is_authentication_error(self):
        """A missing login-success marker is reported as an authentication failure."""
        transport = PipeTransport(
            ["User:"],
            timeout=0.3,
            replies={"admin\n": ["Password:"], "secret\n": ["\r\nAccess denied"]},
        )

        with pytest.raises(AuthenticationError):
            transport._login("User:", "Password:", (">",))
