"""Abstract base transport for the switch CLI channel."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from netgearctl import protocol
from netgearctl.exceptions import AuthenticationError, CommandTimeoutError, ConnectionFailedError
from netgearctl.models.command import CommandResult, TerminatorMatch, TerminatorSet

DEFAULT_TIMEOUT = 30.0
READ_DELAY = 0.1
# Quiet period after a terminator matched before the response counts as complete
SETTLE_DELAY = 0.3

DEFAULT_TERMINATORS = TerminatorSet(
    success=protocol.SUCCESS_TERMINATORS,
    errors=protocol.ERROR_TERMINATORS,
)


class BaseTransport(ABC):
    """Line-oriented CLI channel: send a command, receive text up to a terminator.

    Subclasses provide the byte pipe (``connect``, ``disconnect``, ``_write``, ``_recv``);
    terminator matching, login and timeouts live here.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int | None = None,
        terminators: TerminatorSet = DEFAULT_TERMINATORS,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.host = host
        self.username = username
        self.password = password
        self.port = port
        self.terminators = terminators
        self.timeout = timeout

    @abstractmethod
    def connect(self) -> None:
        """Establish the channel and log in."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the channel."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the channel is currently open."""

    @abstractmethod
    def _write(self, data: str) -> None:
        """Write raw text to the channel."""

    @abstractmethod
    def _recv(self, wait: float) -> str | None:
        """Return whatever arrives within ``wait`` seconds.

        Returns ``""`` when nothing arrived and None once the peer closed the channel.
        """

    def execute(self, command: str, timeout: float | None = None) -> CommandResult:
        """Send one command and read until a configured terminator.

        Raises:
            CommandTimeoutError: no terminator appeared within the timeout.
            ConnectionFailedError: the channel is closed or closes mid-exchange.
        """
        if not self.is_connected():
            raise ConnectionFailedError(f"Not connected to {self.host}. Call connect() first.")
        self._write(command + "\n")
        result = self._read_until(self.terminators, timeout or self.timeout)
        if self.terminators.contains_error(result.text):
            result = CommandResult(result.text, result.match, rejected=True)
        return result

    def send(self, command: str, timeout: float | None = None) -> str:
        """Like :meth:`execute` but return only the response text."""
        return self.execute(command, timeout).text

    def _login(self, login_prompt: str, password_prompt: str, success: tuple[str, ...]) -> str:
        """Answer the login and password prompts and wait for the user prompt."""
        try:
            self._read_until(TerminatorSet(success=(login_prompt,)), self.timeout)
            self._write(self.username + "\n")
            self._read_until(TerminatorSet(success=(password_prompt,)), self.timeout)
            self._write(self.password + "\n")
            return self._read_until(TerminatorSet(success=success), self.timeout).text
        except CommandTimeoutError as e:
            raise AuthenticationError(f"Login to {self.host} failed: {e}") from e

    def _read_until(self, markers: TerminatorSet, timeout: float) -> CommandResult:
        output = ""
        start = time.monotonic()

        while True:
            match = markers.classify(output)
            remaining = timeout - (time.monotonic() - start)
            if remaining <= 0:
                if match is not TerminatorMatch.NONE:
                    return CommandResult(output, match)
                raise CommandTimeoutError(
                    f"No terminator from {self.host} within {timeout}s",
                    partial_output=output,
                )

            wait = min(SETTLE_DELAY if match is not TerminatorMatch.NONE else READ_DELAY, remaining)
            chunk = self._recv(wait)
            if chunk is None:
                if match is not TerminatorMatch.NONE:
                    return CommandResult(output, match)
                raise ConnectionFailedError(f"Connection to {self.host} closed by peer")
            if not chunk:
                if match is not TerminatorMatch.NONE:
                    return CommandResult(output, match)
                continue
            output += chunk

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
