"""Telnet CLI transport built on telnetlib3."""

from __future__ import annotations

import asyncio

import telnetlib3
from loguru import logger

from netgearctl import protocol
from netgearctl.base.transport import DEFAULT_TERMINATORS, DEFAULT_TIMEOUT, BaseTransport
from netgearctl.exceptions import ConnectionFailedError
from netgearctl.factory import register_transport
from netgearctl.models.command import TerminatorSet

BUFFER_SIZE = 65535
CONNECT_TIMEOUT = 10.0


@register_transport("telnet")
class TelnetCLITransport(BaseTransport):
    """Blocking telnet channel for the Netgear CLI.

    telnetlib3 is asyncio-based; this transport owns a private event loop and drives
    it from whichever thread calls it. Callers must serialize access (the switch
    facade does so with its session lock).
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int = 23,
        terminators: TerminatorSet = DEFAULT_TERMINATORS,
        timeout: float = DEFAULT_TIMEOUT,
        login_prompt: str = protocol.LOGIN_PROMPT,
        password_prompt: str = protocol.PASSWORD_PROMPT,
        login_success: tuple[str, ...] = protocol.LOGIN_SUCCESS,
    ):
        super().__init__(host, username, password, port, terminators, timeout)
        self.login_prompt = login_prompt
        self.password_prompt = password_prompt
        self.login_success = login_success
        self._loop: asyncio.AbstractEventLoop | None = None
        self._reader: telnetlib3.TelnetReader | None = None
        self._writer: telnetlib3.TelnetWriter | None = None

    def connect(self) -> None:
        """Open the telnet connection and log in."""
        self._loop = asyncio.new_event_loop()
        try:
            self._reader, self._writer = self._loop.run_until_complete(
                asyncio.wait_for(
                    telnetlib3.open_connection(
                        self.host,
                        self.port or 23,
                        encoding="utf8",
                        connect_minwait=0.05,
                        connect_maxwait=1.0,
                    ),
                    timeout=CONNECT_TIMEOUT,
                )
            )
        except (OSError, asyncio.TimeoutError) as e:
            self.disconnect()
            raise ConnectionFailedError(f"Telnet connection to {self.host} failed: {e}") from e

        try:
            self._login(self.login_prompt, self.password_prompt, self.login_success)
        except ConnectionFailedError:
            self.disconnect()
            raise
        logger.info(f"Telnet connected to {self.host}")

    def disconnect(self) -> None:
        """Close the telnet connection and its event loop."""
        if self._writer is not None:
            try:
                self._writer.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing telnet writer: {e}")
            self._writer = None
        self._reader = None
        if self._loop is not None:
            self._loop.close()
            self._loop = None

    def is_connected(self) -> bool:
        return self._writer is not None and self._reader is not None and not self._reader.at_eof()

    def _write(self, data: str) -> None:
        assert self._writer is not None
        self._writer.write(data)

    def _recv(self, wait: float) -> str | None:
        assert self._loop is not None and self._reader is not None
        try:
            chunk = self._loop.run_until_complete(asyncio.wait_for(self._reader.read(BUFFER_SIZE), timeout=wait))
        except asyncio.TimeoutError:
            return ""
        return chunk or None
