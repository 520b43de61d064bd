"""CLI session: connection upkeep, privilege escalation and paginated commands."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from loguru import logger

from netgearctl import protocol
from netgearctl.base.transport import BaseTransport
from netgearctl.models.command import CommandResult

CONTROL_TIMEOUT = 3.0
STATISTICS_TIMEOUT = 30.0


class Privilege(Enum):
    """CLI privilege level of the session."""

    NORMAL = "normal"
    ESCALATED = "escalated"


class SessionManager:
    """Owns the single CLI channel to one switch.

    The channel is (re)connected on demand; every exchange uses the currently
    selected timeout, which is the statistics timeout unless a caller switched to
    the control timeout with :meth:`using_timeout`.
    """

    def __init__(
        self,
        transport: BaseTransport,
        control_timeout: float = CONTROL_TIMEOUT,
        statistics_timeout: float = STATISTICS_TIMEOUT,
    ):
        self._transport = transport
        self.control_timeout = control_timeout
        self.statistics_timeout = statistics_timeout
        self.timeout = statistics_timeout
        self.privilege = Privilege.NORMAL

    @property
    def host(self) -> str:
        return self._transport.host

    @property
    def connected(self) -> bool:
        return self._transport.is_connected()

    @contextmanager
    def using_timeout(self, timeout: float) -> Iterator[None]:
        """Temporarily switch the per-exchange timeout."""
        previous = self.timeout
        self.timeout = timeout
        try:
            yield
        finally:
            self.timeout = previous

    def run(self, command: str) -> CommandResult:
        """Send one command over the channel."""
        logger.debug(f"{self.host} <- {command!r}")
        return self._transport.execute(command, timeout=self.timeout)

    def send(self, command: str) -> str:
        return self.run(command).text

    def ensure_escalated(self) -> bool:
        """Make sure the channel is open and in privileged mode.

        The device may ask for the password again when ``en`` is issued, so a
        trailing password prompt is answered before checking for the ``#`` prompt.

        Returns:
            True if the session reached privileged mode.
        """
        if not self._transport.is_connected():
            self.privilege = Privilege.NORMAL
            self._transport.connect()

        response = self.send(protocol.ENABLE_COMMAND)
        response = self._answer_password_prompt(response)

        if response.endswith(protocol.PRIVILEGED_PROMPT):
            self.privilege = Privilege.ESCALATED
            return True

        self.privilege = Privilege.NORMAL
        logger.error(f"Telnet connection to {self.host} cannot be established in privileged mode")
        return False

    def _answer_password_prompt(self, response: str) -> str:
        if response.endswith(protocol.PASSWORD_PROMPT):
            return self.send(self._transport.password)
        return response

    def disconnect(self) -> None:
        """Tear the channel down; the next exchange reconnects."""
        self.privilege = Privilege.NORMAL
        if self._transport.is_connected():
            self._transport.disconnect()


class PaginatedExecutor:
    """Drains listing commands whose output is split into ``--More--`` pages."""

    def __init__(self, session: SessionManager):
        self._session = session

    def run(self, command: str) -> str:
        """Send ``command`` and page forward until the privileged prompt shows up.

        Returns:
            The concatenated pages, including the final prompt line.
        """
        response = self._session.send(command)
        pages = 1
        while not response.endswith(protocol.PRIVILEGED_PROMPT):
            response += self._session.send(protocol.PAGE_ADVANCE)
            pages += 1
        if pages > 1:
            logger.debug(f"{command!r} drained in {pages} pages")
        return response
