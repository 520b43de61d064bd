"""SSH CLI transport built on paramiko's interactive shell."""

from __future__ import annotations

import time

import paramiko
from loguru import logger

from netgearctl import protocol
from netgearctl.base.transport import DEFAULT_TERMINATORS, DEFAULT_TIMEOUT, BaseTransport
from netgearctl.exceptions import AuthenticationError, ConnectionFailedError
from netgearctl.factory import register_transport
from netgearctl.models.command import TerminatorSet

CONNECT_TIMEOUT = 10
BUFFER_SIZE = 65535


@register_transport("ssh")
class SSHCLITransport(BaseTransport):
    """SSH channel to the same CLI the telnet transport talks to.

    SSH authenticates the user itself, so only the user-mode prompt is awaited
    after the shell opens.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int = 22,
        terminators: TerminatorSet = DEFAULT_TERMINATORS,
        timeout: float = DEFAULT_TIMEOUT,
        login_success: tuple[str, ...] = protocol.LOGIN_SUCCESS,
    ):
        super().__init__(host, username, password, port, terminators, timeout)
        self.login_success = login_success
        self._client: paramiko.SSHClient | None = None
        self._shell: paramiko.Channel | None = None

    def connect(self) -> None:
        """Establish SSH connection and open interactive shell."""
        self._client = paramiko.SSHClient()
        self._client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            self._client.connect(
                hostname=self.host,
                port=self.port or 22,
                username=self.username,
                password=self.password,
                look_for_keys=False,
                allow_agent=False,
                timeout=CONNECT_TIMEOUT,
            )
        except paramiko.AuthenticationException as e:
            self.disconnect()
            raise AuthenticationError(f"SSH authentication failed: {e}") from e
        except Exception as e:
            self.disconnect()
            raise ConnectionFailedError(f"SSH connection failed: {e}") from e

        self._shell = self._client.invoke_shell(width=200)
        self._shell.settimeout(CONNECT_TIMEOUT)

        self._read_until(TerminatorSet(success=self.login_success), self.timeout)
        logger.info(f"SSH connected to {self.host}")

    def disconnect(self) -> None:
        """Close SSH shell and connection."""
        if self._shell:
            try:
                self._shell.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing SSH shell: {e}")
            self._shell = None
        if self._client:
            try:
                self._client.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing SSH client: {e}")
            self._client = None

    def is_connected(self) -> bool:
        """Check if SSH connection and shell are active."""
        if self._client is None or self._shell is None:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active() and not self._shell.closed

    def _write(self, data: str) -> None:
        assert self._shell is not None
        self._shell.send(data.encode())

    def _recv(self, wait: float) -> str | None:
        assert self._shell is not None
        if not self._shell.recv_ready():
            if self._shell.closed:
                return None
            time.sleep(wait)
            if not self._shell.recv_ready():
                return None if self._shell.closed else ""
        return self._shell.recv(BUFFER_SIZE).decode("utf-8", errors="replace")
