"""Netgear stack switch client: statistics snapshots and controls."""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Any, Iterable, Self

from loguru import logger

from netgearctl import parsers, protocol
from netgearctl.base.transport import BaseTransport
from netgearctl.coordinator import COOLDOWN_DELAY, RECOVERY_DELAY, ControlCoordinator, ControlState, TimerFactory
from netgearctl.exceptions import CommandTimeoutError, ConnectionFailedError, EscalationError, PortError
from netgearctl.factory import create_transport
from netgearctl.models.control import PortToggle, Reload, parse_control_request
from netgearctl.models.snapshot import RELOAD_CONTROL, ControlSpec, StatisticsSnapshot, port_control_label
from netgearctl.session import CONTROL_TIMEOUT, STATISTICS_TIMEOUT, PaginatedExecutor, SessionManager
from netgearctl.settings import SwitchSettings


def assemble_snapshot(
    ip_management: str,
    poe: str,
    switchport: str,
    environment: str,
    interfaces: str,
    port_status: str,
) -> StatisticsSnapshot:
    """Parse the raw output of one poll cycle into a snapshot."""
    status = parsers.parse_port_status(port_status)
    ports = parsers.merge_port_records(status, parsers.parse_port_packets(interfaces))

    statistics: dict[str, str] = {}
    statistics.update(parsers.parse_key_values(ip_management, parsers.DOTS_SEPARATOR))
    statistics.update(parsers.parse_key_values(poe, parsers.DOTS_SEPARATOR))
    statistics.update(parsers.parse_environment(environment).as_statistics())

    controls: dict[str, ControlSpec] = {}
    for port_id, record in status.items():
        statistics[port_control_label(port_id)] = str(bool(record.up)).lower()
        controls[port_control_label(port_id)] = ControlSpec.port_switch(port_id, bool(record.up))
    statistics[RELOAD_CONTROL] = ""
    controls[RELOAD_CONTROL] = ControlSpec.reload_button()

    statistics.update(parsers.port_packet_statistics(ports))
    statistics.update(parsers.parse_switchport_totals(switchport))
    return StatisticsSnapshot(statistics=statistics, controls=controls)


class NetgearSwitch:
    """Monitoring and control client for a Netgear stackable switch.

    A single lock serializes every exchange on the CLI channel together with the
    control state and the cached snapshot. After a port toggle, and for the whole
    reboot after a reload, :meth:`poll` serves the cached snapshot instead of
    contacting the device.

    Usage::

        with NetgearSwitch(host="192.168.1.10", username="admin", password="secret") as switch:
            snapshot = switch.poll()
            switch.control("Port Controls#Port 1/0/3", "0")
    """

    def __init__(
        self,
        host: str,
        username: str = "admin",
        password: str = "",
        protocol: str = "telnet",
        port: int | None = None,
        *,
        transport: BaseTransport | None = None,
        control_timeout: float = CONTROL_TIMEOUT,
        statistics_timeout: float = STATISTICS_TIMEOUT,
        cooldown: float = COOLDOWN_DELAY,
        recovery: float = RECOVERY_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.host = host
        if transport is None:
            settings = SwitchSettings(
                host=host,
                username=username,
                password=password,
                protocol=protocol,
                port=port,
                statistics_timeout=statistics_timeout,
            )
            transport = create_transport(settings.protocol, host, **settings.transport_kwargs())

        self._lock = threading.RLock()
        self._session = SessionManager(transport, control_timeout, statistics_timeout)
        self._pages = PaginatedExecutor(self._session)
        self._coordinator = ControlCoordinator(self._lock, cooldown, recovery, timer_factory)
        self._snapshot: StatisticsSnapshot | None = None

    @classmethod
    def from_settings(cls, settings: SwitchSettings, **kwargs: Any) -> NetgearSwitch:
        return cls(
            host=settings.host,
            username=settings.username,
            password=settings.password,
            protocol=settings.protocol,
            port=settings.port,
            control_timeout=settings.control_timeout,
            statistics_timeout=settings.statistics_timeout,
            cooldown=settings.cooldown,
            recovery=settings.recovery,
            **kwargs,
        )

    @property
    def state(self) -> ControlState:
        with self._lock:
            return self._coordinator.state

    @property
    def snapshot(self) -> StatisticsSnapshot | None:
        """Last published snapshot, if any poll succeeded yet."""
        with self._lock:
            return self._snapshot

    def poll(self) -> StatisticsSnapshot:
        """Read a fresh statistics snapshot, or the cached one while suppressed.

        Raises:
            ConnectionFailedError: the channel could not be established.
            EscalationError: privileged mode could not be entered.
            CommandTimeoutError: a command (or one of its pages) timed out.
        """
        with self._lock:
            if self._coordinator.suppresses_polling():
                logger.info(f"{self.host} is in reboot or occupied. Skipping statistics refresh call.")
                return self._snapshot if self._snapshot is not None else StatisticsSnapshot.empty()

            try:
                if not self._session.ensure_escalated():
                    raise EscalationError(f"Unable to establish a privileged session with {self.host}")
                snapshot = self._collect()
            finally:
                self._session.disconnect()

            self._snapshot = snapshot
            logger.debug(f"Published snapshot with {len(snapshot.statistics)} statistics from {self.host}")
            return snapshot

    def control(self, name: str, value: object = None) -> None:
        """Apply one control request (``Reload`` or ``Port <id>`` = ``"1"``/``"0"``).

        Unknown names and values are logged and ignored; requests arriving during a
        reboot are dropped without touching the channel.
        """
        action = parse_control_request(name, value)
        if action is None:
            return

        with self._lock:
            if not self._coordinator.accepts_control():
                logger.info(f"{self.host} is rebooting, dropping control request {name}")
                return

            try:
                with self._session.using_timeout(self._session.control_timeout):
                    if not self._session.ensure_escalated():
                        return
                    if isinstance(action, Reload):
                        self._coordinator.reload(self._send_reload)
                    elif isinstance(action, PortToggle):
                        self._toggle_port(action)
            finally:
                self._session.disconnect()

    def control_many(self, requests: Iterable[tuple[str, object]]) -> None:
        """Apply several control requests in order."""
        requests = list(requests)
        if not requests:
            raise ValueError("Control requests cannot be empty")
        for name, value in requests:
            self.control(name, value)

    def disconnect(self) -> None:
        """Cancel pending timers and close the channel."""
        with self._lock:
            self._coordinator.shutdown()
            self._session.disconnect()

    def _collect(self) -> StatisticsSnapshot:
        ip_management = self._session.send(protocol.SHOW_IP_MANAGEMENT)
        poe = self._session.send(protocol.SHOW_POE)
        switchport = self._session.send(protocol.SHOW_INTERFACE_SWITCHPORT)
        environment = self._pages.run(protocol.SHOW_ENVIRONMENT)
        interfaces = self._pages.run(protocol.SHOW_INTERFACE_ETHERNET)
        port_status = self._pages.run(protocol.SHOW_PORT_STATUS)
        return assemble_snapshot(ip_management, poe, switchport, environment, interfaces, port_status)

    def _toggle_port(self, action: PortToggle) -> None:
        self._coordinator.begin_port_control()
        result = self._session.run(protocol.port_command(action.port_id, action.enabled))
        if not result.ok:
            raise PortError(f"Failed to {'enable' if action.enabled else 'disable'} port {action.port_id}: {result.text}")

        current = self._snapshot if self._snapshot is not None else StatisticsSnapshot.empty()
        self._snapshot = current.with_port_status(action.port_id, action.enabled)
        logger.info(f"{'Enabled' if action.enabled else 'Disabled'} port {action.port_id}")

    def _send_reload(self) -> None:
        response = self._session.run(protocol.RELOAD_COMMAND)
        # The stack drops the channel once the reload is confirmed
        try:
            if response.endswith(protocol.UNSAVED_CHANGES_PROMPT):
                self._session.send(protocol.reload_after_save())
            elif response.endswith(protocol.STACK_RELOAD_PROMPT):
                self._session.send(protocol.CONFIRM)
        except (ConnectionFailedError, CommandTimeoutError) as e:
            logger.debug(f"Channel to {self.host} went away after reload confirmation: {e}")

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
