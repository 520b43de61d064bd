"""Shared fixtures for the netgearctl test suite."""

from __future__ import annotations

from collections import defaultdict, deque

import pytest

from netgearctl.base.transport import DEFAULT_TERMINATORS, BaseTransport
from netgearctl.models.command import CommandResult

PROMPT = "\r\n(M4300-28G) #"

IP_MANAGEMENT = (
    "show ip management\r\n"
    "\r\n"
    "IP Address..................................... 192.168.1.10\r\n"
    "Subnet Mask.................................... 255.255.255.0\r\n"
    "Default Gateway................................ 192.168.1.1\r\n"
    "Burned In MAC Address.......................... \t28:80:88:AA:BB:CC\r\n" + PROMPT
)

POE = (
    "show poe\r\n"
    "\r\n"
    "Firmware Version............................... 1.1.0.7\r\n"
    "PSE Main Operational Status.................... ON\r\n"
    "Total Power (Main AC).......................... 480\r\n" + PROMPT
)

SWITCHPORT = (
    "show interface switchport\r\n"
    "\r\n"
    "Packets Received Without Error................. 7390141\r\n"
    "Packets Received With Error.................... 0\r\n"
    "Packets Transmitted Without Errors............. 4551298\r\n"
    "Transmit Packet Errors......................... 0\r\n"
    "Time Since Counters Last Cleared............... 12 day 3 hr 22 min 5 sec\r\n" + PROMPT
)

ENVIRONMENT_PAGE_1 = (
    "show environment\r\n"
    "\r\n"
    "Temperature Sensors:\r\n"
    "Unit   Description   State    Temp\r\n"
    "----   -----------   ------   ----\r\n"
    "1   Internal   Normal   25C   77F\r\n"
    "\r\n"
    "--More-- or (q)uit"
)

ENVIRONMENT_PAGE_2 = (
    "\r\n"
    "Fans:\r\n"
    "Unit   Description   Type    Speed   Duty level   State\r\n"
    "1   Fan-1   Fixed   8382   40%   Operational\r\n"
    "\r\n"
    "Power Modules:\r\n"
    "Unit   Description   State   Source\r\n"
    "1   PS-1   Operational   AC\r\n" + PROMPT
)

INTERFACES = (
    "show interface ethernet all | exclude lag\r\n"
    "\r\n"
    "Intf      Rx Errors   Tx Errors   Transmitted   Received\r\n"
    "--------- ----------- ----------- ------------- ----------\r\n"
    "1/0/1     0           0           123456        654321\r\n"
    "1/0/2     0           0           0             0\r\n" + PROMPT
)

PORT_STATUS = (
    "show port status all | exclude lag\r\n"
    "\r\n"
    "Intf      Media Type   STP State    Admin Mode   Link Status\r\n"
    "--------- ------------ ------------ ------------ -----------\r\n"
    "1/0/1     Copper       Forwarding   Enable       Up     \r\n"
    "1/0/2     Copper       Disabled     Enable       Down   \r\n" + PROMPT
)


class FakeTransport(BaseTransport):
    """Scripted transport: replies to each command from a queue of canned responses.

    A command without a scripted response gets ``default``. Responses may be
    exceptions, which are raised instead of returned.
    """

    def __init__(self, responses: dict | None = None, default: str = PROMPT, connected: bool = False):
        super().__init__("10.0.0.1", "admin", "secret", 23)
        self._queues: dict[str, deque] = defaultdict(deque)
        self.default = default
        self.commands: list[str] = []
        self.connect_calls = 0
        self.disconnect_calls = 0
        self._connected = connected
        for command, response in (responses or {}).items():
            self.script(command, response)

    def script(self, command: str, *responses) -> None:
        for response in responses:
            if isinstance(response, list):
                self._queues[command].extend(response)
            else:
                self._queues[command].append(response)

    def connect(self) -> None:
        self.connect_calls += 1
        self._connected = True

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected

    def execute(self, command: str, timeout: float | None = None) -> CommandResult:
        self.commands.append(command)
        queue = self._queues.get(command)
        response = queue.popleft() if queue else self.default
        if isinstance(response, BaseException):
            raise response
        match = DEFAULT_TERMINATORS.classify(response)
        return CommandResult(response, match, rejected=DEFAULT_TERMINATORS.contains_error(response))

    def _write(self, data: str) -> None:
        raise NotImplementedError

    def _recv(self, wait: float) -> str | None:
        raise NotImplementedError


class ManualTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval: float, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Run the callback the way a timer thread would (even if cancelled too late)."""
        self.function()


class ManualTimerFactory:
    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, interval: float, function) -> ManualTimer:
        timer = ManualTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.started and not t.cancelled]


def poll_responses() -> dict:
    """Canned responses for one full, escalated poll cycle."""
    return {
        "en": "en\r\n(M4300-28G) #",
        "show ip management": IP_MANAGEMENT,
        "show poe": POE,
        "show interface switchport": SWITCHPORT,
        "show environment": ENVIRONMENT_PAGE_1,
        "-": ENVIRONMENT_PAGE_2,
        "show interface ethernet all | exclude lag": INTERFACES,
        "show port status all | exclude lag": PORT_STATUS,
    }


@pytest.fixture()
def fake_transport():
    """FakeTransport scripted for one full poll cycle."""
    return FakeTransport(poll_responses())


@pytest.fixture()
def timers():
    """ManualTimerFactory collecting every timer the code under test creates."""
    return ManualTimerFactory()


@pytest.fixture()
def make_switch(timers):
    """Factory fixture building a NetgearSwitch around a FakeTransport."""
    from netgearctl.switch import NetgearSwitch

    def _make(transport: FakeTransport | None = None, **kwargs):
        transport = transport if transport is not None else FakeTransport(poll_responses())
        return NetgearSwitch(host="10.0.0.1", transport=transport, timer_factory=timers, **kwargs)

    return _make
