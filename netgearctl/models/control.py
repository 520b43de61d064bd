"""Inbound control requests."""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from netgearctl.models.snapshot import RELOAD_CONTROL

_PORT_CONTROL = re.compile(r"(?:Port Controls#)?Port (\d+/\d+/\d+)")


@dataclass(frozen=True)
class Reload:
    """Reload the whole stack."""


@dataclass(frozen=True)
class PortToggle:
    """Bring a port up (``enabled=True``) or shut it down."""

    port_id: str
    enabled: bool


ControlAction = Reload | PortToggle


def parse_control_request(name: str, value: object = None) -> ControlAction | None:
    """Translate a property name/value pair into a control action.

    Recognized names are ``Reload`` and ``Port <id>`` (optionally prefixed with
    ``Port Controls#``); port values are ``"1"`` (up) and ``"0"`` (shutdown).
    Anything else is logged and yields None.
    """
    if name == RELOAD_CONTROL:
        return Reload()

    port_match = _PORT_CONTROL.fullmatch(name)
    if port_match:
        port_id = port_match.group(1)
        text = str(value)
        if text == "1":
            return PortToggle(port_id, True)
        if text == "0":
            return PortToggle(port_id, False)
        logger.warning(f"Unexpected control value {text} for the port {port_id}")
        return None

    logger.info(f"Command {name} is not implemented. Skipping.")
    return None
