"""Netgear stack switch monitoring and control over the CLI.

Polls telemetry (management IP, PoE, environment, port status and packet counters)
and drives port/reload controls through a single telnet or SSH CLI session.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"skiplog": False})
    glogger.enable(__name__)


# Import transports to trigger registration
import netgearctl.transports  # noqa: F401, E402
from netgearctl.base.transport import BaseTransport
from netgearctl.exceptions import (
    AuthenticationError,
    CommandTimeoutError,
    ConnectionFailedError,
    EscalationError,
    PortError,
    SwitchError,
)
from netgearctl.factory import create_transport, list_protocols
from netgearctl.models import ControlType, StatisticsSnapshot
from netgearctl.settings import SwitchSettings
from netgearctl.switch import NetgearSwitch

__all__ = [
    "glogger",
    "configure_logging",
    "create_transport",
    "list_protocols",
    "BaseTransport",
    "NetgearSwitch",
    "SwitchSettings",
    "StatisticsSnapshot",
    "ControlType",
    "SwitchError",
    "AuthenticationError",
    "ConnectionFailedError",
    "CommandTimeoutError",
    "EscalationError",
    "PortError",
]
