"""Data models for switch telemetry and control."""

from netgearctl.models.command import CommandResult, TerminatorMatch, TerminatorSet
from netgearctl.models.control import ControlAction, PortToggle, Reload, parse_control_request
from netgearctl.models.environment import EnvironmentReadings
from netgearctl.models.port import PortRecord
from netgearctl.models.snapshot import ControlSpec, ControlType, StatisticsSnapshot, port_control_label

__all__ = [
    "CommandResult",
    "TerminatorMatch",
    "TerminatorSet",
    "ControlAction",
    "PortToggle",
    "Reload",
    "parse_control_request",
    "EnvironmentReadings",
    "PortRecord",
    "ControlSpec",
    "ControlType",
    "StatisticsSnapshot",
    "port_control_label",
]
