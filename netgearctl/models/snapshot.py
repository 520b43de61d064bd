"""Statistics snapshot and control schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

PORT_CONTROLS_CATEGORY = "Port Controls"
RELOAD_CONTROL = "Reload"
RELOAD_GRACE_PERIOD_MS = 180000


def port_control_label(port_id: str) -> str:
    return f"{PORT_CONTROLS_CATEGORY}#Port {port_id}"


class ControlType(str, Enum):
    """How a controllable label is operated."""

    PUSH = "Push"
    TOGGLE = "Toggle"


@dataclass(frozen=True)
class ControlSpec:
    """Describes one controllable label of a snapshot."""

    name: str
    control_type: ControlType
    value: str = ""
    label: str = ""
    label_pressed: str = ""
    label_on: str = ""
    label_off: str = ""
    grace_period_ms: int | None = None

    @classmethod
    def reload_button(cls) -> ControlSpec:
        return cls(
            name=RELOAD_CONTROL,
            control_type=ControlType.PUSH,
            label="Reload",
            label_pressed="Reloading",
            grace_period_ms=RELOAD_GRACE_PERIOD_MS,
        )

    @classmethod
    def port_switch(cls, port_id: str, up: bool) -> ControlSpec:
        return cls(
            name=port_control_label(port_id),
            control_type=ControlType.TOGGLE,
            value=str(up).lower(),
            label_on="On",
            label_off="Off",
        )


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class StatisticsSnapshot:
    """One complete poll cycle: ordered statistics plus the control schema.

    Snapshots are never mutated; :meth:`with_port_status` returns a new one.
    """

    statistics: Mapping[str, str] = field(default_factory=dict)
    controls: Mapping[str, ControlSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "statistics", _freeze(self.statistics))
        object.__setattr__(self, "controls", _freeze(self.controls))

    @classmethod
    def empty(cls) -> StatisticsSnapshot:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.statistics and not self.controls

    def get(self, label: str, default: str | None = None) -> str | None:
        return self.statistics.get(label, default)

    def control_types(self) -> dict[str, str]:
        """Map of controllable label to ``Push``/``Toggle``."""
        return {name: spec.control_type.value for name, spec in self.controls.items()}

    def groups(self) -> dict[str, dict[str, str]]:
        """Group statistics by the ``Category#Label`` naming convention.

        Labels without a ``#`` land in the ``""`` group.
        """
        grouped: dict[str, dict[str, str]] = {}
        for label, value in self.statistics.items():
            category, sep, name = label.partition("#")
            if not sep:
                category, name = "", label
            grouped.setdefault(category, {})[name] = value
        return grouped

    def with_port_status(self, port_id: str, up: bool) -> StatisticsSnapshot:
        """Copy with the port's control label (and switch value) set to ``up``."""
        label = port_control_label(port_id)
        statistics = dict(self.statistics)
        statistics[label] = str(up).lower()
        controls = dict(self.controls)
        controls[label] = ControlSpec.port_switch(port_id, up)
        return StatisticsSnapshot(statistics=statistics, controls=controls)
