"""Environment (temperature, fans, power) data model."""

from __future__ import annotations

from dataclasses import dataclass, field

TEMPERATURE_CATEGORY = "Temperature Sensors"
FANS_CATEGORY = "Fans"
POWER_CATEGORY = "Power Modules"


@dataclass
class EnvironmentReadings:
    """Readings of one ``show environment`` scan, in three disjoint groups."""

    temperature: dict[str, str] = field(default_factory=dict)
    fans: dict[str, str] = field(default_factory=dict)
    power: dict[str, str] = field(default_factory=dict)

    def as_statistics(self) -> dict[str, str]:
        """Flatten into ``Category#Label`` statistics entries."""
        result: dict[str, str] = {}
        for category, readings in (
            (TEMPERATURE_CATEGORY, self.temperature),
            (FANS_CATEGORY, self.fans),
            (POWER_CATEGORY, self.power),
        ):
            for label, value in readings.items():
                result[f"{category}#{label}"] = value
        return result

    def __len__(self) -> int:
        return len(self.temperature) + len(self.fans) + len(self.power)
