"""Parsers turning Netgear CLI text into key/value telemetry."""

from __future__ import annotations

import re
from enum import Enum

from loguru import logger

from netgearctl.models.environment import EnvironmentReadings
from netgearctl.models.port import PortRecord

DOTS_SEPARATOR = r"\.{2,}"
UNDERSCORES_SEPARATOR = r"_{2,}"

PORT_ROW = re.compile(r"\n*\d/\d/\d.+")
COLUMN_SPLIT = re.compile(r" {2,}")
ENV_COLUMN_SPLIT = re.compile(r"\s{2,}")

TOTAL_PACKETS_CATEGORY = "TotalPacketsStatistics"
PORT_PACKETS_CATEGORY = "Ports Packets Statistics"

# Statistics label -> "show interface switchport" label
SWITCHPORT_TOTALS = {
    "Total Packets Received Without Errors": "Packets Received Without Error",
    "Total Packets Transmitted Without Errors": "Packets Transmitted Without Errors",
    "Total Packets Received With Errors": "Packets Received With Error",
    "Total Packets Transmitted With Errors": "Transmit Packet Errors",
    "Time Since Counters Last Cleared": "Time Since Counters Last Cleared",
}


def parse_key_values(text: str, separator: str = DOTS_SEPARATOR) -> dict[str, str]:
    """Parse ``Label.......Value`` style output.

    Each line containing ``separator`` is split at its first occurrence; the left
    part is kept verbatim as the key, the right part is stripped and loses its tabs.

    Args:
        text: Raw CLI response.
        separator: Regex of the run separating label and value, e.g. ``\\.{2,}`` or
            ``_{2,}``.
    """
    pattern = re.compile(separator)
    result: dict[str, str] = {}
    for line in text.split("\n"):
        if not pattern.search(line):
            continue
        key, value = pattern.split(line, maxsplit=1)
        result[key] = value.strip().replace("\t", "")
    return result


def _port_rows(text: str) -> list[tuple[str, list[str]]]:
    """Return (row, columns) for every stack/slot/port row of a tabular listing."""
    rows: list[tuple[str, list[str]]] = []
    for row in text.split("\r"):
        if not PORT_ROW.fullmatch(row):
            continue
        columns = [column for column in COLUMN_SPLIT.split(row) if column]
        columns[0] = columns[0].replace("\n", "")
        rows.append((row, columns))
    return rows


def parse_port_status(text: str) -> dict[str, PortRecord]:
    """Parse ``show port status all``: a port is up iff its row contains `` Up ``."""
    ports: dict[str, PortRecord] = {}
    for row, columns in _port_rows(text):
        port_id = columns[0]
        ports[port_id] = PortRecord(port_id=port_id, up=" Up " in row)
    return ports


def parse_port_packets(text: str) -> dict[str, PortRecord]:
    """Parse ``show interface ethernet all``: column 3 transmitted, column 4 received."""
    ports: dict[str, PortRecord] = {}
    for _, columns in _port_rows(text):
        if len(columns) < 5:
            logger.debug(f"Skipping short port counters row {columns}")
            continue
        ports[columns[0]] = PortRecord(port_id=columns[0], tx_packets=columns[3], rx_packets=columns[4])
    return ports


def merge_port_records(status: dict[str, PortRecord], packets: dict[str, PortRecord]) -> dict[str, PortRecord]:
    """Combine status rows and counter rows of the same poll into one record per port."""
    merged = {port_id: PortRecord(port_id=port_id, up=record.up) for port_id, record in status.items()}
    for port_id, record in packets.items():
        target = merged.setdefault(port_id, PortRecord(port_id=port_id))
        target.tx_packets = record.tx_packets
        target.rx_packets = record.rx_packets
    return merged


def port_packet_statistics(ports: dict[str, PortRecord]) -> dict[str, str]:
    stats: dict[str, str] = {}
    for port_id, record in ports.items():
        if record.rx_packets is None or record.tx_packets is None:
            continue
        stats[f"{PORT_PACKETS_CATEGORY}#Port {port_id} Received"] = record.rx_packets
        stats[f"{PORT_PACKETS_CATEGORY}#Port {port_id} Transmitted"] = record.tx_packets
    return stats


def parse_switchport_totals(text: str) -> dict[str, str]:
    """Pick the switch-wide packet totals out of ``show interface switchport``."""
    values = parse_key_values(text, DOTS_SEPARATOR)
    stats: dict[str, str] = {}
    for label, source in SWITCHPORT_TOTALS.items():
        if source in values:
            stats[f"{TOTAL_PACKETS_CATEGORY}#{label}"] = values[source]
    return stats


class _EnvironmentMode(Enum):
    NONE = 0
    TEMPERATURE = 1
    FANS = 2
    POWER = 3


_ENVIRONMENT_HEADERS = (
    ("Temperature Sensors:", _EnvironmentMode.TEMPERATURE),
    ("Fans:", _EnvironmentMode.FANS),
    ("Power Modules:", _EnvironmentMode.POWER),
)


def parse_environment(text: str) -> EnvironmentReadings:
    """Scan ``show environment`` output section by section.

    A section header switches the mode; data lines start with a digit and are read
    by fixed column positions. Rows too short for their section are skipped.
    """
    readings = EnvironmentReadings()
    mode = _EnvironmentMode.NONE

    for line in text.split("\n"):
        for header, header_mode in _ENVIRONMENT_HEADERS:
            if line.startswith(header):
                mode = header_mode

        if not line or not line[0].isdigit():
            continue

        columns = ENV_COLUMN_SPLIT.split(line.replace("\r", ""))
        try:
            if mode is _EnvironmentMode.TEMPERATURE:
                readings.temperature[f"Temp. Sensor {columns[0]}, {columns[1]}"] = f"{columns[2]}, {columns[3]}"
            elif mode is _EnvironmentMode.FANS:
                readings.fans[f"Fan {columns[0]}, {columns[1]}"] = f"{columns[5]}, {columns[3]}rps / {columns[4]}"
            elif mode is _EnvironmentMode.POWER:
                readings.power[f"Power supply {columns[0]}, {columns[1]}"] = f"{columns[2]}, {columns[3]}"
            else:
                logger.info(f"No sensor data in line {line}")
        except IndexError:
            logger.debug(f"Skipping malformed {mode.name.lower()} line {line!r}")

    logger.debug(f"Parsed {len(readings)} environment readings")
    return readings
