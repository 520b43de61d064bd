"""Port data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PortRecord:
    """One stack/slot/port row as of the last poll.

    ``up`` is None when the row came from a source that carries no status column;
    the packet counters are kept verbatim as printed by the switch.
    """

    port_id: str
    up: bool | None = None
    tx_packets: str | None = None
    rx_packets: str | None = None
