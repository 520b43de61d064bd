"""CLI entry point for Netgear switch monitoring and control.

Examples:
  # One statistics snapshot, grouped by category
  netgearctl --host 192.168.1.10 --username admin --password <PW> monitor

  # Poll every 60 seconds, five times
  netgearctl --host 192.168.1.10 --password <PW> watch --interval 60 --count 5

  # Shut a port down / bring it back up
  netgearctl --host 192.168.1.10 --password <PW> port 1/0/3 down
  netgearctl --host 192.168.1.10 --password <PW> port 1/0/3 up

  # Reload the whole stack
  netgearctl --host 192.168.1.10 --password <PW> reload

Host, username and password fall back to NETGEARCTL_HOST, NETGEARCTL_USERNAME and
NETGEARCTL_PASSWORD.
"""

from __future__ import annotations

import argparse
import os
import sys
import time

from loguru import logger
from pydantic import ValidationError
from tabulate import tabulate

from netgearctl import configure_logging
from netgearctl.exceptions import SwitchError
from netgearctl.factory import list_protocols
from netgearctl.models.snapshot import StatisticsSnapshot
from netgearctl.settings import SwitchSettings
from netgearctl.switch import NetgearSwitch


def print_snapshot(snapshot: StatisticsSnapshot) -> None:
    """Print a snapshot as one table per category."""
    if snapshot.is_empty:
        print("No statistics available")
        return

    for category, values in snapshot.groups().items():
        print(f"\n=== {category or 'General'} ===")
        print(tabulate(list(values.items()), tablefmt="plain"))

    controls = snapshot.control_types()
    if controls:
        print("\n=== Controls ===")
        print(tabulate(sorted(controls.items()), headers=["Name", "Type"], tablefmt="simple"))


def cmd_monitor(switch: NetgearSwitch, args: argparse.Namespace) -> None:
    """Poll once and print the snapshot."""
    print_snapshot(switch.poll())


def cmd_watch(switch: NetgearSwitch, args: argparse.Namespace) -> None:
    """Poll repeatedly at a fixed interval."""
    done = 0
    while args.count is None or done < args.count:
        if done:
            time.sleep(args.interval)
        snapshot = switch.poll()
        done += 1
        print(f"\n##### Poll {done} ({switch.state.value}) #####")
        print_snapshot(snapshot)


def cmd_port(switch: NetgearSwitch, args: argparse.Namespace) -> None:
    """Bring a port up or shut it down."""
    switch.control(f"Port {args.port_id}", "1" if args.action == "up" else "0")
    print(f"Port {args.port_id} {args.action}")


def cmd_reload(switch: NetgearSwitch, args: argparse.Namespace) -> None:
    """Reload the stack."""
    switch.control("Reload")
    print(f"Reload requested for {switch.host}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for switch monitoring and control."""
    parser = argparse.ArgumentParser(
        prog="netgearctl",
        description="Netgear stack switch monitoring and control over telnet/SSH CLI",
    )
    parser.add_argument("--host", default=os.getenv("NETGEARCTL_HOST"), help="Switch IP address or hostname")
    parser.add_argument(
        "--username",
        default=os.getenv("NETGEARCTL_USERNAME", "admin"),
        help="Username (default: admin)",
    )
    parser.add_argument("--password", default=os.getenv("NETGEARCTL_PASSWORD", ""), help="Login/enable password")
    parser.add_argument("--protocol", choices=list_protocols(), default="telnet", help="CLI transport")
    parser.add_argument("--port", type=int, help="Transport port (default: 23 telnet, 22 ssh)")
    parser.add_argument("--control-timeout", type=float, help="Per-command timeout for controls (s)")
    parser.add_argument("--statistics-timeout", type=float, help="Per-command timeout for polls (s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # monitor
    subparsers.add_parser("monitor", help="Show one statistics snapshot")

    # watch
    watch = subparsers.add_parser("watch", help="Poll statistics repeatedly")
    watch.add_argument("--interval", type=float, default=30.0, help="Seconds between polls (default: 30)")
    watch.add_argument("--count", type=int, help="Number of polls (default: forever)")

    # port
    port = subparsers.add_parser("port", help="Port control")
    port.add_argument("port_id", help="Port in stack/slot/port form, e.g. 1/0/3")
    port.add_argument("action", choices=["up", "down"])

    # reload
    subparsers.add_parser("reload", help="Reload the whole stack")

    return parser


COMMANDS = {
    "monitor": cmd_monitor,
    "watch": cmd_watch,
    "port": cmd_port,
    "reload": cmd_reload,
}


def build_settings(parsed: argparse.Namespace) -> SwitchSettings:
    values: dict = {
        "host": parsed.host,
        "username": parsed.username,
        "password": parsed.password,
        "protocol": parsed.protocol,
        "port": parsed.port,
    }
    if parsed.control_timeout is not None:
        values["control_timeout"] = parsed.control_timeout
    if parsed.statistics_timeout is not None:
        values["statistics_timeout"] = parsed.statistics_timeout
    return SwitchSettings(**values)


def main(args: list[str] | None = None) -> None:
    """Main entry point for the switch CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)
    if not parsed.host:
        parser.error("--host is required (or set NETGEARCTL_HOST)")

    os.environ["LOGURU_LEVEL"] = "DEBUG" if parsed.verbose else os.getenv("LOGURU_LEVEL", "WARNING")
    configure_logging()

    try:
        settings = build_settings(parsed)
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        with NetgearSwitch.from_settings(settings) as switch:
            COMMANDS[parsed.command](switch, parsed)
    except SwitchError as e:
        logger.debug(f"Command {parsed.command} failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
