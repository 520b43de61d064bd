"""Transport registry and factory for CLI channel creation."""

from __future__ import annotations

from typing import Any, Callable

from netgearctl.base.transport import BaseTransport

_TRANSPORT_REGISTRY: dict[str, type[BaseTransport]] = {}


def register_transport(name: str) -> Callable[[type[BaseTransport]], type[BaseTransport]]:
    """Decorator to register a transport class under a protocol name.

    Usage::

        @register_transport("telnet")
        class TelnetCLITransport(BaseTransport):
            ...
    """

    def decorator(cls: type[BaseTransport]) -> type[BaseTransport]:
        _TRANSPORT_REGISTRY[name.lower()] = cls
        return cls

    return decorator


def create_transport(protocol: str, host: str, **kwargs: Any) -> BaseTransport:
    """Create a CLI transport for the given protocol.

    Args:
        protocol: Protocol name ("telnet" or "ssh").
        host: Switch IP address or hostname.
        **kwargs: Transport keyword arguments (username, password, port, ...).

    Raises:
        ValueError: If the protocol is not registered.
    """
    protocol_lower = protocol.lower()
    if protocol_lower not in _TRANSPORT_REGISTRY:
        available = ", ".join(sorted(_TRANSPORT_REGISTRY.keys()))
        raise ValueError(f"Unknown protocol '{protocol}'. Available: {available}")

    cls = _TRANSPORT_REGISTRY[protocol_lower]
    return cls(host=host, **kwargs)


def list_protocols() -> list[str]:
    """Return a sorted list of registered protocol names."""
    return sorted(_TRANSPORT_REGISTRY.keys())
