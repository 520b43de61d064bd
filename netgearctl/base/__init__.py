"""Abstract base classes for the switch CLI channel."""

from netgearctl.base.transport import DEFAULT_TERMINATORS, BaseTransport

__all__ = [
    "BaseTransport",
    "DEFAULT_TERMINATORS",
]
