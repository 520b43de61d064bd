"""Connection and timing settings for one switch."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from netgearctl.coordinator import COOLDOWN_DELAY, RECOVERY_DELAY
from netgearctl.session import CONTROL_TIMEOUT, STATISTICS_TIMEOUT


class SwitchSettings(BaseModel):
    host: str
    username: str = "admin"
    password: str = ""
    protocol: Literal["telnet", "ssh"] = "telnet"
    port: int | None = Field(default=None, ge=1, le=65535)
    control_timeout: float = Field(default=CONTROL_TIMEOUT, gt=0)
    statistics_timeout: float = Field(default=STATISTICS_TIMEOUT, gt=0)
    cooldown: float = Field(default=COOLDOWN_DELAY, gt=0)
    recovery: float = Field(default=RECOVERY_DELAY, gt=0)

    def transport_kwargs(self) -> dict:
        """Keyword arguments for :func:`netgearctl.factory.create_transport`."""
        kwargs: dict = {
            "username": self.username,
            "password": self.password,
            "timeout": self.statistics_timeout,
        }
        if self.port is not None:
            kwargs["port"] = self.port
        return kwargs
