"""CLI exchange result and terminator classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TerminatorMatch(Enum):
    """Which kind of terminator the accumulated response ends with."""

    SUCCESS = "success"
    ERROR = "error"
    NONE = "none"


@dataclass(frozen=True)
class TerminatorSet:
    """Success and error markers that end a CLI exchange."""

    success: tuple[str, ...]
    errors: tuple[str, ...] = ()

    def classify(self, text: str) -> TerminatorMatch:
        if any(text.endswith(marker) for marker in self.errors):
            return TerminatorMatch.ERROR
        if any(text.endswith(marker) for marker in self.success):
            return TerminatorMatch.SUCCESS
        return TerminatorMatch.NONE

    def contains_error(self, text: str) -> bool:
        return any(marker in text for marker in self.errors)


@dataclass(frozen=True)
class CommandResult:
    """Raw response text of one exchange plus how it terminated."""

    text: str
    match: TerminatorMatch = TerminatorMatch.SUCCESS
    rejected: bool = False

    @property
    def ok(self) -> bool:
        return self.match is TerminatorMatch.SUCCESS and not self.rejected

    def endswith(self, suffix: str) -> bool:
        return self.text.endswith(suffix)
