from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias


class KeepAliveParseError(ValueError):
    pass


class TimeUnit(StrEnum):
    seconds = "s"
    minutes = "m"
    hours = "hr"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Indefinitely:
    """Never unload the model."""


@dataclass(frozen=True, slots=True)
class UnloadOnCompletion:
    """Unload the model as soon as the request finishes."""


@dataclass(frozen=True, slots=True)
class Until:
    """Keep the model loaded for `time` units after the request."""

    time: int
    unit: TimeUnit

    def __post_init__(self) -> None:
        if isinstance(self.time, bool) or not isinstance(self.time, int):
            raise ValueError(f"time must be an int, got {type(self.time).__name__}")
        if self.time < 0:
            raise ValueError(f"time must be non-negative, got {self.time}")
        if not isinstance(self.unit, TimeUnit):
            object.__setattr__(self, "unit", TimeUnit(self.unit))


# Models are unloaded after 5 minutes of inactivity unless told otherwise.
KeepAlive: TypeAlias = Indefinitely | UnloadOnCompletion | Until

INDEFINITELY = Indefinitely()
UNLOAD_ON_COMPLETION = UnloadOnCompletion()

_DURATION_RE = re.compile(r"(\d+)(s|m|hr)")
_INTEGER_RE = re.compile(r"-?\d+")


def encode_keep_alive(keep_alive: KeepAlive) -> int | str:
    """Wire value for the `keep_alive` request field: -1, 0 or e.g. "30m"."""

    match keep_alive:
        case Indefinitely():
            return -1
        case UnloadOnCompletion():
            return 0
        case Until(time=time, unit=unit):
            return f"{time}{unit.symbol}"


def _from_seconds(n: int) -> KeepAlive:
    if n < 0:
        return INDEFINITELY
    if n == 0:
        return UNLOAD_ON_COMPLETION
    return Until(n, TimeUnit.seconds)


def decode_keep_alive(raw: Any) -> KeepAlive:
    """Parse a wire or environment value back into a KeepAlive.

    Bare numbers are seconds, as the service reads them.
    """

    if isinstance(raw, int) and not isinstance(raw, bool):
        return _from_seconds(raw)

    if isinstance(raw, str):
        if _INTEGER_RE.fullmatch(raw):
            return _from_seconds(int(raw))
        m = _DURATION_RE.fullmatch(raw)
        if m:
            return Until(int(m.group(1)), TimeUnit(m.group(2)))

    raise KeepAliveParseError(f"Invalid keep_alive value: {raw!r}")
