"""Millisecond-precision timestamps since the Unix epoch."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta

_ONE_MS = timedelta(milliseconds=1)


def _duration_millis(duration: timedelta) -> int:
    if duration < timedelta(0):
        raise ValueError("durations must not be negative")
    return duration // _ONE_MS


@dataclass(frozen=True, order=True)
class UnixTimestamp:
    """Milliseconds since the Unix epoch."""

    millis: int

    @classmethod
    def now(cls) -> UnixTimestamp:
        return cls(time.time_ns() // 1_000_000)

    def as_millis(self) -> int:
        return self.millis

    def __add__(self, other):
        if not isinstance(other, timedelta):
            return NotImplemented
        return UnixTimestamp(self.millis + _duration_millis(other))

    def __sub__(self, other):
        if isinstance(other, timedelta):
            millis = self.millis - _duration_millis(other)
            if millis < 0:
                raise ValueError("timestamp would precede the epoch")
            return UnixTimestamp(millis)
        if isinstance(other, UnixTimestamp):
            diff = self.millis - other.millis
            if diff < 0:
                raise ValueError("cannot subtract a later timestamp from an earlier one")
            return timedelta(milliseconds=diff)
        return NotImplemented

    def __int__(self) -> int:
        # Wraps like a cast to a signed 64-bit integer.
        return ((self.millis + 2**63) % 2**64) - 2**63

    def __str__(self) -> str:
        return str(self.millis)