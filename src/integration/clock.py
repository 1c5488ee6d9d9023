"""
Clock capability for the rewards ledger.

The functional core never reads time; the shell asks an injected `Clock` once
per entry point and passes the reading down as `now`. Tests use `ManualClock`
to advance time deterministically.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current time in integer seconds."""
        ...


class SystemClock:
    """Wall clock (Unix seconds, truncated)."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Simulated clock that only moves when told to."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be non-negative: {start}")
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        """Move forward by `seconds` and return the new reading."""
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards: {seconds}")
        self._now += int(seconds)
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError(f"cannot move the clock backwards: {timestamp} < {self._now}")
        self._now = int(timestamp)
