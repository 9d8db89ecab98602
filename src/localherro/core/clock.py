"""
Wall-clock abstraction.

Registries read "now" through a `Clock` so retention windows can be tested by
advancing a `ManualClock` instead of sleeping.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Epoch milliseconds from the process clock."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


@dataclass
class ManualClock:
    """A settable clock (tests, replays)."""

    current_ms: int = 0

    def now_ms(self) -> int:
        return self.current_ms

    def advance(self, *, seconds: float = 0.0, ms: int = 0) -> None:
        self.current_ms += int(seconds * 1000) + int(ms)
