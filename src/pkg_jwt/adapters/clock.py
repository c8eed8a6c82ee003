from __future__ import annotations

import time
from dataclasses import dataclass

from ..domain.ports import Clock


class SystemClock(Clock):
    """Wall-clock Unix epoch seconds (UTC by definition)."""

    def now(self) -> int:
        return int(time.time())


@dataclass(slots=True)
class FixedClock(Clock):
    """
    Clock frozen at a given epoch second. Useful in tests and for
    re-checking a token "as of" some instant.
    """
    epoch: int

    def now(self) -> int:
        return self.epoch

    def advance(self, seconds: int) -> None:
        self.epoch += seconds
