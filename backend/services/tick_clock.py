"""
Wall-clock tick gate.

Game logic advances at a fixed real-time interval, independent of how
often the host loop renders.
"""

import time
from typing import Callable, Optional

from domain.constants import TICK_SECONDS


class TickClock:
    """
    Fires at most once per `interval` seconds of wall-clock time.

    Args:
        interval: seconds between ticks
        clock: time source, defaults to time.monotonic
    """

    def __init__(self, interval: float = TICK_SECONDS, clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.interval = interval
        self.clock = clock
        self.last = clock()

    def ready(self, now: Optional[float] = None) -> bool:
        """Return True, and start a new interval, once enough time has elapsed."""
        if now is None:
            now = self.clock()
        if now - self.last >= self.interval:
            self.last = now
            return True
        return False

    def reset(self, now: Optional[float] = None) -> None:
        self.last = self.clock() if now is None else now
