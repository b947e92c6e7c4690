"""Clock abstraction used to compute and evaluate expirations."""

import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant, in seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()
