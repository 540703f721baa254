"""
Spacing between successive calls to the embedding provider.
"""

import time
from typing import Callable, Optional


class RateLimiter:
    """Enforces a minimum interval between successive acquire() calls.

    The clock and sleep functions are injectable so the policy can be
    exercised without waiting on wall-clock time.
    """

    def __init__(self, min_interval: float,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None

    @classmethod
    def from_rate(cls, requests_per_minute: float, **kwargs) -> "RateLimiter":
        """Build a limiter from a provider's requests-per-minute limit."""
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be > 0")
        return cls(60.0 / requests_per_minute, **kwargs)

    def acquire(self) -> float:
        """
        Block until the next call is allowed.

        Returns:
            Seconds spent waiting (0.0 on the first call)
        """
        waited = 0.0
        now = self._clock()
        if self._last_call is not None:
            remaining = self.min_interval - (now - self._last_call)
            if remaining > 0:
                self._sleep(remaining)
                waited = remaining
                now = self._clock()
        self._last_call = now
        return waited

    def reset(self) -> None:
        self._last_call = None
