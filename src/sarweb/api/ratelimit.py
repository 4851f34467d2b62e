"""Fixed-window rate limiting keyed by client address.

Counters live in process memory, so limits apply per worker process.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: int
    """Seconds until the client's current window ends."""


class FixedWindowRateLimiter:
    """Allow at most ``max_requests`` per client within each window.

    A client's window opens with its first request and lasts
    ``window_seconds``; the counter starts over once it has elapsed.

    Args:
        max_requests: Requests allowed per window.
        window_seconds: Window length in seconds.
        clock: Monotonic time source, injectable for tests.
    """

    # Expired windows are swept once the table grows past this many clients.
    _SWEEP_THRESHOLD = 10_000

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for ``key`` and decide whether it may proceed."""
        now = self._clock()
        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0
        count += 1
        self._windows[key] = (start, count)

        if len(self._windows) > self._SWEEP_THRESHOLD:
            self._sweep(now)

        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=max(math.ceil(start + self.window_seconds - now), 0),
        )

    def reset(self, key: str | None = None) -> None:
        """Forget one client's window, or every window when ``key`` is None."""
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)

    def _sweep(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]
