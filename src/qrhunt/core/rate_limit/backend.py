"""In-process fixed window rate limiter.

Counters live in this process only. Each replica of the service enforces
its own limits, which is adequate for slowing down credential stuffing
and scan spamming but is not a global quota.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    retry_after: int | None = None


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Counts hits per key in fixed windows.

    The first hit for a key opens a window of ``window`` seconds. Hits are
    allowed while the count is below ``limit``; once the window expires the
    next hit opens a fresh one.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the rate limiter.

        Args:
            clock: Monotonic time source, replaceable in tests
        """
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def hit(self, key: str, limit: int, window: int) -> RateLimitResult:
        """Record a hit for ``key`` and report whether it is allowed.

        Args:
            key: Identifier to rate limit (endpoint plus caller)
            limit: Maximum number of hits allowed in the window
            window: Window length in seconds

        Returns:
            RateLimitResult with allowed status and metadata
        """
        now = self._clock()
        entry = self._windows.get(key)

        if entry is None or now >= entry.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + window)
            return RateLimitResult(allowed=True, limit=limit, remaining=limit - 1)

        if entry.count >= limit:
            retry_after = max(1, int(entry.reset_at - now + 0.999))
            return RateLimitResult(
                allowed=False,
                limit=limit,
                remaining=0,
                retry_after=retry_after,
            )

        entry.count += 1
        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=limit - entry.count,
        )

    def prune(self) -> int:
        """Drop expired windows.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._windows.items() if now >= entry.reset_at]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def reset(self) -> None:
        """Forget every window."""
        self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)


# Global limiter instance
rate_limiter = FixedWindowRateLimiter()
