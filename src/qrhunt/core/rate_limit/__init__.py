"""Rate limiting for abuse-prone endpoints."""

from qrhunt.core.rate_limit.backend import (
    FixedWindowRateLimiter,
    RateLimitResult,
    rate_limiter,
)
from qrhunt.core.rate_limit.decorators import rate_limit


__all__ = [
    "FixedWindowRateLimiter",
    "RateLimitResult",
    "rate_limit",
    "rate_limiter",
]
