"""Rate limiting decorator for per-route configuration."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import structlog
from fastapi import Request

from qrhunt.core.errors import RateLimitError
from qrhunt.core.logging.middleware import get_client_ip
from qrhunt.core.rate_limit.backend import FixedWindowRateLimiter, rate_limiter


logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")


def rate_limit(
    requests: int,
    window: int,
    key_func: Callable[[Request], str] | None = None,
    limiter: FixedWindowRateLimiter | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to apply a rate limit to a route.

    The route must accept a ``request: Request`` parameter. Limits are
    counted per route template, so ``/scan/{qr_token}`` shares one budget
    across all tokens.

    Args:
        requests: Maximum requests allowed in window
        window: Time window in seconds
        key_func: Custom function to extract identifier from request
        limiter: Limiter to count against (default: the process-wide one)

    Returns:
        Decorated function with rate limiting

    Example:
        @router.post("/login")
        @rate_limit(requests=10, window=60)
        async def login(request: Request, ...):
            ...
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            request = kwargs.get("request")
            if not isinstance(request, Request):
                request = next((a for a in args if isinstance(a, Request)), None)

            if request is None:
                # No request found, skip rate limiting
                return await func(*args, **kwargs)

            identifier = key_func(request) if key_func else _get_default_identifier(request)
            key = f"{_route_key(request)}:{identifier}"

            result = (limiter or rate_limiter).hit(key, requests, window)
            if not result.allowed:
                logger.warning(
                    "rate_limit_exceeded",
                    key=key,
                    limit=requests,
                    window=window,
                )
                raise RateLimitError(
                    f"Too many requests. Limit: {requests} per {window} seconds.",
                    details={"retry_after": result.retry_after},
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def _route_key(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path
    return f"{request.method}:{path}"


def _get_default_identifier(request: Request) -> str:
    """Get default rate limit identifier from request.

    Args:
        request: HTTP request

    Returns:
        Identifier string
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_client_ip(request) or 'unknown'}"
