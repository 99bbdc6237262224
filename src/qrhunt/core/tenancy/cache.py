"""Request-scoped memoization."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Request


T = TypeVar("T")


class RequestCache:
    """Memoizes lookups for the lifetime of a single request.

    Negative results (``None``) are cached too. Nothing outlives the
    request, so a deactivated tenant stops resolving on the next request.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], Any] = {}

    async def get_or_load(
        self,
        namespace: str,
        key: str,
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for ``(namespace, key)``, loading it once."""
        cache_key = (namespace, key)
        if cache_key in self._entries:
            return self._entries[cache_key]

        value = await loader()
        self._entries[cache_key] = value
        return value


def get_request_cache(request: Request) -> RequestCache:
    """Get the cache attached to ``request.state``, creating it on first use."""
    cache = getattr(request.state, "cache", None)
    if cache is None:
        cache = RequestCache()
        request.state.cache = cache
    return cache
