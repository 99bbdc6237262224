"""Unit tests for rate limit decorator."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import Request

from qrhunt.core.errors import RateLimitError
from qrhunt.core.rate_limit.backend import FixedWindowRateLimiter
from qrhunt.core.rate_limit.decorators import (
    _get_default_identifier,
    _route_key,
    rate_limit,
)


pytestmark = pytest.mark.unit


def make_mock_request(
    user_id=None,
    client_host="192.168.1.1",
    forwarded_for=None,
    route_path="/api/v1/scan/{qr_token}",
    method="POST",
):
    """Create a mock Request object for testing."""
    request = MagicMock(spec=Request)
    request.state = MagicMock()

    if user_id:
        request.state.user_id = user_id
    else:
        # Ensure user_id attribute doesn't exist
        del request.state.user_id

    request.method = method
    route = MagicMock()
    route.path = route_path
    request.scope = {"route": route}
    request.url = MagicMock()
    request.url.path = route_path

    headers = {"X-Forwarded-For": forwarded_for} if forwarded_for else {}
    request.headers = headers

    if client_host:
        request.client = MagicMock()
        request.client.host = client_host
    else:
        request.client = None

    return request


class TestGetDefaultIdentifier:
    """Tests for _get_default_identifier function."""

    def test_authenticated_user_returns_user_identifier(self):
        """Verify user ID is used for authenticated users."""
        user_id = uuid4()
        request = make_mock_request(user_id=user_id)

        assert _get_default_identifier(request) == f"user:{user_id}"

    def test_x_forwarded_for_uses_first_ip(self):
        """Verify first IP from X-Forwarded-For is used."""
        request = make_mock_request(forwarded_for="10.0.0.1, 10.0.0.2, 10.0.0.3")

        assert _get_default_identifier(request) == "ip:10.0.0.1"

    def test_direct_client_ip_used(self):
        """Verify direct client IP is used when no proxy."""
        request = make_mock_request(client_host="203.0.113.50")

        assert _get_default_identifier(request) == "ip:203.0.113.50"

    def test_unknown_client_when_no_client_info(self):
        """Verify 'unknown' is used when client info is None."""
        request = make_mock_request(client_host=None)

        assert _get_default_identifier(request) == "ip:unknown"


class TestRouteKey:
    def test_uses_route_template(self):
        """Every token of a templated route shares one budget."""
        request = make_mock_request()

        assert _route_key(request) == "POST:/api/v1/scan/{qr_token}"


class TestRateLimitDecorator:
    """Tests for the rate_limit decorator."""

    async def test_allows_until_limit_then_raises(self):
        limiter = FixedWindowRateLimiter()
        calls = []

        @rate_limit(requests=2, window=60, limiter=limiter)
        async def endpoint(request: Request) -> str:
            calls.append(request)
            return "ok"

        request = make_mock_request()
        assert await endpoint(request=request) == "ok"
        assert await endpoint(request=request) == "ok"

        with pytest.raises(RateLimitError) as exc_info:
            await endpoint(request=request)

        assert len(calls) == 2
        assert exc_info.value.status_code == 429
        assert exc_info.value.details["retry_after"] == 60

    async def test_custom_key_func(self):
        limiter = FixedWindowRateLimiter()

        @rate_limit(requests=1, window=60, key_func=lambda r: "shared", limiter=limiter)
        async def endpoint(request: Request) -> str:
            return "ok"

        await endpoint(request=make_mock_request(client_host="1.1.1.1"))

        with pytest.raises(RateLimitError):
            await endpoint(request=make_mock_request(client_host="2.2.2.2"))

    async def test_skips_when_no_request(self):
        limiter = FixedWindowRateLimiter()

        @rate_limit(requests=1, window=60, limiter=limiter)
        async def helper(value: int) -> int:
            return value * 2

        assert await helper(value=2) == 4
        assert await helper(value=3) == 6
        assert len(limiter) == 0
