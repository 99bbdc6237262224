"""Tests for the request-scoped tenant directory and cache."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from qrhunt.core.errors import NotFoundError
from qrhunt.core.tenancy.cache import RequestCache, get_request_cache
from qrhunt.core.tenancy.directory import TenantDirectory


pytestmark = pytest.mark.unit


@pytest.fixture
def directory() -> TenantDirectory:
    directory = TenantDirectory(MagicMock(), RequestCache())
    directory.repo = AsyncMock()
    return directory


class TestRequestCache:
    async def test_loads_once(self):
        cache = RequestCache()
        loader = AsyncMock(return_value="value")

        first = await cache.get_or_load("ns", "key", loader)
        second = await cache.get_or_load("ns", "key", loader)

        assert first == second == "value"
        loader.assert_awaited_once()

    async def test_caches_none(self):
        """A miss is remembered for the rest of the request."""
        cache = RequestCache()
        loader = AsyncMock(return_value=None)

        await cache.get_or_load("ns", "missing", loader)
        await cache.get_or_load("ns", "missing", loader)

        loader.assert_awaited_once()

    async def test_namespaces_are_separate(self):
        cache = RequestCache()

        await cache.get_or_load("a", "key", AsyncMock(return_value=1))
        value = await cache.get_or_load("b", "key", AsyncMock(return_value=2))

        assert value == 2

    def test_attached_to_request_state(self):
        request = SimpleNamespace(state=SimpleNamespace())

        cache = get_request_cache(request)

        assert get_request_cache(request) is cache


class TestTenantDirectory:
    async def test_memoizes_lookup(self, directory: TenantDirectory):
        tenant = SimpleNamespace(id=uuid4(), slug="springs")
        directory.repo.get_active_by_slug.return_value = tenant

        assert await directory.get_tenant("springs") is tenant
        assert await directory.get_tenant("springs") is tenant

        directory.repo.get_active_by_slug.assert_awaited_once_with("springs")

    async def test_missing_tenant_raises_with_redirect(self, directory: TenantDirectory):
        directory.repo.get_active_by_slug.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await directory.get_tenant_or_fail("nowhere")

        assert exc_info.value.error_code == "tenant_not_found"
        assert exc_info.value.details["redirect_to"] == "/tenant-not-found"

    async def test_resolve_from_request_parts(self, directory: TenantDirectory):
        tenant = SimpleNamespace(id=uuid4(), slug="safari")
        directory.repo.get_active_by_slug.return_value = tenant

        resolved = await directory.resolve_tenant_from_request(
            "localhost:3000", headers={}, query={"tenant": "safari"}
        )

        assert resolved is tenant

    async def test_resolve_without_slug_skips_lookup(self, directory: TenantDirectory):
        resolved = await directory.resolve_tenant_from_request(
            None, headers={}, query={}
        )

        assert resolved is None
        directory.repo.get_active_by_slug.assert_not_awaited()
