"""Tenant resolution: host parsing, per-request lookup and context binding."""

from qrhunt.core.tenancy.cache import RequestCache, get_request_cache
from qrhunt.core.tenancy.dependencies import (
    CurrentTenant,
    Directory,
    OptionalTenant,
    TenantSlug,
    get_current_tenant,
    get_optional_tenant,
)
from qrhunt.core.tenancy.directory import TenantDirectory
from qrhunt.core.tenancy.middleware import TenantResolutionMiddleware
from qrhunt.core.tenancy.resolver import extract_tenant_slug


__all__ = [
    "CurrentTenant",
    "Directory",
    "OptionalTenant",
    "RequestCache",
    "TenantDirectory",
    "TenantResolutionMiddleware",
    "TenantSlug",
    "extract_tenant_slug",
    "get_current_tenant",
    "get_optional_tenant",
    "get_request_cache",
]
