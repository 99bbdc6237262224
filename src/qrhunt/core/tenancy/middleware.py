"""Tenant context middleware."""

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from qrhunt.config import settings
from qrhunt.core.tenancy.resolver import extract_tenant_slug


class TenantResolutionMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches the tenant slug to each request.

    The slug is derived from the Host header (or, on development hosts,
    the tenant header or query parameter) and stored on
    ``request.state.tenant_slug``. Looking the slug up in the database is
    left to the ``CurrentTenant`` dependency, so routes that never need a
    tenant never pay for the query.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process the request and inject the tenant slug.

        Args:
            request: The incoming request
            call_next: The next middleware/handler

        Returns:
            The response from the handler
        """
        slug = extract_tenant_slug(
            request.headers.get("host"),
            header_slug=request.headers.get(settings.tenant_header),
            query_slug=request.query_params.get(settings.tenant_query_param),
        )
        request.state.tenant_slug = slug

        if slug:
            structlog.contextvars.bind_contextvars(tenant_slug=slug)

        return await call_next(request)
