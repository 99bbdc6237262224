"""Tenant slug extraction from the request host.

In production every tenant is served from a subdomain of the base domain
(``springs.realife.vercel.app``). On development hosts there are no
subdomains, so the slug is passed explicitly in a header or query
parameter instead.
"""

from qrhunt.config import settings


def extract_tenant_slug(
    host: str | None,
    header_slug: str | None = None,
    query_slug: str | None = None,
    *,
    base_domain_parts: int | None = None,
    dev_hosts: list[str] | None = None,
) -> str | None:
    """Derive the tenant slug for a request.

    Args:
        host: Value of the Host header, optionally with a port
        header_slug: Value of the tenant header (development hosts only)
        query_slug: Value of the tenant query parameter (development hosts only)
        base_domain_parts: Label count of the base domain (default: from settings)
        dev_hosts: Hostnames treated as development (default: from settings)

    Returns:
        The slug, or None for the apex domain, ``www`` and unrecognised hosts

    Examples:
        >>> extract_tenant_slug("springs.realife.vercel.app")
        'springs'
        >>> extract_tenant_slug("localhost:3000", query_slug="springs")
        'springs'
        >>> extract_tenant_slug("www.realife.vercel.app") is None
        True
    """
    if not host:
        return None

    parts_needed = base_domain_parts or settings.base_domain_parts
    development = dev_hosts if dev_hosts is not None else settings.dev_hosts

    hostname = host.split(":", 1)[0].lower()

    if hostname in development:
        return header_slug or query_slug or None

    labels = hostname.split(".")
    if len(labels) > parts_needed:
        subdomain = labels[0]
        if subdomain and subdomain != "www":
            return subdomain

    return None
