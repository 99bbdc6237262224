"""Tests for tenant slug extraction."""

import pytest

from qrhunt.core.tenancy.resolver import extract_tenant_slug


pytestmark = pytest.mark.unit

DEV_HOSTS = ["localhost", "127.0.0.1"]


def extract(host, header=None, query=None):
    return extract_tenant_slug(
        host,
        header_slug=header,
        query_slug=query,
        base_domain_parts=3,
        dev_hosts=DEV_HOSTS,
    )


class TestProductionHosts:
    """Subdomains of the base domain name the tenant."""

    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("springs.realife.vercel.app", "springs"),
            ("Springs.Realife.Vercel.App", "springs"),
            ("safari.realife.vercel.app:443", "safari"),
        ],
    )
    def test_subdomain(self, host, expected):
        assert extract(host) == expected

    @pytest.mark.parametrize(
        "host",
        ["realife.vercel.app", "www.realife.vercel.app", "example.com", "", None],
    )
    def test_no_tenant(self, host):
        assert extract(host) is None

    def test_header_ignored_off_dev_hosts(self):
        """The tenant header cannot override a production host."""
        assert extract("springs.realife.vercel.app", header="safari") == "springs"
        assert extract("realife.vercel.app", header="safari") is None


class TestDevelopmentHosts:
    """Development hosts take the slug from the header, then the query."""

    def test_header_wins_over_query(self):
        assert extract("localhost:3000", header="springs", query="safari") == "springs"

    def test_query_fallback(self):
        assert extract("127.0.0.1:8000", query="safari") == "safari"

    def test_nothing_supplied(self):
        assert extract("localhost") is None

    def test_empty_values(self):
        assert extract("localhost", header="", query="") is None
