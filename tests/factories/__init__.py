"""Test data factories."""

from tests.factories.station import StationFactory
from tests.factories.tenant import TenantFactory
from tests.factories.user import ProfileFactory, UserFactory


__all__ = ["ProfileFactory", "StationFactory", "TenantFactory", "UserFactory"]
