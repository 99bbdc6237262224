"""Integration tests for the platform dashboard."""

import pytest
from httpx import AsyncClient

from qrhunt.modules.progress.models import UserProgress
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import User
from tests.factories import ProfileFactory, TenantFactory


pytestmark = pytest.mark.integration


async def test_platform_totals(
    client: AsyncClient,
    persist,
    make_user,
    super_admin: User,
    visitor: User,
    tenant: Tenant,
    other_tenant: Tenant,
    stations: list[Animal],
    headers_for,
):
    suspended = TenantFactory.model(is_active=False)
    await persist(suspended)
    winner = await make_user(other_tenant, profile_role=None)
    await persist(
        ProfileFactory.model(winner, other_tenant.id, completion_status="completed")
    )
    await persist(
        UserProgress(
            tenant_id=tenant.id,
            user_id=visitor.id,
            animal_id=stations[0].id,
            letter=stations[0].letter,
        )
    )

    response = await client.get(
        "/api/v1/super-admin/analytics", headers=headers_for(super_admin)
    )

    assert response.status_code == 200
    data = response.json()
    assert data["totals"] == {
        "tenants": 3,
        "active_tenants": 2,
        "suspended_tenants": 1,
        "total_users": 2,
        "total_completed": 1,
    }
    rows = {row["slug"]: row for row in data["tenants"]}
    assert rows[tenant.slug]["scans"] == 1
    assert rows[tenant.slug]["completion_rate"] == 0
    assert rows[other_tenant.slug]["completion_rate"] == 100
    assert rows[suspended.slug]["is_active"] is False


async def test_requires_super_admin(
    client: AsyncClient, admin_user: User, tenant: Tenant, headers_for
):
    response = await client.get(
        "/api/v1/super-admin/analytics", headers=headers_for(admin_user, tenant)
    )

    assert response.status_code == 403
