"""Integration tests for the tenant dashboard figures."""

from datetime import UTC, datetime

import pytest
from httpx import AsyncClient

from qrhunt.modules.progress.models import UserProgress
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import ProfileRole, User
from tests.factories import ProfileFactory


pytestmark = pytest.mark.integration


class TestTenantAnalytics:
    async def test_empty_tenant(
        self, client: AsyncClient, staff_user: User, tenant: Tenant, headers_for
    ):
        response = await client.get(
            "/api/v1/admin/analytics", headers=headers_for(staff_user, tenant)
        )

        assert response.status_code == 200
        assert response.json() == {
            "total_users": 0,
            "completed_users": 0,
            "completion_rate": 0,
            "distribution": [],
        }

    async def test_counts_and_distribution(
        self,
        client: AsyncClient,
        persist,
        make_user,
        staff_user: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        players = [await make_user(tenant) for _ in range(2)]
        finisher = await make_user(tenant, profile_role=None)
        await persist(
            ProfileFactory.model(
                finisher,
                tenant.id,
                completion_status="completed",
                completed_at=datetime.now(UTC),
            )
        )
        camel, antelope, _tiger = stations
        await persist(
            *[
                UserProgress(
                    tenant_id=tenant.id, user_id=u.id, animal_id=camel.id, letter="C"
                )
                for u in (*players, finisher)
            ],
            UserProgress(
                tenant_id=tenant.id,
                user_id=finisher.id,
                animal_id=antelope.id,
                letter="A",
            ),
        )

        response = await client.get(
            "/api/v1/admin/analytics", headers=headers_for(staff_user, tenant)
        )

        data = response.json()
        # staff_user holds a staff profile, which is not counted
        assert data["total_users"] == 3
        assert data["completed_users"] == 1
        assert data["completion_rate"] == 33
        assert [(d["name"], d["count"]) for d in data["distribution"]] == [
            ("Camel", 3),
            ("Antelope", 1),
            ("Tiger", 0),
        ]

    async def test_staff_profiles_not_counted(
        self, client: AsyncClient, make_user, admin_user: User, tenant: Tenant, headers_for
    ):
        await make_user(tenant, profile_role=ProfileRole.STAFF)

        response = await client.get(
            "/api/v1/admin/analytics", headers=headers_for(admin_user, tenant)
        )

        assert response.json()["total_users"] == 0
