"""Integration tests for cross-tenant membership administration."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from qrhunt.modules.memberships.models import TenantMembership
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import Profile, User
from tests.helpers import error_code


pytestmark = pytest.mark.integration

MEMBERS_URL = "/api/v1/super-admin/members"


class TestMembers:
    async def test_list(
        self,
        client: AsyncClient,
        super_admin: User,
        admin_user: User,
        tenant: Tenant,
        other_tenant: Tenant,
        headers_for,
    ):
        response = await client.get(MEMBERS_URL, headers=headers_for(super_admin))

        assert response.status_code == 200
        data = response.json()
        assert [
            (m["email"], m["tenant_name"], m["role"]) for m in data["memberships"]
        ] == [(admin_user.email, tenant.name, "admin")]
        assert {t["id"] for t in data["tenants"]} == {str(tenant.id), str(other_tenant.id)}

    async def test_assign_new_account(
        self,
        client: AsyncClient,
        db: AsyncSession,
        super_admin: User,
        tenant: Tenant,
        headers_for,
    ):
        response = await client.post(
            MEMBERS_URL,
            json={"email": "director@example.com", "tenant_id": str(tenant.id), "role": "admin"},
            headers=headers_for(super_admin),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["role"] == "admin"
        assert data["tenant_name"] == tenant.name

        profile = (
            await db.execute(select(Profile).where(Profile.email == "director@example.com"))
        ).scalar_one()
        assert profile.role == "admin"

    async def test_assign_changes_existing_role(
        self,
        client: AsyncClient,
        db: AsyncSession,
        super_admin: User,
        staff_user: User,
        tenant: Tenant,
        headers_for,
    ):
        response = await client.post(
            MEMBERS_URL,
            json={"email": staff_user.email, "tenant_id": str(tenant.id), "role": "admin"},
            headers=headers_for(super_admin),
        )

        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        memberships = (
            await db.execute(
                select(TenantMembership).where(TenantMembership.user_id == staff_user.id)
            )
        ).scalars().all()
        assert [m.role for m in memberships] == ["admin"]

    async def test_assign_unknown_tenant(
        self, client: AsyncClient, super_admin: User, headers_for
    ):
        response = await client.post(
            MEMBERS_URL,
            json={
                "email": "someone@example.com",
                "tenant_id": "00000000-0000-4000-8000-000000000000",
                "role": "staff",
            },
            headers=headers_for(super_admin),
        )

        assert response.status_code == 404
        assert error_code(response) == "tenant_not_found"

    async def test_assign_invalid_role(
        self, client: AsyncClient, super_admin: User, tenant: Tenant, headers_for
    ):
        response = await client.post(
            MEMBERS_URL,
            json={"email": "x@example.com", "tenant_id": str(tenant.id), "role": "owner"},
            headers=headers_for(super_admin),
        )

        assert response.status_code == 422

    async def test_revoke(
        self,
        client: AsyncClient,
        super_admin: User,
        admin_user: User,
        tenant: Tenant,
        headers_for,
    ):
        """Unlike tenant admins, platform operators may remove admins."""
        response = await client.delete(
            f"{MEMBERS_URL}/{admin_user.id}",
            params={"tenant_id": str(tenant.id)},
            headers=headers_for(super_admin),
        )

        assert response.status_code == 204
        denied = await client.get(
            "/api/v1/admin/stations", headers=headers_for(admin_user, tenant)
        )
        assert denied.status_code == 403

    async def test_revoke_missing(
        self,
        client: AsyncClient,
        super_admin: User,
        visitor: User,
        tenant: Tenant,
        headers_for,
    ):
        response = await client.delete(
            f"{MEMBERS_URL}/{visitor.id}",
            params={"tenant_id": str(tenant.id)},
            headers=headers_for(super_admin),
        )

        assert response.status_code == 404

    async def test_revoke_requires_tenant_id(
        self, client: AsyncClient, super_admin: User, visitor: User, headers_for
    ):
        response = await client.delete(
            f"{MEMBERS_URL}/{visitor.id}", headers=headers_for(super_admin)
        )

        assert response.status_code == 422
