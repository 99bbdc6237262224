"""Integration tests for the visitor board and QR scans."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qrhunt.modules.progress.models import UserProgress
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import User
from tests.factories import StationFactory
from tests.helpers import error_code


pytestmark = pytest.mark.integration


async def count_progress(db: AsyncSession, user: User) -> int:
    stmt = select(func.count()).select_from(UserProgress).where(
        UserProgress.user_id == user.id
    )
    return await db.scalar(stmt)


class TestScan:
    """Tests for POST /api/v1/scan/{qr_token}."""

    async def test_first_scan_recorded(
        self,
        client: AsyncClient,
        db: AsyncSession,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        camel = stations[0]

        response = await client.post(
            f"/api/v1/scan/{camel.qr_token}", headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "recorded"
        assert data["station"]["name"] == "Camel"
        assert data["station"]["letter"] == "C"
        assert await count_progress(db, visitor) == 1

    async def test_repeat_scan_is_idempotent(
        self,
        client: AsyncClient,
        db: AsyncSession,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        url = f"/api/v1/scan/{stations[0].qr_token}"
        headers = headers_for(visitor, tenant)
        await client.post(url, headers=headers)

        response = await client.post(url, headers=headers)

        assert response.json()["outcome"] == "already_scanned"
        assert response.json()["station"]["name"] == "Camel"
        assert await count_progress(db, visitor) == 1

    async def test_inactive_station(
        self,
        client: AsyncClient,
        db: AsyncSession,
        persist,
        visitor: User,
        tenant: Tenant,
        headers_for,
    ):
        station = StationFactory.model(tenant.id, is_active=False)
        await persist(station)

        response = await client.post(
            f"/api/v1/scan/{station.qr_token}", headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 200
        assert response.json() == {"outcome": "station_inactive", "station": None}
        assert await count_progress(db, visitor) == 0

    async def test_malformed_token(
        self, client: AsyncClient, visitor: User, tenant: Tenant, headers_for
    ):
        response = await client.post(
            "/api/v1/scan/not-a-uuid", headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 400
        assert error_code(response) == "invalid_qr_token"

    async def test_unknown_token(
        self, client: AsyncClient, visitor: User, tenant: Tenant, headers_for
    ):
        response = await client.post(
            "/api/v1/scan/00000000-0000-4000-8000-000000000000",
            headers=headers_for(visitor, tenant),
        )

        assert response.status_code == 404
        assert error_code(response) == "station_not_found"

    async def test_requires_login(
        self, client: AsyncClient, tenant: Tenant, stations: list[Animal], headers_for
    ):
        response = await client.post(
            f"/api/v1/scan/{stations[0].qr_token}", headers=headers_for(tenant=tenant)
        )

        assert response.status_code == 401
        assert response.json()["login_url"].startswith("/login?redirect=")

    async def test_scan_is_rate_limited(
        self,
        client: AsyncClient,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        """The budget is shared across tokens of the same route."""
        headers = headers_for(visitor, tenant)
        for i in range(30):
            station = stations[i % len(stations)]
            response = await client.post(f"/api/v1/scan/{station.qr_token}", headers=headers)
            assert response.status_code == 200

        response = await client.post(
            f"/api/v1/scan/{stations[0].qr_token}", headers=headers
        )

        assert response.status_code == 429
        assert "Retry-After" in response.headers


class TestGameBoard:
    """Tests for GET /api/v1/game."""

    async def test_board_in_puzzle_order(
        self,
        client: AsyncClient,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        headers = headers_for(visitor, tenant)
        await client.post(f"/api/v1/scan/{stations[1].qr_token}", headers=headers)

        response = await client.get("/api/v1/game", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert [s["name"] for s in data["stations"]] == ["Camel", "Antelope", "Tiger"]
        assert [s["collected"] for s in data["stations"]] == [False, True, False]
        assert [s["letter"] for s in data["stations"]] == [None, "A", None]
        assert data["collected_count"] == 1
        assert data["total_count"] == 3

    async def test_board_hides_inactive_stations(
        self,
        client: AsyncClient,
        persist,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        await persist(StationFactory.model(tenant.id, is_active=False, order_index=99))

        response = await client.get("/api/v1/game", headers=headers_for(visitor, tenant))

        assert response.json()["total_count"] == 3


class TestProfileRequired:
    """An account from another tenant must register here before playing."""

    @pytest.fixture
    async def outsider(self, make_user, other_tenant: Tenant) -> User:
        return await make_user(other_tenant)

    async def test_scan_refused(
        self,
        client: AsyncClient,
        db: AsyncSession,
        outsider: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        response = await client.post(
            f"/api/v1/scan/{stations[0].qr_token}", headers=headers_for(outsider, tenant)
        )

        assert response.status_code == 403
        assert error_code(response) == "profile_required"
        assert response.json()["redirect_to"] == "/complete-profile"
        assert await count_progress(db, outsider) == 0

    async def test_puzzle_refused(
        self,
        client: AsyncClient,
        outsider: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        response = await client.post(
            "/api/v1/puzzle/validate",
            json={"answer": "CAT"},
            headers=headers_for(outsider, tenant),
        )

        assert response.status_code == 403
        assert error_code(response) == "profile_required"

    async def test_board_refused(
        self, client: AsyncClient, outsider: User, tenant: Tenant, headers_for
    ):
        response = await client.get("/api/v1/game", headers=headers_for(outsider, tenant))

        assert response.status_code == 403
