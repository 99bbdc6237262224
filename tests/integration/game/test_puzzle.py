"""Integration tests for puzzle validation and prize codes."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qrhunt.core.constants import REDEMPTION_CODE_ALPHABET
from qrhunt.modules.redemptions.models import Redemption
from qrhunt.modules.redemptions.services import PuzzleService
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import Profile, User
from tests.helpers import error_code


pytestmark = pytest.mark.integration

PUZZLE_URL = "/api/v1/puzzle/validate"


async def get_profile(db: AsyncSession, user: User, tenant: Tenant) -> Profile:
    stmt = select(Profile).where(Profile.user_id == user.id, Profile.tenant_id == tenant.id)
    return (await db.execute(stmt)).scalar_one()


class TestValidatePuzzle:
    """Tests for POST /api/v1/puzzle/validate."""

    async def test_wrong_answer(
        self,
        client: AsyncClient,
        db: AsyncSession,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        response = await client.post(
            PUZZLE_URL, json={"answer": "TAC"}, headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 200
        assert response.json() == {"correct": False, "redemption_code": None}
        assert (await get_profile(db, visitor, tenant)).completion_status == "in_progress"

    async def test_answer_is_case_sensitive(
        self,
        client: AsyncClient,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        response = await client.post(
            PUZZLE_URL, json={"answer": "cat"}, headers=headers_for(visitor, tenant)
        )

        assert response.json()["correct"] is False

    async def test_correct_answer_issues_code(
        self,
        client: AsyncClient,
        db: AsyncSession,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        response = await client.post(
            PUZZLE_URL, json={"answer": "  CAT "}, headers=headers_for(visitor, tenant)
        )

        data = response.json()
        assert data["correct"] is True
        code = data["redemption_code"]
        assert len(code) == 8
        assert set(code) <= set(REDEMPTION_CODE_ALPHABET)

        profile = await get_profile(db, visitor, tenant)
        assert profile.completion_status == "completed"
        assert profile.completed_at is not None

    async def test_existing_code_returned_for_any_answer(
        self,
        client: AsyncClient,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        headers = headers_for(visitor, tenant)
        first = await client.post(PUZZLE_URL, json={"answer": "CAT"}, headers=headers)

        second = await client.post(PUZZLE_URL, json={"answer": "DOG"}, headers=headers)

        assert second.json() == first.json()

    async def test_inactive_stations_left_out_of_word(
        self,
        client: AsyncClient,
        db: AsyncSession,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        stations[1].is_active = False
        await db.flush()

        response = await client.post(
            PUZZLE_URL, json={"answer": "CT"}, headers=headers_for(visitor, tenant)
        )

        assert response.json()["correct"] is True

    async def test_puzzle_not_configured(
        self, client: AsyncClient, visitor: User, tenant: Tenant, headers_for
    ):
        response = await client.post(
            PUZZLE_URL, json={"answer": "CAT"}, headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 409
        assert error_code(response) == "puzzle_not_configured"

    async def test_empty_answer_rejected(
        self, client: AsyncClient, visitor: User, tenant: Tenant, headers_for
    ):
        response = await client.post(
            PUZZLE_URL, json={"answer": ""}, headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 422


class TestCodeCollisions:
    """Codes are unique per tenant; a collision draws another code."""

    @pytest.fixture
    async def taken_code(self, persist, make_user, tenant: Tenant) -> str:
        winner = await make_user(tenant)
        await persist(
            Redemption(tenant_id=tenant.id, user_id=winner.id, redemption_code="AAAAAAAA")
        )
        return "AAAAAAAA"

    async def test_collision_retries(
        self,
        client: AsyncClient,
        monkeypatch,
        taken_code: str,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        codes = iter([taken_code, "BBBBBBBB"])
        monkeypatch.setattr(
            "qrhunt.modules.redemptions.services.generate_code", lambda: next(codes)
        )

        response = await client.post(
            PUZZLE_URL, json={"answer": "CAT"}, headers=headers_for(visitor, tenant)
        )

        assert response.json()["redemption_code"] == "BBBBBBBB"

    async def test_gives_up_after_repeated_collisions(
        self,
        client: AsyncClient,
        monkeypatch,
        taken_code: str,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        monkeypatch.setattr(
            "qrhunt.modules.redemptions.services.generate_code", lambda: taken_code
        )

        response = await client.post(
            PUZZLE_URL, json={"answer": "CAT"}, headers=headers_for(visitor, tenant)
        )

        assert response.status_code == 500
        assert error_code(response) == "redemption_code_exhausted"

    async def test_same_code_allowed_in_other_tenant(
        self,
        client: AsyncClient,
        monkeypatch,
        persist,
        make_user,
        taken_code: str,
        other_tenant: Tenant,
        headers_for,
    ):
        player = await make_user(other_tenant)
        await persist(Animal(tenant_id=other_tenant.id, name="Owl", letter="O"))
        monkeypatch.setattr(
            "qrhunt.modules.redemptions.services.generate_code", lambda: taken_code
        )

        response = await client.post(
            PUZZLE_URL, json={"answer": "O"}, headers=headers_for(player, other_tenant)
        )

        assert response.json()["redemption_code"] == taken_code


class TestConcurrentWinner:
    """A redemption row can land between the existing-code check and the insert."""

    async def test_issue_returns_stored_row(
        self, db: AsyncSession, persist, visitor: User, tenant: Tenant
    ):
        await persist(
            Redemption(tenant_id=tenant.id, user_id=visitor.id, redemption_code="K7PX3MQA")
        )

        redemption = await PuzzleService(db).issue_redemption(visitor.id, tenant.id)

        assert redemption.redemption_code == "K7PX3MQA"
        stmt = select(func.count()).select_from(Redemption).where(
            Redemption.user_id == visitor.id, Redemption.tenant_id == tenant.id
        )
        assert await db.scalar(stmt) == 1
        profile = await get_profile(db, visitor, tenant)
        assert profile.completion_status == "completed"


class TestOwnRedemption:
    """Tests for GET /api/v1/redemption."""

    async def test_before_solving(
        self, client: AsyncClient, visitor: User, tenant: Tenant, headers_for
    ):
        response = await client.get("/api/v1/redemption", headers=headers_for(visitor, tenant))

        assert response.status_code == 404
        assert error_code(response) == "redemption_not_found"

    async def test_after_solving(
        self,
        client: AsyncClient,
        visitor: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        headers = headers_for(visitor, tenant)
        solved = await client.post(PUZZLE_URL, json={"answer": "CAT"}, headers=headers)

        response = await client.get("/api/v1/redemption", headers=headers)

        data = response.json()
        assert data["redemption_code"] == solved.json()["redemption_code"]
        assert data["redeemed"] is False
