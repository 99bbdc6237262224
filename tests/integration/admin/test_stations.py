"""Integration tests for station administration."""

import pytest
from httpx import AsyncClient

from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import User
from tests.factories import StationFactory


pytestmark = pytest.mark.integration

STATIONS_URL = "/api/v1/admin/stations"


class TestStations:
    async def test_list_in_order_with_inactive(
        self,
        client: AsyncClient,
        persist,
        admin_user: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        await persist(StationFactory.model(tenant.id, is_active=False, order_index=3))

        response = await client.get(STATIONS_URL, headers=headers_for(admin_user, tenant))

        assert response.status_code == 200
        data = response.json()
        assert [s["letter"] for s in data[:3]] == ["C", "A", "T"]
        assert data[3]["is_active"] is False
        assert all("qr_token" in s for s in data)

    async def test_create(
        self, client: AsyncClient, admin_user: User, tenant: Tenant, headers_for
    ):
        response = await client.post(
            STATIONS_URL,
            json={
                "name": "Lion",
                "name_he": "אריה",
                "letter": "L",
                "order_index": 0,
                "fun_facts": "Sleeps twenty hours a day.",
                "image_url": "https://cdn.example.com/lion.jpg",
            },
            headers=headers_for(admin_user, tenant),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name_he"] == "אריה"
        assert data["qr_token"]
        assert data["image_url"] == "https://cdn.example.com/lion.jpg"
        assert data["is_active"] is True

    @pytest.mark.parametrize(
        "changes",
        [
            {"letter": "LO"},
            {"letter": ""},
            {"order_index": -1},
            {"name": ""},
            {"image_url": "not a url"},
        ],
    )
    async def test_create_validation(
        self, client: AsyncClient, admin_user: User, tenant: Tenant, headers_for, changes
    ):
        body = {"name": "Lion", "letter": "L", "order_index": 0, **changes}

        response = await client.post(
            STATIONS_URL, json=body, headers=headers_for(admin_user, tenant)
        )

        assert response.status_code == 422

    async def test_update(
        self,
        client: AsyncClient,
        admin_user: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        camel = stations[0]
        token = str(camel.qr_token)

        response = await client.patch(
            f"{STATIONS_URL}/{camel.id}",
            json={"name": "Bactrian Camel", "is_active": False},
            headers=headers_for(admin_user, tenant),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Bactrian Camel"
        assert data["is_active"] is False
        assert data["letter"] == "C"
        assert data["qr_token"] == token

    async def test_regenerate_qr_token(
        self,
        client: AsyncClient,
        admin_user: User,
        tenant: Tenant,
        stations: list[Animal],
        headers_for,
    ):
        camel = stations[0]
        old_token = str(camel.qr_token)

        response = await client.patch(
            f"{STATIONS_URL}/{camel.id}",
            json={"regenerate_qr_token": True},
            headers=headers_for(admin_user, tenant),
        )

        assert response.json()["qr_token"] != old_token

    async def test_update_unknown_station(
        self, client: AsyncClient, admin_user: User, tenant: Tenant, headers_for
    ):
        response = await client.patch(
            f"{STATIONS_URL}/00000000-0000-4000-8000-000000000000",
            json={"name": "Ghost"},
            headers=headers_for(admin_user, tenant),
        )

        assert response.status_code == 404
