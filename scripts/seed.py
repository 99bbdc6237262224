#!/usr/bin/env python
"""
Generate demo/seed data for development.
"""

import argparse
import asyncio
import os
import sys
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


# Add src to path for imports
sys.path.insert(0, "src")

from qrhunt.core.auth import hash_password
from qrhunt.core.constants import DEFAULT_BRANDING
from qrhunt.core.database import async_session_factory, elevated
from qrhunt.modules.memberships.models import MembershipRole, TenantMembership
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import Profile, ProfileRole, User


DEFAULT_PASSWORD = os.environ.get("SEED_PASSWORD", "change-me-please")


@dataclass(frozen=True)
class StationSeed:
    name: str
    name_he: str
    letter: str


# Letters spell the puzzle word in order
SPRINGS_STATIONS = [
    StationSeed("Lion", "אריה", "L"),
    StationSeed("Elephant", "פיל", "E"),
    StationSeed("Otter", "לוטרה", "O"),
    StationSeed("Penguin", "פינגווין", "P"),
    StationSeed("Arctic Fox", "שועל ארקטי", "A"),
    StationSeed("Rhino", "קרנף", "R"),
    StationSeed("Deer", "צבי", "D"),
]

DEMO_TENANTS = [
    {"name": "Springs Park", "slug": "springs"},
    {"name": "Safari Ramat Gan", "slug": "safari"},
    {"name": "Biblical Zoo", "slug": "biblical-zoo"},
]


async def get_or_create_tenant(session: AsyncSession, name: str, slug: str) -> Tenant:
    result = await session.execute(select(Tenant).where(Tenant.slug == slug))
    existing = result.scalar_one_or_none()
    if existing:
        print(f"Tenant already exists: {existing.name}")
        return existing

    tenant = Tenant(name=name, slug=slug, is_active=True, branding=dict(DEFAULT_BRANDING))
    session.add(tenant)
    await session.flush()
    print(f"Created tenant: {tenant.name} ({tenant.slug})")
    return tenant


async def get_or_create_user(
    session: AsyncSession, email: str, full_name: str, *, super_admin: bool = False
) -> User:
    result = await session.execute(select(User).where(User.email == email))
    existing = result.scalar_one_or_none()
    if existing:
        print(f"User already exists: {existing.email}")
        return existing

    user = User(
        email=email,
        full_name=full_name,
        password_hash=hash_password(DEFAULT_PASSWORD),
        is_super_admin=super_admin,
    )
    session.add(user)
    await session.flush()
    print(f"Created user: {user.email}")
    return user


async def grant_admin(session: AsyncSession, user: User, tenant: Tenant) -> None:
    result = await session.execute(
        select(TenantMembership).where(
            TenantMembership.user_id == user.id,
            TenantMembership.tenant_id == tenant.id,
        )
    )
    if result.scalar_one_or_none():
        return

    session.add(
        TenantMembership(
            tenant_id=tenant.id, user_id=user.id, role=MembershipRole.ADMIN.value
        )
    )
    session.add(
        Profile(
            tenant_id=tenant.id,
            user_id=user.id,
            full_name=user.full_name,
            email=user.email,
            role=ProfileRole.ADMIN.value,
        )
    )
    await session.flush()
    print(f"Granted admin on {tenant.slug} to {user.email}")


async def seed_stations(
    session: AsyncSession, tenant: Tenant, stations: list[StationSeed]
) -> None:
    result = await session.execute(select(Animal).where(Animal.tenant_id == tenant.id))
    if result.scalars().first():
        print(f"Stations already exist for {tenant.slug}")
        return

    for index, station in enumerate(stations):
        session.add(
            Animal(
                tenant_id=tenant.id,
                name=station.name,
                name_he=station.name_he,
                letter=station.letter,
                order_index=index,
            )
        )
    await session.flush()
    word = "".join(s.letter for s in stations)
    print(f"Created {len(stations)} stations for {tenant.slug} (word: {word})")


async def seed_default() -> None:
    """Create one tenant with stations and an admin."""
    async with async_session_factory() as session, elevated(session, "seed"):
        tenant = await get_or_create_tenant(session, "Springs Park", "springs")
        admin = await get_or_create_user(session, "admin@springs.example.com", "Springs Admin")
        await grant_admin(session, admin, tenant)
        await seed_stations(session, tenant, SPRINGS_STATIONS)
        await session.commit()


async def seed_demo() -> None:
    """Create several tenants, their admins and a platform super-admin."""
    async with async_session_factory() as session, elevated(session, "seed"):
        await get_or_create_user(
            session, "root@qrhunt.example.com", "Platform Operator", super_admin=True
        )
        for data in DEMO_TENANTS:
            tenant = await get_or_create_tenant(session, data["name"], data["slug"])
            admin = await get_or_create_user(
                session, f"admin@{data['slug']}.example.com", f"{data['name']} Admin"
            )
            await grant_admin(session, admin, tenant)
            await seed_stations(session, tenant, SPRINGS_STATIONS)
        await session.commit()


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    if scenario == "default":
        await seed_default()
    elif scenario == "demo":
        await seed_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, demo")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with demo data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
