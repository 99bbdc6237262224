"""Pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from qrhunt.config import settings
from qrhunt.core.auth import create_access_token
from qrhunt.core.database import Base, get_db
from qrhunt.core.rate_limit import rate_limiter
from qrhunt.main import create_app

# Import all models to ensure they're registered with Base.metadata
from qrhunt.modules.content.models import SiteContent  # noqa: F401
from qrhunt.modules.memberships.models import MembershipRole, TenantMembership
from qrhunt.modules.progress.models import UserProgress  # noqa: F401
from qrhunt.modules.redemptions.models import Redemption  # noqa: F401
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import Profile, ProfileRole, RevokedToken, User  # noqa: F401
from tests.factories import ProfileFactory, StationFactory, TenantFactory, UserFactory


# In-memory SQLite unless a PostgreSQL URL is supplied
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

HeadersFactory = Callable[..., dict[str, str]]


def is_postgres() -> bool:
    return TEST_DATABASE_URL.startswith("postgresql")


@pytest.fixture(scope="function")
async def engine():
    """Create test database engine."""
    if is_postgres():
        engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool, echo=False)
    else:
        engine = create_async_engine(
            TEST_DATABASE_URL, poolclass=StaticPool, echo=False
        )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate-limit windows."""
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing.

    The base URL is a development host, so the tenant is chosen per request
    with the tenant header.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://localhost",
    ) as client:
        yield client


@pytest.fixture
def headers_for() -> HeadersFactory:
    """Build request headers for a user and/or tenant."""

    def _headers(user: User | None = None, tenant: Tenant | None = None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if user is not None:
            headers["Authorization"] = f"Bearer {create_access_token(user.id)}"
        if tenant is not None:
            headers[settings.tenant_header] = tenant.slug
        return headers

    return _headers


# ============================================================
# Persistence helpers
# ============================================================


@pytest.fixture
def persist(db: AsyncSession) -> Callable[..., Awaitable[None]]:
    """Add rows, flush and reload their server defaults."""

    async def _persist(*rows: object) -> None:
        db.add_all(rows)
        await db.flush()
        for row in rows:
            await db.refresh(row)

    return _persist


@pytest.fixture
def make_user(persist) -> Callable[..., Awaitable[User]]:
    """Create a user, optionally with a profile and membership in a tenant."""

    async def _make_user(
        tenant: Tenant | None = None,
        profile_role: ProfileRole | None = ProfileRole.VISITOR,
        membership: MembershipRole | None = None,
        **kwargs,
    ) -> User:
        user = UserFactory.model(**kwargs)
        await persist(user)
        if tenant is not None and profile_role is not None:
            await persist(ProfileFactory.model(user, tenant.id, role=profile_role))
        if tenant is not None and membership is not None:
            await persist(
                TenantMembership(
                    tenant_id=tenant.id, user_id=user.id, role=membership.value
                )
            )
        return user

    return _make_user


# ============================================================
# Tenant and User Fixtures
# ============================================================


@pytest.fixture
async def tenant(persist) -> Tenant:
    """Create a test tenant."""
    tenant = TenantFactory.model()
    await persist(tenant)
    return tenant


@pytest.fixture
async def other_tenant(persist) -> Tenant:
    """Create a second tenant for isolation tests."""
    tenant = TenantFactory.model()
    await persist(tenant)
    return tenant


@pytest.fixture
async def visitor(make_user, tenant: Tenant) -> User:
    """A visitor registered in ``tenant``."""
    return await make_user(tenant)


@pytest.fixture
async def staff_user(make_user, tenant: Tenant) -> User:
    """A staff member of ``tenant``."""
    return await make_user(
        tenant, profile_role=ProfileRole.STAFF, membership=MembershipRole.STAFF
    )


@pytest.fixture
async def admin_user(make_user, tenant: Tenant) -> User:
    """An admin of ``tenant``."""
    return await make_user(
        tenant, profile_role=ProfileRole.ADMIN, membership=MembershipRole.ADMIN
    )


@pytest.fixture
async def super_admin(make_user) -> User:
    """A platform operator without memberships."""
    return await make_user(is_super_admin=True)


@pytest.fixture
async def stations(persist, tenant: Tenant) -> list[Animal]:
    """Three active stations spelling ``CAT``, created out of order."""
    rows = [
        StationFactory.model(tenant.id, letter="T", order_index=2, name="Tiger"),
        StationFactory.model(tenant.id, letter="C", order_index=0, name="Camel"),
        StationFactory.model(tenant.id, letter="A", order_index=1, name="Antelope"),
    ]
    await persist(*rows)
    return sorted(rows, key=lambda s: s.order_index)
