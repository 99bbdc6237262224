"""User and profile repositories for database operations."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import ColumnElement, func, or_, select

from qrhunt.api.dependencies import DBSession
from qrhunt.core.utils.text import sanitize_search_text
from qrhunt.modules.users.models import Profile, ProfileRole, RevokedToken, User


def _profile_filters(
    tenant_id: UUID, search: str | None, status: str | None, role: str | None
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [Profile.tenant_id == tenant_id]

    text = sanitize_search_text(search)
    if text:
        pattern = f"%{text}%"
        conditions.append(
            or_(Profile.full_name.ilike(pattern), Profile.email.ilike(pattern))
        )
    if status and status != "all":
        conditions.append(Profile.completion_status == status)
    if role:
        conditions.append(Profile.role == role)
    return conditions


class UserRepository:
    """Repository for User database operations.

    Accounts are platform-wide, so these queries take no tenant.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID."""
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address, case-insensitively."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_super_admin(self, user_id: UUID) -> bool:
        """Check the platform operator flag for an active user."""
        stmt = select(User.is_super_admin).where(
            User.id == user_id,
            User.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar_one_or_none())


class ProfileRepository:
    """Repository for Profile database operations.

    Every method takes the tenant explicitly.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def get_by_user(self, user_id: UUID, tenant_id: UUID) -> Profile | None:
        """Get a user's profile in a tenant."""
        stmt = select(Profile).where(
            Profile.user_id == user_id,
            Profile.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_users(
        self, tenant_id: UUID, user_ids: list[UUID]
    ) -> list[Profile]:
        """Get the profiles of several users in a tenant."""
        if not user_ids:
            return []
        stmt = select(Profile).where(
            Profile.tenant_id == tenant_id,
            Profile.user_id.in_(user_ids),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        tenant_id: UUID,
        search: str | None = None,
        status: str | None = None,
        role: str | None = ProfileRole.VISITOR.value,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Profile], int]:
        """List a tenant's profiles with optional filters and pagination.

        Args:
            tenant_id: The tenant's UUID
            search: Free text matched against name and email
            status: Optional completion status filter; ``all`` matches every status
            role: Profile role to list; None lists every role
            page: Page number (1-indexed)
            page_size: Number of items per page

        Returns:
            Tuple of (profiles list, total count)
        """
        conditions = _profile_filters(tenant_id, search, status, role)

        count_stmt = select(func.count()).select_from(Profile).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        offset = (page - 1) * page_size
        stmt = (
            select(Profile)
            .where(*conditions)
            .order_by(Profile.created_at.desc(), Profile.id)
            .offset(offset)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_matching(
        self,
        tenant_id: UUID,
        search: str | None = None,
        status: str | None = None,
        role: str | None = ProfileRole.VISITOR.value,
    ) -> list[Profile]:
        """Like ``search`` but unpaginated, for exports."""
        stmt = (
            select(Profile)
            .where(*_profile_filters(tenant_id, search, status, role))
            .order_by(Profile.created_at.desc(), Profile.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(
        self, tenant_id: UUID, role: str = ProfileRole.VISITOR.value
    ) -> dict[str, int]:
        """Count a tenant's profiles with one role, grouped by completion status."""
        stmt = (
            select(Profile.completion_status, func.count())
            .where(Profile.tenant_id == tenant_id, Profile.role == role)
            .group_by(Profile.completion_status)
        )
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}

    async def count_by_tenant_system(
        self, role: str = ProfileRole.VISITOR.value
    ) -> dict[UUID, dict[str, int]]:
        """Count profiles with one role per tenant and completion status.

        Platform-wide; callers must run it inside ``elevated``.
        """
        stmt = (
            select(Profile.tenant_id, Profile.completion_status, func.count())
            .where(Profile.role == role)
            .group_by(Profile.tenant_id, Profile.completion_status)
        )
        result = await self.session.execute(stmt)
        counts: dict[UUID, dict[str, int]] = {}
        for tenant_id, status, count in result.all():
            counts.setdefault(tenant_id, {})[status] = count
        return counts

    async def update(self, profile: Profile) -> Profile:
        """Flush pending changes to a profile."""
        await self.session.flush()
        await self.session.refresh(profile)
        return profile


class RevokedTokenRepository:
    """Repository for revoked access tokens."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def revoke(self, jti: str, user_id: UUID, expires_at: datetime) -> None:
        """Record a token as revoked. Revoking twice is a no-op."""
        if await self.is_revoked(jti):
            return
        self.session.add(RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at))
        await self.session.flush()

    async def is_revoked(self, jti: str) -> bool:
        """Check whether a token ID has been revoked."""
        stmt = select(RevokedToken.id).where(RevokedToken.jti == jti)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None


# Type aliases for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
ProfileRepo = Annotated[ProfileRepository, Depends(ProfileRepository)]
