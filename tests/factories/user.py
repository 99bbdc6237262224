"""User and profile factories for tests."""

from datetime import datetime
from uuid import UUID, uuid4

from polyfactory.factories.pydantic_factory import ModelFactory
from pydantic import BaseModel

from qrhunt.core.auth import hash_password
from qrhunt.modules.users.models import CompletionStatus, Profile, ProfileRole, User


TEST_PASSWORD = "testpassword123"
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


class UserSeed(BaseModel):
    email: str
    full_name: str
    is_active: bool = True
    is_super_admin: bool = False


class UserFactory(ModelFactory[UserSeed]):
    """Factory for creating test User instances."""

    __model__ = UserSeed

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def full_name(cls) -> str:
        """Generate a full name."""
        return f"Test User {uuid4().hex[:4]}"

    @classmethod
    def is_active(cls) -> bool:
        """Default to active."""
        return True

    @classmethod
    def is_super_admin(cls) -> bool:
        """Default to a regular account."""
        return False

    @classmethod
    def model(cls, password_hash: str | None = TEST_PASSWORD_HASH, **kwargs) -> User:
        """Build an unsaved User."""
        return User(password_hash=password_hash, **cls.build(**kwargs).model_dump())


class ProfileSeed(BaseModel):
    full_name: str
    email: str
    phone: str | None = None
    completion_status: str = CompletionStatus.IN_PROGRESS.value
    completed_at: datetime | None = None


class ProfileFactory(ModelFactory[ProfileSeed]):
    """Factory for per-tenant profiles."""

    __model__ = ProfileSeed

    @classmethod
    def phone(cls) -> str:
        return cls.__faker__.numerify("05########")

    @classmethod
    def completion_status(cls) -> str:
        return CompletionStatus.IN_PROGRESS.value

    @classmethod
    def completed_at(cls) -> None:
        return None

    @classmethod
    def model(
        cls,
        user: User,
        tenant_id: UUID,
        role: ProfileRole = ProfileRole.VISITOR,
        **kwargs,
    ) -> Profile:
        """Build an unsaved profile for ``user`` in a tenant."""
        kwargs.setdefault("full_name", user.full_name)
        kwargs.setdefault("email", user.email)
        return Profile(
            tenant_id=tenant_id,
            user_id=user.id,
            role=role.value,
            **cls.build(**kwargs).model_dump(),
        )
