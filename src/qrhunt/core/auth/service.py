"""Authentication service for registration, login and sign-out."""

from typing import Annotated

import structlog
from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.config import settings
from qrhunt.core.auth.backend import create_access_token, hash_password, verify_password
from qrhunt.core.auth.schemas import AccessToken, TokenData
from qrhunt.core.errors import ConflictError, UnauthorizedError
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import Profile, ProfileRole, User
from qrhunt.modules.users.repos import (
    ProfileRepository,
    RevokedTokenRepository,
    UserRepository,
)


logger = structlog.get_logger()

_REGISTRATION_FAILED = (
    "Registration failed. If this email is already registered, please use the login page."
)


class AuthService:
    """Service for authentication operations.

    Accounts are platform-wide; registering on a second tenant with the
    same credentials adds a profile there instead of a new account.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.profile_repo = ProfileRepository(db)
        self.revoked_repo = RevokedTokenRepository(db)

    async def register(
        self,
        tenant: Tenant,
        email: str,
        password: str,
        full_name: str,
        phone: str | None = None,
    ) -> tuple[User, Profile, AccessToken]:
        """Register a visitor in a tenant.

        Args:
            tenant: The tenant the visitor registers with
            email: Email address
            password: Plain text password
            full_name: Visitor's full name
            phone: Optional phone number

        Returns:
            Tuple of (user, profile, access token)

        Raises:
            ConflictError: If the email is taken by another password, or the
                account already has a profile in this tenant
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            user = await self.user_repo.create(
                User(
                    email=email.lower(),
                    password_hash=hash_password(password),
                    full_name=full_name,
                )
            )
        elif not user.password_hash or not verify_password(password, user.password_hash):
            raise ConflictError(_REGISTRATION_FAILED, error_code="registration_failed")
        elif await self.profile_repo.get_by_user(user.id, tenant.id):
            raise ConflictError(_REGISTRATION_FAILED, error_code="registration_failed")

        profile = await self.profile_repo.create(
            Profile(
                tenant_id=tenant.id,
                user_id=user.id,
                full_name=full_name,
                email=email,
                phone=phone,
                role=ProfileRole.VISITOR.value,
            )
        )

        logger.info("visitor_registered", user_id=str(user.id), tenant_id=str(tenant.id))
        return user, profile, self._issue_token(user)

    async def login(self, email: str, password: str) -> tuple[User, AccessToken]:
        """Authenticate with email and password.

        Raises:
            UnauthorizedError: If credentials are invalid or the account is inactive
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not user.password_hash or not verify_password(
            password, user.password_hash
        ):
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        if not user.is_active:
            raise UnauthorizedError(
                "Account is deactivated",
                error_code="account_inactive",
            )

        logger.info("user_logged_in", user_id=str(user.id))
        return user, self._issue_token(user)

    async def logout(self, token_data: TokenData) -> None:
        """Revoke the presented access token."""
        await self.revoked_repo.revoke(
            jti=token_data.jti,
            user_id=token_data.user_id,
            expires_at=token_data.exp,
        )
        logger.info("user_logged_out", user_id=str(token_data.user_id))

    def _issue_token(self, user: User) -> AccessToken:
        return AccessToken(
            access_token=create_access_token(user.id),
            expires_in=settings.access_token_expire_minutes * 60,
        )


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
