"""Authentication API routes.

Provides endpoints for:
- Visitor registration on a tenant
- Login/logout
- The current principal
"""

from fastapi import APIRouter, Request, Response, status

from qrhunt.api.dependencies import DBSession
from qrhunt.config import settings
from qrhunt.core.auth.dependencies import CurrentPrincipal, CurrentToken
from qrhunt.core.auth.roles import Authorized, RoleResolver
from qrhunt.core.auth.service import AuthSvc
from qrhunt.core.errors import NotFoundError
from qrhunt.core.rate_limit import rate_limit
from qrhunt.core.tenancy import CurrentTenant, OptionalTenant
from qrhunt.modules.users.repos import ProfileRepo, UserRepo
from qrhunt.modules.users.schemas import (
    LoginRequest,
    MeResponse,
    ProfileResponse,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a visitor",
    description="Creates a visitor profile on the current tenant, and the account if it is new.",
)
@rate_limit(
    requests=settings.register_rate_limit_requests,
    window=settings.register_rate_limit_window,
)
async def register(
    request: Request,  # noqa: ARG001
    data: RegisterRequest,
    tenant: CurrentTenant,
    service: AuthSvc,
) -> TokenResponse:
    """Register a visitor on the current tenant."""
    _user, _profile, token = await service.register(
        tenant=tenant,
        email=data.email,
        password=data.password,
        full_name=data.full_name,
        phone=data.phone,
    )
    return TokenResponse(access_token=token.access_token, expires_in=token.expires_in)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
)
@rate_limit(
    requests=settings.login_rate_limit_requests,
    window=settings.login_rate_limit_window,
)
async def login(
    request: Request,  # noqa: ARG001
    data: LoginRequest,
    service: AuthSvc,
) -> TokenResponse:
    """Login with email and password."""
    _user, token = await service.login(email=data.email, password=data.password)
    return TokenResponse(access_token=token.access_token, expires_in=token.expires_in)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke the current access token",
)
async def logout(token_data: CurrentToken, service: AuthSvc) -> Response:
    """Revoke the presented token."""
    await service.logout(token_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get the current principal",
    description="Includes the profile and staff role on the current tenant, if any.",
)
async def me(
    principal: CurrentPrincipal,
    tenant: OptionalTenant,
    users: UserRepo,
    profiles: ProfileRepo,
    db: DBSession,
) -> MeResponse:
    """Get the caller with their standing in the current tenant."""
    user = await users.get_by_id(principal.id)
    if user is None:
        raise NotFoundError("User not found", error_code="user_not_found")

    response = MeResponse(user=UserResponse.model_validate(user))
    if tenant is None:
        return response

    profile = await profiles.get_by_user(principal.id, tenant.id)
    if profile is not None:
        response.profile = ProfileResponse.model_validate(profile)

    resolution = await RoleResolver(db).resolve(principal, tenant.id)
    if isinstance(resolution, Authorized):
        response.role = resolution.role.value

    return response
