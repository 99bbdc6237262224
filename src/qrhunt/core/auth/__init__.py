"""Authentication module for JWT, passwords and role resolution."""

from qrhunt.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from qrhunt.core.auth.dependencies import (
    CurrentPrincipal,
    CurrentToken,
    OptionalPrincipal,
    get_current_principal,
    get_optional_principal,
)
from qrhunt.core.auth.roles import (
    Authorized,
    Forbidden,
    Player,
    PlayerAccess,
    Role,
    RoleResolution,
    RoleResolver,
    SuperAdmin,
    TenantAccess,
    TenantAdmin,
    TenantStaff,
    Unauthenticated,
)
from qrhunt.core.auth.schemas import AccessToken, Principal, TokenData


__all__ = [
    "AccessToken",
    "Authorized",
    "CurrentPrincipal",
    "CurrentToken",
    "Forbidden",
    "OptionalPrincipal",
    "Player",
    "PlayerAccess",
    "Principal",
    "Role",
    "RoleResolution",
    "RoleResolver",
    "SuperAdmin",
    "TenantAccess",
    "TenantAdmin",
    "TenantStaff",
    "TokenData",
    "Unauthenticated",
    "create_access_token",
    "decode_token",
    "get_current_principal",
    "get_optional_principal",
    "hash_password",
    "verify_password",
]
