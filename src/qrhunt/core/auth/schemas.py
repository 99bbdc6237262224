"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TokenData(BaseModel):
    """Data extracted from a JWT token.

    Attributes:
        user_id: The principal's UUID
        exp: Token expiration time
        type: Token type
        jti: Unique token ID, used for revocation on sign-out
    """

    user_id: UUID
    exp: datetime
    type: str = "access"
    jti: str


class Principal(BaseModel):
    """The authenticated caller."""

    id: UUID
    email: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class AccessToken(BaseModel):
    """An issued access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
