"""Pydantic schemas for the puzzle and prize redemption."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PuzzleAnswer(BaseModel):
    """Schema for a puzzle submission."""

    answer: str = Field(..., min_length=1, max_length=64)


class PuzzleResult(BaseModel):
    """Outcome of a puzzle submission. The code is present when correct."""

    correct: bool
    redemption_code: str | None = None


class RedemptionResponse(BaseModel):
    """A visitor's own redemption."""

    redemption_code: str
    redeemed: bool
    redeemed_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RedemptionVerification(BaseModel):
    """What the prize desk sees for a code."""

    id: UUID
    redemption_code: str
    redeemed: bool
    redeemed_at: datetime | None
    created_at: datetime
    visitor_name: str | None = None
    visitor_email: str | None = None
