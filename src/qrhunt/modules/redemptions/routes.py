"""Puzzle and prize redemption routes."""

from fastapi import APIRouter, Request

from qrhunt.config import settings
from qrhunt.core.auth import Player, TenantStaff
from qrhunt.core.rate_limit import rate_limit
from qrhunt.modules.redemptions.schemas import (
    PuzzleAnswer,
    PuzzleResult,
    RedemptionResponse,
    RedemptionVerification,
)
from qrhunt.modules.redemptions.services import PuzzleSvc, RedemptionDeskSvc


visitor_router = APIRouter(tags=["game"])
desk_router = APIRouter(prefix="/admin/redemptions", tags=["redemptions"])


@visitor_router.post(
    "/puzzle/validate",
    response_model=PuzzleResult,
    summary="Submit the puzzle answer",
)
@rate_limit(
    requests=settings.puzzle_rate_limit_requests,
    window=settings.puzzle_rate_limit_window,
)
async def validate_puzzle(
    request: Request,  # noqa: ARG001
    data: PuzzleAnswer,
    player: Player,
    service: PuzzleSvc,
) -> PuzzleResult:
    """Check the answer; a correct one returns the prize code."""
    return await service.validate_answer(
        data.answer, player.principal.id, player.tenant_id
    )


@visitor_router.get(
    "/redemption",
    response_model=RedemptionResponse,
    summary="Get the caller's prize code",
)
async def get_redemption(player: Player, service: PuzzleSvc) -> RedemptionResponse:
    """The caller's redemption on the current tenant."""
    redemption = await service.get_own_redemption(player.principal.id, player.tenant_id)
    return RedemptionResponse.model_validate(redemption)


@desk_router.get(
    "/{code}",
    response_model=RedemptionVerification,
    summary="Verify a prize code",
)
async def verify_redemption(
    code: str,
    access: TenantStaff,
    service: RedemptionDeskSvc,
) -> RedemptionVerification:
    """Look up a code at the prize desk. Input is case-insensitive."""
    return await service.verify(code, access.tenant_id)


@desk_router.post(
    "/{code}/redeem",
    response_model=RedemptionVerification,
    summary="Hand out a prize",
)
async def redeem(
    code: str,
    access: TenantStaff,
    service: RedemptionDeskSvc,
) -> RedemptionVerification:
    """Mark the prize as handed out. A second attempt answers 409."""
    return await service.redeem(code, access.tenant_id, access.principal.id)


router = APIRouter()
router.include_router(visitor_router)
router.include_router(desk_router)
