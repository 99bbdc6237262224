"""Visitor game routes: the board and QR scans."""

from fastapi import APIRouter, Request

from qrhunt.config import settings
from qrhunt.core.auth import Player
from qrhunt.core.rate_limit import rate_limit
from qrhunt.modules.progress.schemas import GameStateResponse, ScanResponse
from qrhunt.modules.progress.services import ScanSvc


router = APIRouter(tags=["game"])


@router.get("/game", response_model=GameStateResponse, summary="Get the visitor's board")
async def get_game(player: Player, service: ScanSvc) -> GameStateResponse:
    """Active stations with the caller's collected letters."""
    return await service.game_state(player.principal.id, player.tenant_id)


@router.post(
    "/scan/{qr_token}",
    response_model=ScanResponse,
    summary="Record a QR scan",
    description="Idempotent: scanning the same station again reports `already_scanned`.",
)
@rate_limit(
    requests=settings.scan_rate_limit_requests,
    window=settings.scan_rate_limit_window,
)
async def scan(
    request: Request,  # noqa: ARG001
    qr_token: str,
    player: Player,
    service: ScanSvc,
) -> ScanResponse:
    """Record that the caller scanned a station."""
    return await service.scan(qr_token, player.principal.id, player.tenant_id)
