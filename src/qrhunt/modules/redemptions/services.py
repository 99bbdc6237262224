"""Puzzle validation and prize-desk redemption."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.core.database import elevated
from qrhunt.core.errors import AppException, ConflictError, NotFoundError
from qrhunt.modules.redemptions.codes import generate_code, normalize_code
from qrhunt.modules.redemptions.models import Redemption
from qrhunt.modules.redemptions.repos import RedemptionRepository
from qrhunt.modules.redemptions.schemas import PuzzleResult, RedemptionVerification
from qrhunt.modules.stations.repos import StationRepository
from qrhunt.modules.users.models import CompletionStatus
from qrhunt.modules.users.repos import ProfileRepository


logger = structlog.get_logger()

# Attempts before giving up on codes that collide within the tenant
MAX_CODE_ATTEMPTS = 5


class PuzzleService:
    """Service for checking puzzle answers and issuing prize codes."""

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.redemptions = RedemptionRepository(db)
        self.stations = StationRepository(db)
        self.profiles = ProfileRepository(db)

    async def expected_word(self, tenant_id: UUID) -> str:
        """Letters of the tenant's active stations in ``order_index`` order.

        Raises:
            ConflictError: If the tenant has no active stations
        """
        animals = await self.stations.list_by_tenant(tenant_id, active_only=True)
        if not animals:
            raise ConflictError(
                "The puzzle is not configured for this site",
                error_code="puzzle_not_configured",
            )
        return "".join(a.letter for a in animals)

    async def validate_answer(
        self, answer: str, user_id: UUID, tenant_id: UUID
    ) -> PuzzleResult:
        """Check an answer and issue a code on the first correct one.

        A user who already holds a code gets it back whatever they submit.

        Args:
            answer: The submitted word
            user_id: The submitting user
            tenant_id: The tenant resolved from the request

        Returns:
            PuzzleResult with the code when correct

        Raises:
            ConflictError: If the puzzle is not configured
        """
        existing = await self.redemptions.get_for_user(user_id, tenant_id)
        if existing is not None:
            return PuzzleResult(correct=True, redemption_code=existing.redemption_code)

        expected = await self.expected_word(tenant_id)
        if answer.strip() != expected:
            logger.info("puzzle_incorrect", user_id=str(user_id))
            return PuzzleResult(correct=False)

        redemption = await self.issue_redemption(user_id, tenant_id)
        return PuzzleResult(correct=True, redemption_code=redemption.redemption_code)

    async def issue_redemption(self, user_id: UUID, tenant_id: UUID) -> Redemption:
        """Create the user's redemption and mark their profile completed.

        Concurrent winners race on the (user, tenant) constraint; whichever
        insert lands, every caller returns the stored row.

        Raises:
            AppException: If no unique code could be generated
        """
        async with elevated(self.db, "puzzle_completion"):
            redemption = None
            for _ in range(MAX_CODE_ATTEMPTS):
                code = generate_code()
                await self.redemptions.insert_if_absent(user_id, tenant_id, code)
                redemption = await self.redemptions.get_for_user(user_id, tenant_id)
                if redemption is not None:
                    break

            if redemption is None:
                raise AppException(
                    "Could not issue a redemption code",
                    error_code="redemption_code_exhausted",
                )

            profile = await self.profiles.get_by_user(user_id, tenant_id)
            completed = CompletionStatus.COMPLETED.value
            if profile is not None and profile.completion_status != completed:
                profile.completion_status = completed
                profile.completed_at = datetime.now(UTC)
                await self.profiles.update(profile)

        logger.info("redemption_issued", user_id=str(user_id), tenant_id=str(tenant_id))
        return redemption

    async def get_own_redemption(self, user_id: UUID, tenant_id: UUID) -> Redemption:
        """Get the caller's redemption.

        Raises:
            NotFoundError: If the caller has not solved the puzzle
        """
        redemption = await self.redemptions.get_for_user(user_id, tenant_id)
        if redemption is None:
            raise NotFoundError("No redemption yet", error_code="redemption_not_found")
        return redemption


class RedemptionDeskService:
    """Service for staff verifying and handing out prizes."""

    def __init__(self, db: DBSession) -> None:
        self.redemptions = RedemptionRepository(db)
        self.profiles = ProfileRepository(db)

    async def _get(self, code: str, tenant_id: UUID) -> Redemption:
        redemption = await self.redemptions.get_by_code(normalize_code(code), tenant_id)
        if redemption is None:
            raise NotFoundError(
                "Redemption code not found",
                error_code="redemption_not_found",
            )
        return redemption

    async def verify(self, code: str, tenant_id: UUID) -> RedemptionVerification:
        """Look up a code in the tenant, with the winner's contact details.

        Raises:
            NotFoundError: If the code is unknown in this tenant
        """
        redemption = await self._get(code, tenant_id)
        profile = await self.profiles.get_by_user(redemption.user_id, tenant_id)
        return RedemptionVerification(
            id=redemption.id,
            redemption_code=redemption.redemption_code,
            redeemed=redemption.redeemed,
            redeemed_at=redemption.redeemed_at,
            created_at=redemption.created_at,
            visitor_name=profile.full_name if profile else None,
            visitor_email=profile.email if profile else None,
        )

    async def redeem(
        self, code: str, tenant_id: UUID, staff_id: UUID
    ) -> RedemptionVerification:
        """Hand out the prize for a code.

        Raises:
            NotFoundError: If the code is unknown in this tenant
            ConflictError: If the prize was already handed out
        """
        redemption = await self._get(code, tenant_id)
        if not await self.redemptions.mark_redeemed(redemption.id, tenant_id, staff_id):
            raise ConflictError(
                "This prize has already been redeemed",
                error_code="already_redeemed",
            )

        logger.info(
            "redemption_redeemed",
            redemption_id=str(redemption.id),
            staff_id=str(staff_id),
        )
        await self.redemptions.refresh(redemption)
        return await self.verify(redemption.redemption_code, tenant_id)


# Type aliases for dependency injection
PuzzleSvc = Annotated[PuzzleService, Depends(PuzzleService)]
RedemptionDeskSvc = Annotated[RedemptionDeskService, Depends(RedemptionDeskService)]
