"""Reseller domain service."""

import secrets
import string
from typing import Any, Optional
from uuid import uuid4

import logfire

from invitely.config import InvitationSettings
from invitely.domain.error import (
    ConflictError,
    NotFoundError,
    ReferralCodeGenerationError,
)
from invitely.domain.model import Reseller
from invitely.domain.model.common import utcnow
from invitely.domain.repository import ResellerRepository, UserRepository
from invitely.domain.value import (
    PageRequest,
    ReferralCode,
    ResellerId,
    ResellerType,
    UserId,
)

from .base import Service

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


def random_referral_code(length: int = 8) -> str:
    """Draw a code of ``length`` characters from A-Z and 0-9."""
    return "".join(secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(length))


class ResellerService(Service):
    """Domain service for reseller accounts."""

    def __init__(
        self,
        reseller_repository: ResellerRepository,
        user_repository: UserRepository,
        settings: InvitationSettings,
    ) -> None:
        """Initialize reseller service.

        Args:
            reseller_repository: Reseller repository
            user_repository: User repository
            settings: Referral code length and attempt bound
        """
        self.reseller_repository = reseller_repository
        self.user_repository = user_repository
        self.settings = settings

    async def generate_referral_code(self) -> ReferralCode:
        """Draw referral codes until a free one turns up.

        Raises:
            ReferralCodeGenerationError: If every attempt collided
        """
        attempts = self.settings.max_referral_code_attempts
        with logfire.span("reseller_service.generate_referral_code"):
            for attempt in range(1, attempts + 1):
                code = ReferralCode(
                    random_referral_code(self.settings.referral_code_length)
                )
                if not await self.reseller_repository.referral_code_exists(code):
                    logfire.info(
                        "Referral code generated", code=str(code), attempts=attempt
                    )
                    return code
            logfire.error("Referral code space exhausted", attempts=attempts)
            raise ReferralCodeGenerationError(attempts)

    async def create_reseller(
        self,
        user_id: UserId,
        type: ResellerType = ResellerType.FREE,
        landing_slug: Optional[str] = None,
        custom_domain: Optional[str] = None,
    ) -> Reseller:
        """Turn an existing user into a reseller.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the user already is a reseller
            ReferralCodeGenerationError: If no free referral code was found
        """
        with logfire.span(
            "reseller_service.create_reseller", user_id=str(user_id), type=type.value
        ):
            if await self.user_repository.find_by_id(user_id) is None:
                raise NotFoundError("User", str(user_id))
            if await self.reseller_repository.find_by_user_id(user_id) is not None:
                logfire.warn("User is already a reseller", user_id=str(user_id))
                raise ConflictError("User is already a reseller")

            code = await self.generate_referral_code()
            now = utcnow()
            reseller = Reseller(
                id=ResellerId(uuid4()),
                user_id=user_id,
                referral_code=code,
                type=type,
                landing_slug=landing_slug,
                custom_domain=custom_domain,
                created_at=now,
                updated_at=now,
            )
            saved = await self.reseller_repository.save(reseller)
            logfire.info(
                "Reseller created",
                reseller_id=str(saved.id),
                referral_code=str(saved.referral_code),
            )
            return saved

    async def get_reseller(self, reseller_id: ResellerId) -> Reseller:
        """Get a reseller by ID.

        Raises:
            NotFoundError: If the reseller does not exist
        """
        reseller = await self.reseller_repository.find_by_id(reseller_id)
        if reseller is None:
            raise NotFoundError("Reseller", str(reseller_id))
        return reseller

    async def get_by_referral_code(self, code: str) -> Reseller:
        """Get a reseller by referral code (any case).

        Raises:
            NotFoundError: If no reseller has the code
        """
        try:
            referral_code = ReferralCode(code)
        except ValueError:
            raise NotFoundError("Reseller", code)
        reseller = await self.reseller_repository.find_by_referral_code(referral_code)
        if reseller is None:
            raise NotFoundError("Reseller", code)
        return reseller

    async def list_resellers(
        self,
        page: PageRequest,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
    ) -> tuple[list[Reseller], int]:
        """List resellers, newest first.

        Returns:
            Tuple of (page of resellers, total matching)
        """
        items = await self.reseller_repository.find_all(
            type=type, search=search, limit=page.limit, offset=page.offset
        )
        total = await self.reseller_repository.count(type=type, search=search)
        return items, total

    async def update_reseller(
        self, reseller_id: ResellerId, changes: dict[str, Any]
    ) -> Reseller:
        """Change type, landing slug or custom domain.

        Raises:
            NotFoundError: If the reseller does not exist
        """
        reseller = await self.get_reseller(reseller_id)
        with logfire.span(
            "reseller_service.update_reseller",
            reseller_id=str(reseller_id),
            fields=sorted(changes),
        ):
            updated = Reseller.model_validate(
                {**reseller.model_dump(), **changes, "updated_at": utcnow()}
            )
            return await self.reseller_repository.save(updated)

    async def delete_reseller(self, reseller_id: ResellerId) -> None:
        """Delete a reseller.

        Raises:
            NotFoundError: If the reseller does not exist
        """
        if not await self.reseller_repository.delete(reseller_id):
            raise NotFoundError("Reseller", str(reseller_id))
        logfire.info("Reseller deleted", reseller_id=str(reseller_id))

    async def type_distribution(self) -> dict[ResellerType, int]:
        """Reseller count per type, including zeros."""
        counts = await self.reseller_repository.count_by_type()
        return {t: counts.get(t, 0) for t in ResellerType}
