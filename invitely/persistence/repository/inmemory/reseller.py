"""In-memory reseller repository for testing."""

from typing import Optional

from invitely.domain.error import DuplicateKeyError
from invitely.domain.model.reseller import Reseller
from invitely.domain.repository.reseller import ResellerRepository
from invitely.domain.value import ReferralCode, ResellerId, ResellerType, UserId


class InMemoryResellerRepository(ResellerRepository):
    """In-memory implementation of ResellerRepository for testing."""

    def __init__(self) -> None:
        self._resellers: dict[ResellerId, Reseller] = {}

    def _matching(
        self, type: Optional[ResellerType], search: Optional[str]
    ) -> list[Reseller]:
        resellers = list(self._resellers.values())
        if type is not None:
            resellers = [r for r in resellers if r.type == type]
        if search:
            needle = search.lower()
            resellers = [
                r
                for r in resellers
                if needle in r.referral_code.root.lower()
                or needle in (r.landing_slug or "").lower()
            ]
        return resellers

    async def find_by_id(self, reseller_id: ResellerId) -> Optional[Reseller]:
        """Find a reseller by ID."""
        return self._resellers.get(reseller_id)

    async def find_by_user_id(self, user_id: UserId) -> Optional[Reseller]:
        """Find the reseller account of a user."""
        for reseller in self._resellers.values():
            if reseller.user_id == user_id:
                return reseller
        return None

    async def find_by_referral_code(self, code: ReferralCode) -> Optional[Reseller]:
        """Find a reseller by referral code."""
        for reseller in self._resellers.values():
            if reseller.referral_code == code:
                return reseller
        return None

    async def referral_code_exists(self, code: ReferralCode) -> bool:
        """Check if a referral code is taken."""
        return any(r.referral_code == code for r in self._resellers.values())

    async def find_all(
        self,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Reseller]:
        """Find resellers, newest first."""
        resellers = self._matching(type, search)
        resellers.sort(key=lambda r: r.created_at, reverse=True)
        return resellers[offset : offset + limit]

    async def count(
        self,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count resellers matching the filters."""
        return len(self._matching(type, search))

    async def count_by_type(self) -> dict[ResellerType, int]:
        """Count resellers per type."""
        counts: dict[ResellerType, int] = {}
        for reseller in self._resellers.values():
            counts[reseller.type] = counts.get(reseller.type, 0) + 1
        return counts

    async def save(self, reseller: Reseller) -> Reseller:
        """Save or update a reseller."""
        for other in self._resellers.values():
            if other.id == reseller.id:
                continue
            if other.referral_code == reseller.referral_code:
                raise DuplicateKeyError(
                    "Reseller", "referral_code", reseller.referral_code.root
                )
            if other.user_id == reseller.user_id:
                raise DuplicateKeyError("Reseller", "user_id", str(reseller.user_id))
        self._resellers[reseller.id] = reseller
        return reseller

    async def delete(self, reseller_id: ResellerId) -> bool:
        """Delete a reseller."""
        return self._resellers.pop(reseller_id, None) is not None
