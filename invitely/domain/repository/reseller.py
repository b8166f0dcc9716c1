"""Reseller repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from invitely.domain.model import Reseller
from invitely.domain.value import ReferralCode, ResellerId, ResellerType, UserId


class ResellerRepository(ABC):
    """Repository for Reseller entities."""

    @abstractmethod
    async def find_by_id(self, reseller_id: ResellerId) -> Optional[Reseller]:
        """Find a reseller by ID."""
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: UserId) -> Optional[Reseller]:
        """Find the reseller record of a user, if any."""
        pass

    @abstractmethod
    async def find_by_referral_code(self, code: ReferralCode) -> Optional[Reseller]:
        """Find a reseller by referral code."""
        pass

    @abstractmethod
    async def referral_code_exists(self, code: ReferralCode) -> bool:
        """Check if a referral code is taken."""
        pass

    @abstractmethod
    async def find_all(
        self,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Reseller]:
        """Find resellers, newest first.

        Args:
            type: Only resellers of this type
            search: Case-insensitive match on referral code or landing slug
            limit: Maximum number of resellers to return
            offset: Number of resellers to skip

        Returns:
            List of resellers
        """
        pass

    @abstractmethod
    async def count(
        self,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count resellers matching the filters."""
        pass

    @abstractmethod
    async def count_by_type(self) -> dict[ResellerType, int]:
        """Count resellers per type."""
        pass

    @abstractmethod
    async def save(self, reseller: Reseller) -> Reseller:
        """Save a reseller (create or update).

        Raises:
            DuplicateKeyError: If the user or referral code is already taken
        """
        pass

    @abstractmethod
    async def delete(self, reseller_id: ResellerId) -> bool:
        """Delete a reseller.

        Returns:
            True if a row was deleted
        """
        pass
