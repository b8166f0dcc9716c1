"""Invitation guest repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from invitely.domain.model import InvitationGuest
from invitely.domain.value import GuestId, GuestResponse, InvitationId


class GuestRepository(ABC):
    """Repository for guests of an invitation."""

    @abstractmethod
    async def find_by_id(self, guest_id: GuestId) -> Optional[InvitationGuest]:
        """Find a guest by ID."""
        pass

    @abstractmethod
    async def find_by_invitation(
        self, invitation_id: InvitationId, limit: int = 50, offset: int = 0
    ) -> List[InvitationGuest]:
        """Find guests of an invitation in the order they were added."""
        pass

    @abstractmethod
    async def count_by_invitation(self, invitation_id: InvitationId) -> int:
        """Count guests of an invitation."""
        pass

    @abstractmethod
    async def count_by_response(
        self, invitation_id: InvitationId
    ) -> dict[GuestResponse, int]:
        """Count guests of an invitation per RSVP response."""
        pass

    @abstractmethod
    async def save(self, guest: InvitationGuest) -> InvitationGuest:
        """Save a guest (create or update)."""
        pass

    @abstractmethod
    async def delete(self, guest_id: GuestId) -> bool:
        """Delete one guest.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def delete_by_invitation(self, invitation_id: InvitationId) -> int:
        """Delete every guest of an invitation.

        Returns:
            Number of guests deleted
        """
        pass
