"""In-memory guest repository for testing."""

from typing import Optional

from invitely.domain.model.guest import InvitationGuest
from invitely.domain.repository.guest import GuestRepository
from invitely.domain.value import GuestId, GuestResponse, InvitationId


class InMemoryGuestRepository(GuestRepository):
    """In-memory implementation of GuestRepository for testing."""

    def __init__(self) -> None:
        # Insertion order doubles as "order added"
        self._guests: dict[GuestId, InvitationGuest] = {}

    def _of(self, invitation_id: InvitationId) -> list[InvitationGuest]:
        return [g for g in self._guests.values() if g.invitation_id == invitation_id]

    async def find_by_id(self, guest_id: GuestId) -> Optional[InvitationGuest]:
        """Find a guest by ID."""
        return self._guests.get(guest_id)

    async def find_by_invitation(
        self, invitation_id: InvitationId, limit: int = 50, offset: int = 0
    ) -> list[InvitationGuest]:
        """Find guests of an invitation in the order they were added."""
        return self._of(invitation_id)[offset : offset + limit]

    async def count_by_invitation(self, invitation_id: InvitationId) -> int:
        """Count guests of an invitation."""
        return len(self._of(invitation_id))

    async def count_by_response(
        self, invitation_id: InvitationId
    ) -> dict[GuestResponse, int]:
        """Count guests of an invitation per response."""
        counts: dict[GuestResponse, int] = {}
        for guest in self._of(invitation_id):
            counts[guest.response] = counts.get(guest.response, 0) + 1
        return counts

    async def save(self, guest: InvitationGuest) -> InvitationGuest:
        """Save or update a guest."""
        self._guests[guest.id] = guest
        return guest

    async def delete(self, guest_id: GuestId) -> bool:
        """Delete a guest."""
        return self._guests.pop(guest_id, None) is not None

    async def delete_by_invitation(self, invitation_id: InvitationId) -> int:
        """Delete all guests of an invitation."""
        doomed = [g.id for g in self._of(invitation_id)]
        for guest_id in doomed:
            del self._guests[guest_id]
        return len(doomed)
