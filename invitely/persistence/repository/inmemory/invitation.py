"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from invitely.domain.error import DuplicateKeyError
from invitely.domain.model.invitation import Invitation
from invitely.domain.repository.invitation import InvitationFilter, InvitationRepository
from invitely.domain.value import (
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    Slug,
    TemplateId,
    UserId,
)

COUNTER_FIELDS = ("view_count", "unique_view_count", "rsvp_count", "confirmed_count")


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    def _matching(self, filters: InvitationFilter) -> list[Invitation]:
        invitations = list(self._invitations.values())
        if filters.user_id is not None:
            invitations = [i for i in invitations if i.user_id == filters.user_id]
        if filters.template_id is not None:
            invitations = [
                i for i in invitations if i.template_id == filters.template_id
            ]
        if filters.category is not None:
            invitations = [i for i in invitations if i.category == filters.category]
        if filters.status is not None:
            invitations = [i for i in invitations if i.status == filters.status]
        if filters.is_published is not None:
            invitations = [
                i for i in invitations if i.is_published == filters.is_published
            ]
        if filters.search:
            needle = filters.search.lower()
            invitations = [
                i
                for i in invitations
                if needle in i.title.lower() or needle in (i.venue_name or "").lower()
            ]
        return invitations

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self._invitations.get(invitation_id)

    async def find_by_slug(
        self, slug: Slug, published_only: bool = True
    ) -> Optional[Invitation]:
        """Find an invitation by slug."""
        for invitation in self._invitations.values():
            if invitation.slug == slug and (
                invitation.is_published or not published_only
            ):
                return invitation
        return None

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken."""
        return any(i.slug == slug for i in self._invitations.values())

    async def find_all(
        self,
        filters: InvitationFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations matching filters, most recently updated first."""
        invitations = self._matching(filters)
        invitations.sort(key=lambda i: i.updated_at, reverse=True)
        return invitations[offset : offset + limit]

    async def count(self, filters: InvitationFilter) -> int:
        """Count invitations matching filters."""
        return len(self._matching(filters))

    async def count_by_status(
        self, user_id: Optional[UserId] = None
    ) -> dict[InvitationStatus, int]:
        """Count invitations per status."""
        counts: dict[InvitationStatus, int] = {}
        for invitation in self._invitations.values():
            if user_id is not None and invitation.user_id != user_id:
                continue
            counts[invitation.status] = counts.get(invitation.status, 0) + 1
        return counts

    async def count_by_category(self) -> dict[InvitationCategory, int]:
        """Count invitations per category."""
        counts: dict[InvitationCategory, int] = {}
        for invitation in self._invitations.values():
            counts[invitation.category] = counts.get(invitation.category, 0) + 1
        return counts

    async def count_created_since(self, since: datetime) -> int:
        """Count invitations created at or after ``since``."""
        return sum(1 for i in self._invitations.values() if i.created_at >= since)

    async def sum_engagement(self, user_id: UserId) -> tuple[int, int]:
        """Sum view and RSVP counters over one owner's invitations."""
        owned = [i for i in self._invitations.values() if i.user_id == user_id]
        return sum(i.view_count for i in owned), sum(i.rsvp_count for i in owned)

    async def count_by_template(self, template_id: TemplateId) -> int:
        """Count invitations referencing a template."""
        return sum(
            1 for i in self._invitations.values() if i.template_id == template_id
        )

    async def save(self, invitation: Invitation) -> Invitation:
        """Save or update an invitation.

        Stored counters are kept on update, matching the database where
        they only change through increments.
        """
        for other in self._invitations.values():
            if other.slug == invitation.slug and other.id != invitation.id:
                raise DuplicateKeyError("Invitation", "slug", invitation.slug.root)

        existing = self._invitations.get(invitation.id)
        if existing:
            invitation = invitation.model_copy(
                update={field: getattr(existing, field) for field in COUNTER_FIELDS}
            )
        self._invitations[invitation.id] = invitation
        return invitation

    async def delete(self, invitation_id: InvitationId) -> bool:
        """Delete an invitation."""
        return self._invitations.pop(invitation_id, None) is not None

    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every invitation owned by a user."""
        owned = [i.id for i in self._invitations.values() if i.user_id == user_id]
        for invitation_id in owned:
            del self._invitations[invitation_id]
        return len(owned)

    async def increment_view_count(self, invitation_id: InvitationId) -> None:
        """Add one to view_count."""
        invitation = self._invitations.get(invitation_id)
        if invitation:
            self._invitations[invitation_id] = invitation.model_copy(
                update={"view_count": invitation.view_count + 1}
            )

    async def increment_rsvp_counts(
        self, invitation_id: InvitationId, confirmed: bool
    ) -> None:
        """Add one to rsvp_count, and to confirmed_count if confirmed."""
        invitation = self._invitations.get(invitation_id)
        if invitation:
            self._invitations[invitation_id] = invitation.model_copy(
                update={
                    "rsvp_count": invitation.rsvp_count + 1,
                    "confirmed_count": invitation.confirmed_count + int(confirmed),
                }
            )
