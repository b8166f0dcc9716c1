"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from invitely.domain.model import Invitation
from invitely.domain.value import (
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    Slug,
    TemplateId,
    UserId,
    ValueObject,
)


class InvitationFilter(ValueObject):
    """Filter predicates for invitation listings.

    Every predicate is optional; ``search`` matches title and venue name
    case-insensitively.
    """

    user_id: Optional[UserId] = None
    template_id: Optional[TemplateId] = None
    category: Optional[InvitationCategory] = None
    status: Optional[InvitationStatus] = None
    is_published: Optional[bool] = None
    search: Optional[str] = None


class InvitationRepository(ABC):
    """Repository for the Invitation aggregate.

    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID, regardless of owner.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(
        self, slug: Slug, published_only: bool = True
    ) -> Optional[Invitation]:
        """Find an invitation by slug.

        Args:
            slug: Public slug
            published_only: Only match invitations with is_published set

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check if any invitation (in any state) uses the slug.

        Args:
            slug: Slug to check

        Returns:
            True if taken
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: InvitationFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Invitation]:
        """Find invitations matching filters, most recently updated first.

        Args:
            filters: Filter predicates
            limit: Maximum number of invitations to return
            offset: Number of invitations to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def count(self, filters: InvitationFilter) -> int:
        """Count invitations matching filters.

        Args:
            filters: Filter predicates

        Returns:
            Number of matching invitations
        """
        pass

    @abstractmethod
    async def count_by_status(
        self, user_id: Optional[UserId] = None
    ) -> dict[InvitationStatus, int]:
        """Count invitations per status.

        Args:
            user_id: Restrict to one owner (None for all)

        Returns:
            Mapping of status to count (statuses with no rows may be omitted)
        """
        pass

    @abstractmethod
    async def count_by_category(self) -> dict[InvitationCategory, int]:
        """Count all invitations per category."""
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Count invitations created at or after ``since``."""
        pass

    @abstractmethod
    async def sum_engagement(self, user_id: UserId) -> tuple[int, int]:
        """Sum view and RSVP counters over one owner's invitations.

        Returns:
            Tuple of (total views, total RSVPs)
        """
        pass

    @abstractmethod
    async def count_by_template(self, template_id: TemplateId) -> int:
        """Count invitations referencing a template."""
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation

        Raises:
            DuplicateKeyError: If the slug is already used by another invitation
        """
        pass

    @abstractmethod
    async def delete(self, invitation_id: InvitationId) -> bool:
        """Delete an invitation and, through the store, its guests and events.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every invitation owned by a user.

        Returns:
            Number of invitations deleted
        """
        pass

    @abstractmethod
    async def increment_view_count(self, invitation_id: InvitationId) -> None:
        """Atomically add one to view_count.

        Args:
            invitation_id: The invitation ID
        """
        pass

    @abstractmethod
    async def increment_rsvp_counts(
        self, invitation_id: InvitationId, confirmed: bool
    ) -> None:
        """Atomically add one to rsvp_count, and to confirmed_count if confirmed.

        Args:
            invitation_id: The invitation ID
            confirmed: Whether the guest is attending
        """
        pass
