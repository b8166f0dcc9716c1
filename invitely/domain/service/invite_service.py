"""Admin-side view over all invitations ("invites")."""

from datetime import timedelta

import logfire

from invitely.domain.error import NotFoundError
from invitely.domain.model import Invitation
from invitely.domain.model.common import utcnow
from invitely.domain.repository import InvitationFilter, InvitationRepository
from invitely.domain.value import (
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    PageRequest,
    Slug,
    ValueObject,
)

from .base import Service

RECENT_INVITES_WINDOW = timedelta(days=7)


class InviteStats(ValueObject):
    """Platform-wide invitation figures."""

    total_invites: int
    published_invites: int
    draft_invites: int
    recent_invites: int
    type_distribution: dict[InvitationCategory, int]


class InviteService(Service):
    """Read and moderate invitations across all owners."""

    def __init__(self, invitation_repository: InvitationRepository) -> None:
        """Initialize invite service.

        Args:
            invitation_repository: Invitation repository
        """
        self.invitation_repository = invitation_repository

    async def list_invites(
        self, filters: InvitationFilter, page: PageRequest
    ) -> tuple[list[Invitation], int]:
        """List invitations of any owner.

        Returns:
            Tuple of (page of invitations, total matching)
        """
        with logfire.span(
            "invite_service.list_invites", page=page.page, limit=page.limit
        ):
            items = await self.invitation_repository.find_all(
                filters, limit=page.limit, offset=page.offset
            )
            total = await self.invitation_repository.count(filters)
            return items, total

    async def get_invite(self, invitation_id: InvitationId) -> Invitation:
        """Get any invitation by ID.

        Raises:
            NotFoundError: If the invitation does not exist
        """
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if invitation is None:
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def get_invite_by_slug(self, slug: Slug) -> Invitation:
        """Get any invitation by slug, published or not.

        Raises:
            NotFoundError: If no invitation has the slug
        """
        invitation = await self.invitation_repository.find_by_slug(
            slug, published_only=False
        )
        if invitation is None:
            raise NotFoundError("Invitation", str(slug))
        return invitation

    async def stats(self) -> InviteStats:
        """Summarize all invitations."""
        with logfire.span("invite_service.stats"):
            by_status = await self.invitation_repository.count_by_status()
            by_category = await self.invitation_repository.count_by_category()
            recent = await self.invitation_repository.count_created_since(
                utcnow() - RECENT_INVITES_WINDOW
            )
            return InviteStats(
                total_invites=sum(by_status.values()),
                published_invites=by_status.get(InvitationStatus.PUBLISHED, 0),
                draft_invites=by_status.get(InvitationStatus.DRAFT, 0),
                recent_invites=recent,
                type_distribution={
                    category: by_category.get(category, 0)
                    for category in InvitationCategory
                },
            )
