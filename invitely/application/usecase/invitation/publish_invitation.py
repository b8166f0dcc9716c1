"""Publish and unpublish invitation use cases."""

from uuid import UUID

from pydantic import BaseModel

from invitely.domain.model.common import UtcDatetime
from invitely.domain.service import InvitationService
from invitely.domain.value import InvitationId, UserId

from .view import InvitationView


class PublishInvitationRequest(BaseModel):
    """Publish invitation request."""

    invitation_id: str
    user_id: str
    expires_at: UtcDatetime | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    og_image_url: str | None = None


class UnpublishInvitationRequest(BaseModel):
    """Unpublish invitation request."""

    invitation_id: str
    user_id: str


class PublishInvitationUseCase:
    """Use case for making an owned invitation publicly reachable."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize publish invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: PublishInvitationRequest) -> InvitationView:
        """Execute publish flow.

        Raises:
            NotFoundError: If missing or owned by someone else
            BusinessRuleViolationError: If the invitation is archived
            ValidationError: If the expiry is in the past or required fields are missing
        """
        invitation = await self.invitation_service.publish(
            InvitationId(UUID(request.invitation_id)),
            UserId(UUID(request.user_id)),
            expires_at=request.expires_at,
            meta_title=request.meta_title,
            meta_description=request.meta_description,
            og_image_url=request.og_image_url,
        )
        return InvitationView.from_domain(invitation)


class UnpublishInvitationUseCase:
    """Use case for taking an owned invitation back to draft."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: UnpublishInvitationRequest) -> InvitationView:
        invitation = await self.invitation_service.unpublish(
            InvitationId(UUID(request.invitation_id)),
            UserId(UUID(request.user_id)),
        )
        return InvitationView.from_domain(invitation)
