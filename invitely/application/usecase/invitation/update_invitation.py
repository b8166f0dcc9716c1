"""Update invitation use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from invitely.application.usecase.base import BaseUseCase
from invitely.domain.model.common import UtcDatetime
from invitely.domain.service import InvitationService
from invitely.domain.value import InvitationId, UserId

from .view import InvitationView


class UpdateInvitationRequest(BaseModel):
    """Update invitation request.

    There is no category field: the category of a stored invitation is fixed.
    """

    invitation_id: str
    user_id: str  # Current user (must be the owner)
    title: str | None = None
    form_data: dict[str, Any] | None = None  # Shallow-merged into the stored data
    template_customization: dict[str, Any] | None = None
    rsvp_enabled: bool | None = None
    rsvp_deadline: UtcDatetime | None = None  # An explicit null clears the deadline
    guest_can_invite_others: bool | None = None
    require_approval: bool | None = None


class UpdateInvitationUseCase(BaseUseCase):
    """Use case for editing an owned invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize update invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: UpdateInvitationRequest) -> InvitationView:
        """Execute update invitation flow.

        Raises:
            NotFoundError: If missing or owned by someone else
            ValidationError: If the merged form data is invalid
        """
        invitation = await self.invitation_service.update(
            InvitationId(UUID(request.invitation_id)),
            UserId(UUID(request.user_id)),
            title=request.title,
            form_data=request.form_data,
            template_customization=request.template_customization,
            rsvp_enabled=request.rsvp_enabled,
            rsvp_deadline=request.rsvp_deadline,
            guest_can_invite_others=request.guest_can_invite_others,
            require_approval=request.require_approval,
            clear_rsvp_deadline=(
                "rsvp_deadline" in request.model_fields_set
                and request.rsvp_deadline is None
            ),
        )
        return InvitationView.from_domain(invitation)
