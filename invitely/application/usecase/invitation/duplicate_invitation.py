"""Duplicate invitation use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from invitely.application.usecase.base import BaseUseCase
from invitely.domain.service import InvitationService, TemplateService
from invitely.domain.value import InvitationId, UserId

from .view import InvitationView


class DuplicateInvitationRequest(BaseModel):
    """Duplicate invitation request."""

    invitation_id: str
    user_id: str
    title: str | None = Field(default=None, max_length=200)  # Defaults to "<title> (Copy)"


class DuplicateInvitationUseCase(BaseUseCase):
    """Use case for copying an owned invitation into a new draft."""

    def __init__(
        self,
        invitation_service: InvitationService,
        template_service: TemplateService,
    ) -> None:
        """Initialize duplicate invitation use case.

        Args:
            invitation_service: Invitation domain service
            template_service: Template domain service (usage counting)
        """
        self.invitation_service = invitation_service
        self.template_service = template_service

    async def execute(self, request: DuplicateInvitationRequest) -> InvitationView:
        """Execute duplicate flow.

        The copy goes through the full create path, so it gets a new id, a
        new slug, draft status and zeroed counters.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        copy = await self.invitation_service.duplicate(
            InvitationId(UUID(request.invitation_id)),
            UserId(UUID(request.user_id)),
            title=request.title,
        )
        if copy.template_id is not None:
            await self.template_service.increment_usage(copy.template_id)
        return InvitationView.from_domain(copy)
