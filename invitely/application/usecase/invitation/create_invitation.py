"""Create invitation use case."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from invitely.application.usecase.base import BaseUseCase
from invitely.domain.error import NotFoundError, ValidationError
from invitely.domain.model.common import UtcDatetime
from invitely.domain.service import InvitationService, TemplateService
from invitely.domain.value import InvitationCategory, TemplateId, UserId

from .view import InvitationView


class CreateInvitationRequest(BaseModel):
    """Create invitation request."""

    user_id: str  # Owner, from the authenticated user
    title: str
    category: str  # Raw value; unknown categories are rejected by the validator
    form_data: dict[str, Any] = Field(default_factory=dict)
    template_id: str | None = None
    template_customization: dict[str, Any] | None = None
    rsvp_enabled: bool = True
    rsvp_deadline: UtcDatetime | None = None
    guest_can_invite_others: bool = False
    require_approval: bool = False


class CreateInvitationUseCase(BaseUseCase):
    """Use case for creating a draft invitation."""

    def __init__(
        self,
        invitation_service: InvitationService,
        template_service: TemplateService,
    ) -> None:
        """Initialize create invitation use case.

        Args:
            invitation_service: Invitation domain service
            template_service: Template domain service
        """
        self.invitation_service = invitation_service
        self.template_service = template_service

    async def execute(self, request: CreateInvitationRequest) -> InvitationView:
        """Execute create invitation flow.

        Steps:
        1. Check the template (if any) is active and fits the category
        2. Create the draft (validation, derived fields and slug in the service)
        3. Count the template use, best-effort

        Args:
            request: Create invitation request

        Returns:
            The created draft

        Raises:
            ValidationError: If the category, form data or template is invalid
        """
        template_id = None
        if request.template_id:
            template_id = await self._check_template(
                request.template_id, request.category
            )

        invitation = await self.invitation_service.create(
            user_id=UserId(UUID(request.user_id)),
            title=request.title,
            category=request.category,
            form_data=request.form_data,
            template_id=template_id,
            template_customization=request.template_customization,
            rsvp_enabled=request.rsvp_enabled,
            rsvp_deadline=request.rsvp_deadline,
            guest_can_invite_others=request.guest_can_invite_others,
            require_approval=request.require_approval,
        )

        if template_id is not None:
            await self.template_service.increment_usage(template_id)

        return InvitationView.from_domain(invitation)

    async def _check_template(self, raw_id: str, category: str) -> TemplateId:
        try:
            template = await self.template_service.get_template(
                TemplateId(UUID(raw_id))
            )
        except (NotFoundError, ValueError):
            raise ValidationError("Template not found")

        known = category in {c.value for c in InvitationCategory}
        if known and template.category.value != category:
            logfire.warn(
                "Template category mismatch",
                template_id=raw_id,
                template_category=template.category.value,
                category=category,
            )
            raise ValidationError("Template category does not match invitation type")
        return template.id

