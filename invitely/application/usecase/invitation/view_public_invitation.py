"""Public invitation use cases (no authentication)."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from invitely.domain.error import NotFoundError
from invitely.domain.service import GuestService, InvitationService, ViewContext
from invitely.domain.value import GuestResponse, Slug

from .view import PublicInvitationView


class ViewPublicInvitationRequest(BaseModel):
    """Public lookup by slug."""

    slug: str
    session_id: str | None = None
    user_agent: str | None = None
    ip_address: str | None = None
    referrer: str | None = None


class ViewPublicInvitationUseCase:
    """Use case for serving a published invitation to anyone with its slug."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize view public invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: ViewPublicInvitationRequest) -> PublicInvitationView:
        """Execute public lookup.

        The view is counted best-effort; the returned view count includes it
        only when tracking succeeded.

        Raises:
            NotFoundError: If no published, unexpired invitation has the slug
        """
        invitation = await self.invitation_service.get_published(
            _parse_slug(request.slug)
        )
        tracked = await self.invitation_service.track_view(
            invitation.id,
            ViewContext(
                session_id=request.session_id,
                user_agent=request.user_agent,
                ip_address=request.ip_address,
                referrer=request.referrer,
            ),
        )
        view = PublicInvitationView.from_domain(invitation)
        if tracked:
            view.view_count += 1
        return view


class SubmitRsvpRequest(BaseModel):
    """Guest RSVP to a published invitation."""

    slug: str
    name: str = Field(min_length=1, max_length=200)
    response: GuestResponse
    email: str | None = None
    phone: str | None = None
    plus_ones_count: int = Field(default=0, ge=0)
    response_data: dict[str, Any] | None = None


class SubmitRsvpResponse(BaseModel):
    """Recorded RSVP."""

    guest_id: str
    invitation_id: str
    name: str
    response: GuestResponse


class SubmitRsvpUseCase:
    """Use case for a guest answering a published invitation."""

    def __init__(
        self, invitation_service: InvitationService, guest_service: GuestService
    ) -> None:
        """Initialize submit RSVP use case.

        Args:
            invitation_service: Invitation domain service
            guest_service: Guest domain service
        """
        self.invitation_service = invitation_service
        self.guest_service = guest_service

    async def execute(self, request: SubmitRsvpRequest) -> SubmitRsvpResponse:
        """Execute RSVP flow.

        Raises:
            NotFoundError: If no published, unexpired invitation has the slug
            BusinessRuleViolationError: If RSVPs are closed
        """
        invitation = await self.invitation_service.get_published(
            _parse_slug(request.slug)
        )
        with logfire.span("submit_rsvp.execute", slug=request.slug):
            guest = await self.guest_service.submit_rsvp(
                invitation,
                name=request.name,
                response=request.response,
                email=request.email,
                phone=request.phone,
                plus_ones_count=request.plus_ones_count,
                response_data=request.response_data,
            )
        return SubmitRsvpResponse(
            guest_id=str(guest.id),
            invitation_id=str(invitation.id),
            name=guest.name,
            response=guest.response,
        )


def _parse_slug(raw: str) -> Slug:
    try:
        return Slug(raw)
    except ValueError:
        raise NotFoundError("Invitation", raw)
