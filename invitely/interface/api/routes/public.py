"""Public invitation routes (no authentication)."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from pydantic import BaseModel, Field

from invitely.application.usecase.invitation import (
    PublicInvitationView,
    SubmitRsvpRequest,
    SubmitRsvpResponse,
    SubmitRsvpUseCase,
    ViewPublicInvitationRequest,
    ViewPublicInvitationUseCase,
)
from invitely.domain.value import GuestResponse
from invitely.interface.api.envelope import ApiResponse, ok

router = APIRouter(
    prefix="/public/invitations", tags=["public"], route_class=DishkaRoute
)


class RsvpAPIRequest(BaseModel):
    """API request for answering an invitation."""

    name: str = Field(min_length=1, max_length=200)
    response: GuestResponse
    email: str | None = None
    phone: str | None = None
    plus_ones_count: int = Field(default=0, ge=0)
    response_data: dict[str, Any] | None = None


@router.get("/{slug}")
async def view_invitation(
    slug: str,
    request: Request,
    view_public_invitation_use_case: FromDishka[ViewPublicInvitationUseCase],
) -> ApiResponse[PublicInvitationView]:
    """Serve a published invitation and count the view."""
    view = await view_public_invitation_use_case.execute(
        ViewPublicInvitationRequest(
            slug=slug,
            session_id=request.headers.get("x-session-id"),
            user_agent=request.headers.get("user-agent"),
            ip_address=request.client.host if request.client else None,
            referrer=request.headers.get("referer"),
        )
    )
    return ok(view)


@router.post("/{slug}/rsvp", status_code=status.HTTP_201_CREATED)
async def submit_rsvp(
    slug: str,
    request: RsvpAPIRequest,
    submit_rsvp_use_case: FromDishka[SubmitRsvpUseCase],
) -> ApiResponse[SubmitRsvpResponse]:
    """Record a guest's RSVP to a published invitation."""
    result = await submit_rsvp_use_case.execute(
        SubmitRsvpRequest(slug=slug, **request.model_dump())
    )
    return ok(result)
