"""Owner-scoped invitation routes.

Every route acts on the authenticated user's own invitations; someone
else's invitation answers 404 exactly like a missing one.
"""

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from invitely.application.usecase.invitation import (
    CreateInvitationRequest,
    CreateInvitationUseCase,
    DuplicateInvitationRequest,
    DuplicateInvitationUseCase,
    InvitationView,
    PublishInvitationRequest,
    PublishInvitationUseCase,
    UnpublishInvitationRequest,
    UnpublishInvitationUseCase,
    UpdateInvitationRequest,
    UpdateInvitationUseCase,
)
from invitely.config import PaginationSettings
from invitely.domain.model import InvitationGuest, User
from invitely.domain.model.common import UtcDatetime
from invitely.domain.service import GuestService, InvitationService, InvitationStats
from invitely.domain.value import (
    GuestId,
    InvitationCategory,
    InvitationId,
    InvitationStatus,
)
from invitely.interface.api.envelope import ApiResponse, ok, paginated
from invitely.interface.api.routes.common import (
    MessageResponse,
    page_request,
    parse_choice,
)
from invitely.interface.api.security import current_user

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for creating an invitation.

    ``type`` is the invitation category; unknown values are rejected with
    "Invalid invitation type".
    """

    title: str = Field(min_length=1, max_length=200)
    type: str
    form_data: dict[str, Any] = Field(default_factory=dict)
    template_id: UUID | None = None
    template_customization: dict[str, Any] | None = None
    rsvp_enabled: bool = True
    rsvp_deadline: UtcDatetime | None = None
    guest_can_invite_others: bool = False
    require_approval: bool = False


class UpdateInvitationAPIRequest(BaseModel):
    """API request for editing an invitation.

    A ``type`` sent here is ignored; the category never changes.
    """

    title: str | None = Field(default=None, min_length=1, max_length=200)
    form_data: dict[str, Any] | None = None
    template_customization: dict[str, Any] | None = None
    rsvp_enabled: bool | None = None
    rsvp_deadline: UtcDatetime | None = None
    guest_can_invite_others: bool | None = None
    require_approval: bool | None = None


class PublishInvitationAPIRequest(BaseModel):
    """Optional publishing metadata."""

    expires_at: UtcDatetime | None = None
    meta_title: str | None = Field(default=None, max_length=200)
    meta_description: str | None = None
    og_image_url: str | None = None


class DuplicateInvitationAPIRequest(BaseModel):
    """Optional title for the copy."""

    title: str | None = Field(default=None, min_length=1, max_length=200)


class AddGuestAPIRequest(BaseModel):
    """API request for adding a guest."""

    name: str = Field(min_length=1, max_length=200)
    email: str | None = None
    phone: str | None = None
    plus_ones_count: int = Field(default=0, ge=0)
    email_notifications: bool = True
    sms_notifications: bool = False


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    user: User = Depends(current_user),
) -> ApiResponse[InvitationView]:
    """Create a draft invitation.

    Example:
        POST /invitations
        {
            "title": "Sarah & John Wedding",
            "type": "wedding",
            "form_data": {"brideName": "Sarah", "groomName": "John"}
        }
    """
    view = await create_invitation_use_case.execute(
        CreateInvitationRequest(
            user_id=str(user.id),
            title=request.title,
            category=request.type,
            form_data=request.form_data,
            template_id=str(request.template_id) if request.template_id else None,
            template_customization=request.template_customization,
            rsvp_enabled=request.rsvp_enabled,
            rsvp_deadline=request.rsvp_deadline,
            guest_can_invite_others=request.guest_can_invite_others,
            require_approval=request.require_approval,
        )
    )
    return ok(view)


@router.get("")
async def list_invitations(
    invitation_service: FromDishka[InvitationService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    category: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = None,
    user: User = Depends(current_user),
) -> ApiResponse[list[InvitationView]]:
    """List the user's invitations, most recently updated first."""
    page_req = page_request(pagination, page, limit)
    invitations, total = await invitation_service.list_owned(
        user.id,
        page_req,
        category=parse_choice(InvitationCategory, category, "invitation type"),
        status=parse_choice(InvitationStatus, status_filter, "status"),
        search=search or None,
    )
    return paginated(
        [InvitationView.from_domain(i) for i in invitations], page_req, total
    )


@router.get("/stats")
async def invitation_stats(
    invitation_service: FromDishka[InvitationService],
    user: User = Depends(current_user),
) -> ApiResponse[InvitationStats]:
    """Counts and engagement totals over the user's invitations."""
    return ok(await invitation_service.stats_for_user(user.id))


@router.get("/{invitation_id}")
async def get_invitation(
    invitation_id: UUID,
    invitation_service: FromDishka[InvitationService],
    user: User = Depends(current_user),
) -> ApiResponse[InvitationView]:
    """Get one of the user's invitations."""
    invitation = await invitation_service.get_owned(
        InvitationId(invitation_id), user.id
    )
    return ok(InvitationView.from_domain(invitation))


@router.put("/{invitation_id}")
async def update_invitation(
    invitation_id: UUID,
    request: UpdateInvitationAPIRequest,
    update_invitation_use_case: FromDishka[UpdateInvitationUseCase],
    user: User = Depends(current_user),
) -> ApiResponse[InvitationView]:
    """Edit an invitation; form_data is merged into the stored data."""
    view = await update_invitation_use_case.execute(
        UpdateInvitationRequest(
            invitation_id=str(invitation_id),
            user_id=str(user.id),
            **request.model_dump(exclude_unset=True),
        )
    )
    return ok(view)


@router.delete("/{invitation_id}")
async def delete_invitation(
    invitation_id: UUID,
    invitation_service: FromDishka[InvitationService],
    user: User = Depends(current_user),
) -> ApiResponse[MessageResponse]:
    """Delete an invitation together with its guests."""
    await invitation_service.delete(InvitationId(invitation_id), user.id)
    return ok(MessageResponse(message="Invitation deleted successfully"))


@router.post("/{invitation_id}/publish")
async def publish_invitation(
    invitation_id: UUID,
    publish_invitation_use_case: FromDishka[PublishInvitationUseCase],
    request: PublishInvitationAPIRequest | None = None,
    user: User = Depends(current_user),
) -> ApiResponse[InvitationView]:
    """Publish an invitation so its slug resolves publicly."""
    request = request or PublishInvitationAPIRequest()
    view = await publish_invitation_use_case.execute(
        PublishInvitationRequest(
            invitation_id=str(invitation_id),
            user_id=str(user.id),
            **request.model_dump(),
        )
    )
    return ok(view)


@router.post("/{invitation_id}/unpublish")
async def unpublish_invitation(
    invitation_id: UUID,
    unpublish_invitation_use_case: FromDishka[UnpublishInvitationUseCase],
    user: User = Depends(current_user),
) -> ApiResponse[InvitationView]:
    """Take an invitation back to draft."""
    view = await unpublish_invitation_use_case.execute(
        UnpublishInvitationRequest(
            invitation_id=str(invitation_id), user_id=str(user.id)
        )
    )
    return ok(view)


@router.post("/{invitation_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_invitation(
    invitation_id: UUID,
    duplicate_invitation_use_case: FromDishka[DuplicateInvitationUseCase],
    request: DuplicateInvitationAPIRequest | None = None,
    user: User = Depends(current_user),
) -> ApiResponse[InvitationView]:
    """Copy an invitation into a new draft."""
    view = await duplicate_invitation_use_case.execute(
        DuplicateInvitationRequest(
            invitation_id=str(invitation_id),
            user_id=str(user.id),
            title=request.title if request else None,
        )
    )
    return ok(view)


@router.get("/{invitation_id}/guests")
async def list_guests(
    invitation_id: UUID,
    invitation_service: FromDishka[InvitationService],
    guest_service: FromDishka[GuestService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    user: User = Depends(current_user),
) -> ApiResponse[list[InvitationGuest]]:
    """List the guests of one of the user's invitations."""
    invitation = await invitation_service.get_owned(
        InvitationId(invitation_id), user.id
    )
    page_req = page_request(pagination, page, limit)
    guests, total = await guest_service.list_guests(invitation.id, page_req)
    return paginated(guests, page_req, total)


@router.post("/{invitation_id}/guests", status_code=status.HTTP_201_CREATED)
async def add_guest(
    invitation_id: UUID,
    request: AddGuestAPIRequest,
    invitation_service: FromDishka[InvitationService],
    guest_service: FromDishka[GuestService],
    user: User = Depends(current_user),
) -> ApiResponse[InvitationGuest]:
    """Add a guest to one of the user's invitations."""
    invitation = await invitation_service.get_owned(
        InvitationId(invitation_id), user.id
    )
    guest = await guest_service.add_guest(invitation.id, **request.model_dump())
    return ok(guest)


@router.delete("/{invitation_id}/guests/{guest_id}")
async def remove_guest(
    invitation_id: UUID,
    guest_id: UUID,
    invitation_service: FromDishka[InvitationService],
    guest_service: FromDishka[GuestService],
    user: User = Depends(current_user),
) -> ApiResponse[MessageResponse]:
    """Remove a guest from one of the user's invitations."""
    invitation = await invitation_service.get_owned(
        InvitationId(invitation_id), user.id
    )
    await guest_service.remove_guest(invitation.id, GuestId(guest_id))
    return ok(MessageResponse(message="Guest removed successfully"))
