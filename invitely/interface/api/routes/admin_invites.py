"""Admin view over every invitation on the platform."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from invitely.application.usecase.invitation import InvitationView
from invitely.config import PaginationSettings
from invitely.domain.error import NotFoundError
from invitely.domain.model import AdminUser
from invitely.domain.repository import InvitationFilter
from invitely.domain.service import InvitationService, InviteService, InviteStats
from invitely.domain.value import (
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    Slug,
    TemplateId,
    UserId,
)
from invitely.interface.api.envelope import ApiResponse, ok, paginated
from invitely.interface.api.routes.common import (
    MessageResponse,
    page_request,
    parse_choice,
)
from invitely.interface.api.security import current_admin

router = APIRouter(
    prefix="/admin/invites", tags=["admin-invites"], route_class=DishkaRoute
)


class InviteStatusAPIRequest(BaseModel):
    """API request for an administrative status change."""

    status: InvitationStatus


@router.get("")
async def list_invites(
    invite_service: FromDishka[InviteService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    user_id: UUID | None = None,
    template_id: UUID | None = None,
    category: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    is_published: bool | None = None,
    search: str | None = None,
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[list[InvitationView]]:
    """List invitations of every owner, most recently updated first."""
    page_req = page_request(pagination, page, limit)
    filters = InvitationFilter(
        user_id=UserId(user_id) if user_id else None,
        template_id=TemplateId(template_id) if template_id else None,
        category=parse_choice(InvitationCategory, category, "category"),
        status=parse_choice(InvitationStatus, status_filter, "status"),
        is_published=is_published,
        search=search or None,
    )
    invites, total = await invite_service.list_invites(filters, page_req)
    return paginated([InvitationView.from_domain(i) for i in invites], page_req, total)


@router.get("/stats")
async def invite_stats(
    invite_service: FromDishka[InviteService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[InviteStats]:
    """Invitation totals and the weekly creation count."""
    return ok(await invite_service.stats())


@router.get("/slug/{slug}")
async def get_invite_by_slug(
    slug: str,
    invite_service: FromDishka[InviteService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[InvitationView]:
    """Look an invitation up by slug, published or not."""
    try:
        parsed = Slug(slug)
    except ValueError:
        raise NotFoundError("Invitation", slug)
    invitation = await invite_service.get_invite_by_slug(parsed)
    return ok(InvitationView.from_domain(invitation))


@router.get("/{invitation_id}")
async def get_invite(
    invitation_id: UUID,
    invite_service: FromDishka[InviteService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[InvitationView]:
    """Get any invitation."""
    invitation = await invite_service.get_invite(InvitationId(invitation_id))
    return ok(InvitationView.from_domain(invitation))


@router.patch("/{invitation_id}/status")
async def change_invite_status(
    invitation_id: UUID,
    request: InviteStatusAPIRequest,
    invitation_service: FromDishka[InvitationService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[InvitationView]:
    """Archive or expire an invitation."""
    invitation = await invitation_service.set_status(
        InvitationId(invitation_id), request.status
    )
    return ok(InvitationView.from_domain(invitation))


@router.delete("/{invitation_id}")
async def delete_invite(
    invitation_id: UUID,
    invitation_service: FromDishka[InvitationService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[MessageResponse]:
    """Delete any invitation and its guests."""
    await invitation_service.remove(InvitationId(invitation_id))
    return ok(MessageResponse(message="Invitation deleted successfully"))
