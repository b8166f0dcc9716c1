"""Admin reseller management routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from invitely.config import PaginationSettings
from invitely.domain.model import AdminUser, Reseller
from invitely.domain.service import ResellerService
from invitely.domain.value import ResellerId, ResellerType, UserId
from invitely.interface.api.envelope import ApiResponse, ok, paginated
from invitely.interface.api.routes.common import (
    MessageResponse,
    page_request,
    parse_choice,
)
from invitely.interface.api.security import current_admin

router = APIRouter(
    prefix="/admin/resellers", tags=["admin-resellers"], route_class=DishkaRoute
)


class CreateResellerAPIRequest(BaseModel):
    """API request for turning a user into a reseller."""

    user_id: UUID
    type: ResellerType = ResellerType.FREE
    landing_slug: str | None = Field(default=None, min_length=3, max_length=50)
    custom_domain: str | None = Field(default=None, max_length=255)


class UpdateResellerAPIRequest(BaseModel):
    """API request for editing a reseller; omitted fields are kept."""

    type: ResellerType | None = None
    landing_slug: str | None = Field(default=None, min_length=3, max_length=50)
    custom_domain: str | None = Field(default=None, max_length=255)


class ResellerStats(BaseModel):
    """Reseller totals."""

    total_resellers: int
    type_distribution: dict[ResellerType, int]


@router.get("")
async def list_resellers(
    reseller_service: FromDishka[ResellerService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    type: str | None = None,
    search: str | None = None,
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[list[Reseller]]:
    """List resellers, newest first."""
    page_req = page_request(pagination, page, limit)
    resellers, total = await reseller_service.list_resellers(
        page_req,
        type=parse_choice(ResellerType, type, "reseller type"),
        search=search or None,
    )
    return paginated(resellers, page_req, total)


@router.get("/stats")
async def reseller_stats(
    reseller_service: FromDishka[ResellerService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[ResellerStats]:
    """Reseller count, in total and per type."""
    distribution = await reseller_service.type_distribution()
    return ok(
        ResellerStats(
            total_resellers=sum(distribution.values()),
            type_distribution=distribution,
        )
    )


@router.get("/referral/{code}")
async def get_reseller_by_referral_code(
    code: str,
    reseller_service: FromDishka[ResellerService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Reseller]:
    """Look a reseller up by referral code, in any case."""
    return ok(await reseller_service.get_by_referral_code(code))


@router.get("/{reseller_id}")
async def get_reseller(
    reseller_id: UUID,
    reseller_service: FromDishka[ResellerService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Reseller]:
    """Get a reseller."""
    return ok(await reseller_service.get_reseller(ResellerId(reseller_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_reseller(
    request: CreateResellerAPIRequest,
    reseller_service: FromDishka[ResellerService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Reseller]:
    """Make an existing user a reseller with a fresh referral code."""
    reseller = await reseller_service.create_reseller(
        UserId(request.user_id),
        type=request.type,
        landing_slug=request.landing_slug,
        custom_domain=request.custom_domain,
    )
    return ok(reseller)


@router.put("/{reseller_id}")
async def update_reseller(
    reseller_id: UUID,
    request: UpdateResellerAPIRequest,
    reseller_service: FromDishka[ResellerService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Reseller]:
    """Edit a reseller's type, landing slug or custom domain."""
    changes = request.model_dump(exclude_unset=True)
    if changes.get("type") is None:
        changes.pop("type", None)
    reseller = await reseller_service.update_reseller(ResellerId(reseller_id), changes)
    return ok(reseller)


@router.delete("/{reseller_id}")
async def delete_reseller(
    reseller_id: UUID,
    reseller_service: FromDishka[ResellerService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[MessageResponse]:
    """Delete a reseller."""
    await reseller_service.delete_reseller(ResellerId(reseller_id))
    return ok(MessageResponse(message="Reseller deleted successfully"))
