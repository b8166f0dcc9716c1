"""Admin user management routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from invitely.application.usecase.auth import UserView
from invitely.config import PaginationSettings
from invitely.domain.model import AdminUser
from invitely.domain.service import UserService, UserStats
from invitely.domain.value import ResellerId, UserId
from invitely.interface.api.envelope import ApiResponse, ok, paginated
from invitely.interface.api.routes.common import MessageResponse, page_request
from invitely.interface.api.security import current_admin

router = APIRouter(prefix="/admin/users", tags=["admin-users"], route_class=DishkaRoute)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CreateUserAPIRequest(BaseModel):
    """API request for creating a user by hand."""

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = None
    reseller_id: UUID | None = None


class UpdateUserAPIRequest(BaseModel):
    """API request for editing a user; omitted fields are kept."""

    name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = None
    reseller_id: UUID | None = None


@router.get("")
async def list_users(
    user_service: FromDishka[UserService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    search: str | None = None,
    reseller_id: UUID | None = None,
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[list[UserView]]:
    """List users, newest first."""
    page_req = page_request(pagination, page, limit)
    users, total = await user_service.list_users(
        page_req,
        search=search or None,
        reseller_id=ResellerId(reseller_id) if reseller_id else None,
    )
    return paginated([UserView.from_domain(u) for u in users], page_req, total)


@router.get("/stats")
async def user_stats(
    user_service: FromDishka[UserService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[UserStats]:
    """Platform-wide user figures."""
    return ok(await user_service.stats())


@router.get("/email/{email}")
async def get_user_by_email(
    email: str,
    user_service: FromDishka[UserService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[UserView]:
    """Look a user up by email."""
    return ok(UserView.from_domain(await user_service.get_by_email(email)))


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    user_service: FromDishka[UserService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[UserView]:
    """Get a user."""
    return ok(UserView.from_domain(await user_service.get_by_id(UserId(user_id))))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserAPIRequest,
    user_service: FromDishka[UserService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[UserView]:
    """Create a user. The email must be unused."""
    user = await user_service.create_user(
        email=request.email,
        name=request.name,
        avatar_url=request.avatar_url,
        reseller_id=ResellerId(request.reseller_id) if request.reseller_id else None,
    )
    return ok(UserView.from_domain(user))


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    request: UpdateUserAPIRequest,
    user_service: FromDishka[UserService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[UserView]:
    """Edit a user's name, avatar or reseller attribution."""
    user = await user_service.update_user(
        UserId(user_id), request.model_dump(exclude_unset=True)
    )
    return ok(UserView.from_domain(user))


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID,
    user_service: FromDishka[UserService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[MessageResponse]:
    """Delete a user together with their invitations."""
    await user_service.delete_user(UserId(user_id))
    return ok(MessageResponse(message="User deleted successfully"))
