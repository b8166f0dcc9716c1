"""Admin authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from invitely.application.usecase.auth import (
    AdminLoginRequest,
    AdminLoginUseCase,
    AdminView,
)
from invitely.config import AuthSettings
from invitely.domain.model import AdminUser
from invitely.domain.service import AdminAuthService, JWTService
from invitely.interface.api.envelope import ApiResponse, ok
from invitely.interface.api.routes.common import (
    MessageResponse,
    clear_auth_cookie,
    set_auth_cookie,
)
from invitely.interface.api.security import current_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/auth", tags=["admin-authentication"], route_class=DishkaRoute
)


class CreateAdminAPIRequest(BaseModel):
    """API request for creating another admin account."""

    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=8)
    name: str = Field(min_length=2, max_length=200)


def _set_admin_cookie(
    response: Response, token: str, auth_settings: AuthSettings
) -> None:
    set_auth_cookie(
        response,
        auth_settings.admin_cookie_name,
        token,
        auth_settings.admin_token_expiry_hours * 60 * 60,
        auth_settings,
    )


@router.post("/login")
async def login(
    request: AdminLoginRequest,
    response: Response,
    admin_login_use_case: FromDishka[AdminLoginUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> ApiResponse[AdminView]:
    """Log an admin in with email and password.

    Sets the admin cookie on success. Unknown emails, wrong passwords and
    deactivated accounts all get the same 401.
    """
    result = await admin_login_use_case.execute(request)
    logger.info(f"Admin logged in: {result.admin.email}")
    _set_admin_cookie(response, result.token, auth_settings)
    return ok(result.admin)


@router.post("/logout")
async def logout(
    response: Response, auth_settings: FromDishka[AuthSettings]
) -> ApiResponse[MessageResponse]:
    """Clear the admin cookie."""
    clear_auth_cookie(response, auth_settings.admin_cookie_name, auth_settings)
    return ok(MessageResponse(message="Logged out successfully"))


@router.get("/me")
async def me(admin: AdminUser = Depends(current_admin)) -> ApiResponse[AdminView]:
    """Return the authenticated admin."""
    return ok(AdminView.from_domain(admin))


@router.post("/create-admin", status_code=status.HTTP_201_CREATED)
async def create_admin(
    request: CreateAdminAPIRequest,
    admin_auth_service: FromDishka[AdminAuthService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[AdminView]:
    """Create another admin account (admins only)."""
    created = await admin_auth_service.create_admin(
        email=request.email, password=request.password, name=request.name
    )
    logger.info(f"Admin {admin.email} created admin {created.email}")
    return ok(AdminView.from_domain(created))


@router.post("/refresh")
async def refresh(
    response: Response,
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[AdminView]:
    """Re-issue the admin cookie with a fresh expiry."""
    _set_admin_cookie(response, jwt_service.create_admin_token(admin), auth_settings)
    return ok(AdminView.from_domain(admin))
