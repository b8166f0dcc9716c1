"""End-user authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Response

from invitely.application.usecase.auth import (
    UserLoginRequest,
    UserLoginResponse,
    UserLoginUseCase,
    UserView,
)
from invitely.config import AuthSettings
from invitely.domain.model import User
from invitely.interface.api.envelope import ApiResponse, ok
from invitely.interface.api.routes.common import (
    MessageResponse,
    clear_auth_cookie,
    set_auth_cookie,
)
from invitely.interface.api.security import current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post("/login/google")
async def login_with_google(
    request: UserLoginRequest,
    response: Response,
    user_login_use_case: FromDishka[UserLoginUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> ApiResponse[UserLoginResponse]:
    """Exchange a Google ID token for an end-user session.

    The token is set as an HTTP-only cookie and also returned in the body for
    clients that send it as a bearer header.

    Example:
        POST /auth/login/google
        {"id_token": "eyJhbGciOi..."}
    """
    result = await user_login_use_case.execute(request)
    logger.info(f"User logged in: {result.user.email}")

    set_auth_cookie(
        response,
        auth_settings.user_cookie_name,
        result.token,
        auth_settings.user_token_expiry_days * 24 * 60 * 60,
        auth_settings,
    )
    return ok(result)


@router.post("/logout")
async def logout(
    response: Response, auth_settings: FromDishka[AuthSettings]
) -> ApiResponse[MessageResponse]:
    """Clear the end-user cookie."""
    clear_auth_cookie(response, auth_settings.user_cookie_name, auth_settings)
    return ok(MessageResponse(message="Logged out successfully"))


@router.get("/profile")
async def get_profile(user: User = Depends(current_user)) -> ApiResponse[UserView]:
    """Return the authenticated user."""
    return ok(UserView.from_domain(user))
