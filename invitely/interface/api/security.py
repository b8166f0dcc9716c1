"""Authentication gates for admin and end-user routes.

Admin tokens travel only in the admin cookie. End-user tokens are read from
the user cookie or an ``Authorization: Bearer`` header.
"""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import HTTPException, Request, status

from invitely.application.usecase.auth import (
    GetCurrentAdminRequest,
    GetCurrentAdminUseCase,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from invitely.config import AuthSettings
from invitely.domain.error import NotAuthorizedError
from invitely.domain.model import AdminUser, User
from invitely.util.jwt import JWTError

AUTHENTICATION_REQUIRED = "Authentication required"


def bearer_token(request: Request) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header, if any."""
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


@inject
async def current_admin(
    request: Request,
    get_current_admin: FromDishka[GetCurrentAdminUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> AdminUser:
    """Resolve the admin behind the admin cookie.

    Raises:
        HTTPException: 401 when the token is missing, invalid, expired or
            belongs to no active admin; 403 when it is not an admin token
    """
    token = request.cookies.get(auth_settings.admin_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTHENTICATION_REQUIRED
        )

    try:
        return await get_current_admin.execute(GetCurrentAdminRequest(token=token))
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@inject
async def current_user(
    request: Request,
    get_current_user: FromDishka[GetCurrentUserUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> User:
    """Resolve the end user behind the user cookie or bearer header.

    Raises:
        HTTPException: 401 when the token is missing, invalid, expired or
            names an unknown user; 403 when it is not a user token
    """
    token = request.cookies.get(auth_settings.user_cookie_name) or bearer_token(
        request
    )
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTHENTICATION_REQUIRED
        )

    try:
        return await get_current_user.execute(GetCurrentUserRequest(token=token))
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
