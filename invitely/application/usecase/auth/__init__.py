"""Authentication use cases."""

from .admin_login import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminLoginUseCase,
    AdminView,
)
from .get_current_admin import GetCurrentAdminRequest, GetCurrentAdminUseCase
from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .user_login import UserLoginRequest, UserLoginResponse, UserLoginUseCase, UserView

__all__ = [
    "AdminLoginRequest",
    "AdminLoginResponse",
    "AdminLoginUseCase",
    "AdminView",
    "GetCurrentAdminRequest",
    "GetCurrentAdminUseCase",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "UserLoginRequest",
    "UserLoginResponse",
    "UserLoginUseCase",
    "UserView",
]
