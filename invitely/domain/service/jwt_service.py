"""JWT token domain service."""

from datetime import timedelta

import logfire

from invitely.config import AuthSettings
from invitely.domain.model import AdminUser, User
from invitely.util.jwt import (
    ADMIN_ROLE,
    USER_ROLE,
    TokenPayload,
    create_token,
    verify_token,
)

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Admin and end-user tokens share a signing key and differ by role claim
    and lifetime.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_admin_token(self, admin: AdminUser) -> str:
        """Create a token for an admin.

        Args:
            admin: Authenticated admin

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_admin_token", admin_id=str(admin.id)):
            return create_token(
                str(admin.id),
                admin.email,
                admin.name,
                ADMIN_ROLE,
                timedelta(hours=self.auth_settings.admin_token_expiry_hours),
                self.auth_settings,
            )

    def create_user_token(self, user: User) -> str:
        """Create a token for an end user.

        Args:
            user: Authenticated user

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_user_token", user_id=str(user.id)):
            token = create_token(
                str(user.id),
                user.email,
                user.name,
                USER_ROLE,
                timedelta(days=self.auth_settings.user_token_expiry_days),
                self.auth_settings,
            )
            logfire.info("User token created", user_id=str(user.id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
