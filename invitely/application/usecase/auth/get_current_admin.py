"""Resolve the admin behind a token."""

from pydantic import BaseModel

from invitely.domain.error import NotAuthorizedError
from invitely.domain.model import AdminUser
from invitely.domain.service import AdminAuthService, JWTService
from invitely.util.jwt import ADMIN_ROLE, JWTError


class GetCurrentAdminRequest(BaseModel):
    """Get current admin request."""

    token: str  # JWT token from the admin cookie


class GetCurrentAdminUseCase:
    """Use case for authenticating admin requests."""

    def __init__(
        self, jwt_service: JWTService, admin_auth_service: AdminAuthService
    ) -> None:
        """Initialize get current admin use case.

        Args:
            jwt_service: JWT token domain service
            admin_auth_service: Admin account domain service
        """
        self.jwt_service = jwt_service
        self.admin_auth_service = admin_auth_service

    async def execute(self, request: GetCurrentAdminRequest) -> AdminUser:
        """Verify the token and load the admin.

        Returns:
            The active admin the token was issued to

        Raises:
            JWTError: If the token is invalid, expired, or its admin is gone or inactive
            NotAuthorizedError: If the token is not an admin token
        """
        payload = self.jwt_service.verify_token(request.token)
        if payload.role != ADMIN_ROLE:
            raise NotAuthorizedError("Admin access required")

        admin = await self.admin_auth_service.get_active_admin(payload.sub)
        if admin is None:
            raise JWTError("Admin account not found or inactive")
        return admin
