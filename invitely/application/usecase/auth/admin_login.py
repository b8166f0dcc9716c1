"""Admin login use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from invitely.domain.model import AdminUser
from invitely.domain.service import AdminAuthService, JWTService


class AdminView(BaseModel):
    """Admin account as returned by the API (never includes the hash)."""

    id: str
    email: str
    name: str
    role: str
    is_active: bool
    last_login_at: datetime | None
    created_at: datetime

    @classmethod
    def from_domain(cls, admin: AdminUser) -> "AdminView":
        return cls(
            id=str(admin.id),
            email=admin.email,
            name=admin.name,
            role=admin.role,
            is_active=admin.is_active,
            last_login_at=admin.last_login_at,
            created_at=admin.created_at,
        )


class AdminLoginRequest(BaseModel):
    """Admin login request."""

    email: str
    password: str


class AdminLoginResponse(BaseModel):
    """Admin login response."""

    token: str
    admin: AdminView


class AdminLoginUseCase:
    """Use case for admin email and password login."""

    def __init__(
        self, admin_auth_service: AdminAuthService, jwt_service: JWTService
    ) -> None:
        """Initialize admin login use case.

        Args:
            admin_auth_service: Admin account domain service
            jwt_service: JWT token domain service
        """
        self.admin_auth_service = admin_auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: AdminLoginRequest) -> AdminLoginResponse:
        """Execute admin login.

        Raises:
            InvalidCredentialsError: If the credentials do not match an active admin
        """
        with logfire.span("admin_login.execute", email=request.email):
            admin = await self.admin_auth_service.authenticate(
                request.email, request.password
            )
            token = self.jwt_service.create_admin_token(admin)
            return AdminLoginResponse(token=token, admin=AdminView.from_domain(admin))
