"""Admin account domain service."""

from typing import Optional
from uuid import UUID, uuid4

import logfire

from invitely.config import AuthSettings
from invitely.domain.error import (
    DuplicateKeyError,
    InvalidCredentialsError,
    NotFoundError,
)
from invitely.domain.model import AdminUser
from invitely.domain.model.common import utcnow
from invitely.domain.repository import AdminRepository
from invitely.domain.value import AdminId
from invitely.util.password import hash_password, verify_password

from .base import Service


class AdminAuthService(Service):
    """Domain service for admin credentials and accounts."""

    def __init__(
        self, admin_repository: AdminRepository, auth_settings: AuthSettings
    ) -> None:
        """Initialize admin auth service.

        Args:
            admin_repository: Admin repository
            auth_settings: Authentication settings (bcrypt cost)
        """
        self.admin_repository = admin_repository
        self.auth_settings = auth_settings

    async def authenticate(self, email: str, password: str) -> AdminUser:
        """Check an email and password pair and record the login.

        Unknown email, wrong password and deactivated account all fail the
        same way.

        Returns:
            The admin, with ``last_login_at`` updated

        Raises:
            InvalidCredentialsError: If the credentials do not match an active admin
        """
        with logfire.span("admin_auth_service.authenticate", email=email):
            admin = await self.admin_repository.find_by_email(email)
            if admin is None or not admin.is_active:
                logfire.warn("Admin login rejected", email=email)
                raise InvalidCredentialsError()
            if not verify_password(password, admin.password_hash):
                logfire.warn("Admin login rejected", email=email)
                raise InvalidCredentialsError()

            now = utcnow()
            admin = await self.admin_repository.save(
                admin.model_copy(update={"last_login_at": now, "updated_at": now})
            )
            logfire.info("Admin logged in", admin_id=str(admin.id))
            return admin

    async def create_admin(self, email: str, password: str, name: str) -> AdminUser:
        """Create an admin account.

        Raises:
            DuplicateKeyError: If the email is taken
        """
        with logfire.span("admin_auth_service.create_admin", email=email):
            if await self.admin_repository.find_by_email(email) is not None:
                raise DuplicateKeyError("Admin", "email", email)

            now = utcnow()
            admin = AdminUser(
                id=AdminId(uuid4()),
                email=email,
                name=name,
                password_hash=hash_password(
                    password, rounds=self.auth_settings.bcrypt_rounds
                ),
                created_at=now,
                updated_at=now,
            )
            saved = await self.admin_repository.save(admin)
            logfire.info("Admin created", admin_id=str(saved.id))
            return saved

    async def get_active_admin(self, admin_id: str) -> Optional[AdminUser]:
        """Resolve a token subject to an active admin, or None."""
        try:
            admin = await self.admin_repository.find_by_id(AdminId(UUID(admin_id)))
        except ValueError:
            return None
        if admin is None or not admin.is_active:
            return None
        return admin

    async def get_admin(self, admin_id: AdminId) -> AdminUser:
        """Get an admin by ID.

        Raises:
            NotFoundError: If the admin does not exist
        """
        admin = await self.admin_repository.find_by_id(admin_id)
        if admin is None:
            raise NotFoundError("Admin", str(admin_id))
        return admin
