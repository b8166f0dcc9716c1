"""In-memory admin repository for testing."""

from typing import Optional

from invitely.domain.error import DuplicateKeyError
from invitely.domain.model.admin import AdminUser
from invitely.domain.repository.admin import AdminRepository
from invitely.domain.value import AdminId


class InMemoryAdminRepository(AdminRepository):
    """In-memory implementation of AdminRepository for testing."""

    def __init__(self) -> None:
        self._admins: dict[AdminId, AdminUser] = {}

    async def find_by_id(self, admin_id: AdminId) -> Optional[AdminUser]:
        """Find an admin by ID."""
        return self._admins.get(admin_id)

    async def find_by_email(self, email: str) -> Optional[AdminUser]:
        """Find an admin by email, ignoring case."""
        for admin in self._admins.values():
            if admin.email.lower() == email.lower():
                return admin
        return None

    async def save(self, admin: AdminUser) -> AdminUser:
        """Save or update an admin."""
        for other in self._admins.values():
            if other.email.lower() == admin.email.lower() and other.id != admin.id:
                raise DuplicateKeyError("Admin", "email", admin.email)
        self._admins[admin.id] = admin
        return admin
