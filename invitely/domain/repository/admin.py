"""Admin account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from invitely.domain.model import AdminUser
from invitely.domain.value import AdminId


class AdminRepository(ABC):
    """Repository for admin accounts."""

    @abstractmethod
    async def find_by_id(self, admin_id: AdminId) -> Optional[AdminUser]:
        """Find an admin by ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[AdminUser]:
        """Find an admin by email (case-insensitive)."""
        pass

    @abstractmethod
    async def save(self, admin: AdminUser) -> AdminUser:
        """Save an admin (create or update).

        Raises:
            DuplicateKeyError: If the email belongs to another admin
        """
        pass
