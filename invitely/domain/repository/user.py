"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from invitely.domain.model import User
from invitely.domain.value import ResellerId, UserId


class UserRepository(ABC):
    """Repository for User entities."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive).

        Args:
            email: Email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[User]:
        """Find users, newest first.

        Args:
            search: Case-insensitive match on name or email
            reseller_id: Only users attributed to this reseller
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            List of users
        """
        pass

    @abstractmethod
    async def count(
        self,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
    ) -> int:
        """Count users matching the filters."""
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Count users who signed up at or after ``since``."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Raises:
            DuplicateKeyError: If the email belongs to another user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Returns:
            True if a row was deleted
        """
        pass
