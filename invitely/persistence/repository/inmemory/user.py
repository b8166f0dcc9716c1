"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from invitely.domain.error import DuplicateKeyError
from invitely.domain.model.user import User
from invitely.domain.repository.user import UserRepository
from invitely.domain.value import ResellerId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _matching(
        self, search: Optional[str], reseller_id: Optional[ResellerId]
    ) -> list[User]:
        users = list(self._users.values())
        if search:
            needle = search.lower()
            users = [
                u
                for u in users
                if needle in u.email.lower() or needle in (u.name or "").lower()
            ]
        if reseller_id is not None:
            users = [u for u in users if u.reseller_id == reseller_id]
        return users

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        for user in self._users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    async def find_all(
        self,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[User]:
        """Find users, newest first."""
        users = self._matching(search, reseller_id)
        users.sort(key=lambda u: u.created_at, reverse=True)
        return users[offset : offset + limit]

    async def count(
        self,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
    ) -> int:
        """Count users matching the filters."""
        return len(self._matching(search, reseller_id))

    async def count_created_since(self, since: datetime) -> int:
        """Count users who signed up at or after ``since``."""
        return sum(1 for u in self._users.values() if u.created_at >= since)

    async def save(self, user: User) -> User:
        """Save or update a user."""
        for other in self._users.values():
            if other.email == user.email and other.id != user.id:
                raise DuplicateKeyError("User", "email", user.email)
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        return self._users.pop(user_id, None) is not None
