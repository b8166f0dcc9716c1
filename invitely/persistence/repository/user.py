"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import User
from invitely.domain.repository import UserRepository
from invitely.domain.value import ResellerId, UserId
from invitely.persistence.errors import raise_if_duplicate
from invitely.persistence.mappers import row_to_user, user_to_dict
from invitely.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filters(stmt, search: Optional[str], reseller_id: Optional[ResellerId]):
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    users_table.c.name.ilike(pattern),
                    users_table.c.email.ilike(pattern),
                )
            )
        if reseller_id is not None:
            stmt = stmt.where(users_table.c.reseller_id == reseller_id)
        return stmt

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_all(
        self,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[User]:
        """Find users, newest first."""
        with logfire.span(
            "user_repository.find_all", search=search, limit=limit, offset=offset
        ):
            stmt = self._apply_filters(select(users_table), search, reseller_id)
            stmt = (
                stmt.order_by(desc(users_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_user(dict(row)) for row in result.mappings()]

    async def count(
        self,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
    ) -> int:
        """Count users matching the filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(users_table), search, reseller_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_created_since(self, since: datetime) -> int:
        """Count users who signed up at or after ``since``."""
        stmt = select(func.count()).where(users_table.c.created_at >= since)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, user: User) -> User:
        """Save a user (insert or update).

        Raises:
            DuplicateKeyError: If the email belongs to another user
        """
        with logfire.span("user_repository.save", user_id=str(user.id)):
            data = user_to_dict(user)
            existing = await self.find_by_id(user.id)

            try:
                async with self.session.begin_nested():
                    if existing:
                        stmt = (
                            update(users_table)
                            .where(users_table.c.id == user.id)
                            .values(**data)
                        )
                    else:
                        logfire.info("Creating user", email=user.email)
                        stmt = insert(users_table).values(**data)
                    await self.session.execute(stmt)
            except IntegrityError as e:
                raise_if_duplicate(
                    e, "User", {"users_email_key": ("email", user.email)}
                )
                raise

            await self.session.flush()
            return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        stmt = delete(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
