"""PostgreSQL implementation of Admin repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import AdminUser
from invitely.domain.repository import AdminRepository
from invitely.domain.value import AdminId
from invitely.persistence.errors import raise_if_duplicate
from invitely.persistence.mappers import admin_to_dict, row_to_admin
from invitely.persistence.tables import admin_users_table


class PostgresAdminRepository(AdminRepository):
    """PostgreSQL implementation of AdminRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, admin_id: AdminId) -> Optional[AdminUser]:
        """Find an admin by ID."""
        stmt = select(admin_users_table).where(admin_users_table.c.id == admin_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_admin(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[AdminUser]:
        """Find an admin by email, ignoring case."""
        stmt = select(admin_users_table).where(
            func.lower(admin_users_table.c.email) == email.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_admin(dict(row)) if row else None

    async def save(self, admin: AdminUser) -> AdminUser:
        """Save an admin (insert or update).

        Raises:
            DuplicateKeyError: If the email belongs to another admin
        """
        data = admin_to_dict(admin)
        existing = await self.find_by_id(admin.id)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        update(admin_users_table)
                        .where(admin_users_table.c.id == admin.id)
                        .values(**data)
                    )
                else:
                    stmt = insert(admin_users_table).values(**data)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise_if_duplicate(
                e, "Admin", {"admin_users_email_key": ("email", admin.email)}
            )
            raise

        await self.session.flush()
        return admin
