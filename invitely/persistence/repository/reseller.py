"""PostgreSQL implementation of Reseller repository."""

from typing import List, Optional

from sqlalchemy import delete, desc, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import Reseller
from invitely.domain.repository import ResellerRepository
from invitely.domain.value import ReferralCode, ResellerId, ResellerType, UserId
from invitely.persistence.errors import raise_if_duplicate
from invitely.persistence.mappers import reseller_to_dict, row_to_reseller
from invitely.persistence.tables import resellers_table


class PostgresResellerRepository(ResellerRepository):
    """PostgreSQL implementation of ResellerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filters(stmt, type: Optional[ResellerType], search: Optional[str]):
        if type is not None:
            stmt = stmt.where(resellers_table.c.type == type.value)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    resellers_table.c.referral_code.ilike(pattern),
                    resellers_table.c.landing_slug.ilike(pattern),
                )
            )
        return stmt

    async def _find_one(self, clause) -> Optional[Reseller]:
        result = await self.session.execute(select(resellers_table).where(clause))
        row = result.mappings().first()
        return row_to_reseller(dict(row)) if row else None

    async def find_by_id(self, reseller_id: ResellerId) -> Optional[Reseller]:
        """Find a reseller by ID."""
        return await self._find_one(resellers_table.c.id == reseller_id)

    async def find_by_user_id(self, user_id: UserId) -> Optional[Reseller]:
        """Find the reseller account of a user."""
        return await self._find_one(resellers_table.c.user_id == user_id)

    async def find_by_referral_code(self, code: ReferralCode) -> Optional[Reseller]:
        """Find a reseller by referral code."""
        return await self._find_one(resellers_table.c.referral_code == code.root)

    async def referral_code_exists(self, code: ReferralCode) -> bool:
        """Check if a referral code is taken."""
        stmt = select(func.count()).where(
            resellers_table.c.referral_code == code.root
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def find_all(
        self,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Reseller]:
        """Find resellers, newest first."""
        stmt = self._apply_filters(select(resellers_table), type, search)
        stmt = (
            stmt.order_by(desc(resellers_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_reseller(dict(row)) for row in result.mappings()]

    async def count(
        self,
        type: Optional[ResellerType] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count resellers matching the filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(resellers_table), type, search
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_type(self) -> dict[ResellerType, int]:
        """Count resellers per type."""
        stmt = select(resellers_table.c.type, func.count()).group_by(
            resellers_table.c.type
        )
        result = await self.session.execute(stmt)
        return {ResellerType(t): n for t, n in result.all()}

    async def save(self, reseller: Reseller) -> Reseller:
        """Save a reseller (insert or update).

        Raises:
            DuplicateKeyError: If the user or referral code is already taken
        """
        data = reseller_to_dict(reseller)
        existing = await self.find_by_id(reseller.id)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        update(resellers_table)
                        .where(resellers_table.c.id == reseller.id)
                        .values(**data)
                    )
                else:
                    stmt = insert(resellers_table).values(**data)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise_if_duplicate(
                e,
                "Reseller",
                {
                    "resellers_referral_code_key": (
                        "referral_code",
                        reseller.referral_code.root,
                    ),
                    "resellers_user_id_key": ("user_id", str(reseller.user_id)),
                },
            )
            raise

        await self.session.flush()
        return reseller

    async def delete(self, reseller_id: ResellerId) -> bool:
        """Delete a reseller; attributed users keep their accounts."""
        stmt = delete(resellers_table).where(resellers_table.c.id == reseller_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
