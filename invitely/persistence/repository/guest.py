"""PostgreSQL implementation of Guest repository."""

from typing import List, Optional

from sqlalchemy import asc, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import InvitationGuest
from invitely.domain.repository import GuestRepository
from invitely.domain.value import GuestId, GuestResponse, InvitationId
from invitely.persistence.mappers import guest_to_dict, row_to_guest
from invitely.persistence.tables import invitation_guests_table


class PostgresGuestRepository(GuestRepository):
    """PostgreSQL implementation of GuestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, guest_id: GuestId) -> Optional[InvitationGuest]:
        """Find a guest by ID."""
        stmt = select(invitation_guests_table).where(
            invitation_guests_table.c.id == guest_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_guest(dict(row)) if row else None

    async def find_by_invitation(
        self, invitation_id: InvitationId, limit: int = 50, offset: int = 0
    ) -> List[InvitationGuest]:
        """Find guests of an invitation in the order they were added."""
        stmt = (
            select(invitation_guests_table)
            .where(invitation_guests_table.c.invitation_id == invitation_id)
            .order_by(asc(invitation_guests_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_guest(dict(row)) for row in result.mappings()]

    async def count_by_invitation(self, invitation_id: InvitationId) -> int:
        """Count guests of an invitation."""
        stmt = select(func.count()).where(
            invitation_guests_table.c.invitation_id == invitation_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_response(
        self, invitation_id: InvitationId
    ) -> dict[GuestResponse, int]:
        """Count guests of an invitation per RSVP response."""
        stmt = (
            select(invitation_guests_table.c.response, func.count())
            .where(invitation_guests_table.c.invitation_id == invitation_id)
            .group_by(invitation_guests_table.c.response)
        )
        result = await self.session.execute(stmt)
        return {GuestResponse(r): n for r, n in result.all()}

    async def save(self, guest: InvitationGuest) -> InvitationGuest:
        """Save a guest (insert or update)."""
        data = guest_to_dict(guest)
        existing = await self.find_by_id(guest.id)

        if existing:
            stmt = (
                update(invitation_guests_table)
                .where(invitation_guests_table.c.id == guest.id)
                .values(**data)
            )
        else:
            stmt = insert(invitation_guests_table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return guest

    async def delete(self, guest_id: GuestId) -> bool:
        """Delete a guest."""
        stmt = delete(invitation_guests_table).where(
            invitation_guests_table.c.id == guest_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_invitation(self, invitation_id: InvitationId) -> int:
        """Delete all guests of an invitation."""
        stmt = delete(invitation_guests_table).where(
            invitation_guests_table.c.invitation_id == invitation_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
