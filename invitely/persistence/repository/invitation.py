"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import Invitation
from invitely.domain.repository.invitation import InvitationFilter, InvitationRepository
from invitely.domain.value import (
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    Slug,
    TemplateId,
    UserId,
)
from invitely.persistence.errors import raise_if_duplicate
from invitely.persistence.mappers import invitation_to_dict, row_to_invitation
from invitely.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filters(stmt, filters: InvitationFilter):
        t = invitations_table
        if filters.user_id is not None:
            stmt = stmt.where(t.c.user_id == filters.user_id)
        if filters.template_id is not None:
            stmt = stmt.where(t.c.template_id == filters.template_id)
        if filters.category is not None:
            stmt = stmt.where(t.c.category == filters.category.value)
        if filters.status is not None:
            stmt = stmt.where(t.c.status == filters.status.value)
        if filters.is_published is not None:
            stmt = stmt.where(t.c.is_published == filters.is_published)
        if filters.search:
            pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(t.c.title.ilike(pattern), t.c.venue_name.ilike(pattern))
            )
        return stmt

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_slug(
        self, slug: Slug, published_only: bool = True
    ) -> Optional[Invitation]:
        """Find an invitation by slug."""
        with logfire.span("invitation_repository.find_by_slug", slug=str(slug)):
            stmt = select(invitations_table).where(
                invitations_table.c.slug == slug.root
            )
            if published_only:
                stmt = stmt.where(invitations_table.c.is_published.is_(True))

            result = await self.session.execute(stmt)
            row = result.mappings().first()
            if not row:
                logfire.info("Invitation not found by slug", slug=str(slug))
                return None
            return row_to_invitation(dict(row))

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken by any invitation."""
        stmt = select(func.count()).where(invitations_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def find_all(
        self,
        filters: InvitationFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Invitation]:
        """Find invitations matching filters, most recently updated first."""
        with logfire.span(
            "invitation_repository.find_all",
            user_id=str(filters.user_id) if filters.user_id else None,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(select(invitations_table), filters)
            stmt = (
                stmt.order_by(
                    desc(invitations_table.c.updated_at),
                    desc(invitations_table.c.id),
                )
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            invitations = [row_to_invitation(dict(row)) for row in result.mappings()]
            logfire.info("Found invitations", count=len(invitations))
            return invitations

    async def count(self, filters: InvitationFilter) -> int:
        """Count invitations matching filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(invitations_table), filters
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_status(
        self, user_id: Optional[UserId] = None
    ) -> dict[InvitationStatus, int]:
        """Count invitations per status."""
        stmt = select(invitations_table.c.status, func.count()).group_by(
            invitations_table.c.status
        )
        if user_id is not None:
            stmt = stmt.where(invitations_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        return {InvitationStatus(status): count for status, count in result.all()}

    async def count_by_category(self) -> dict[InvitationCategory, int]:
        """Count all invitations per category."""
        stmt = select(invitations_table.c.category, func.count()).group_by(
            invitations_table.c.category
        )
        result = await self.session.execute(stmt)
        return {
            InvitationCategory(category): count for category, count in result.all()
        }

    async def count_created_since(self, since: datetime) -> int:
        """Count invitations created at or after ``since``."""
        stmt = select(func.count()).where(invitations_table.c.created_at >= since)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def sum_engagement(self, user_id: UserId) -> tuple[int, int]:
        """Sum view and RSVP counters over one owner's invitations."""
        stmt = select(
            func.coalesce(func.sum(invitations_table.c.view_count), 0),
            func.coalesce(func.sum(invitations_table.c.rsvp_count), 0),
        ).where(invitations_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        views, rsvps = result.one()
        return int(views), int(rsvps)

    async def count_by_template(self, template_id: TemplateId) -> int:
        """Count invitations referencing a template."""
        stmt = select(func.count()).where(
            invitations_table.c.template_id == template_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (insert or update).

        The write runs inside a savepoint so a slug collision leaves the
        surrounding transaction usable for a retry.

        Raises:
            DuplicateKeyError: If the slug is already used by another invitation
        """
        with logfire.span(
            "invitation_repository.save",
            invitation_id=str(invitation.id),
            slug=str(invitation.slug),
        ):
            data = invitation_to_dict(invitation)
            existing = await self.session.execute(
                select(invitations_table.c.id).where(
                    invitations_table.c.id == invitation.id
                )
            )

            try:
                async with self.session.begin_nested():
                    if existing.first():
                        stmt = (
                            update(invitations_table)
                            .where(invitations_table.c.id == invitation.id)
                            .values(**data)
                        )
                    else:
                        logfire.info("Inserting invitation", slug=str(invitation.slug))
                        stmt = insert(invitations_table).values(**data)
                    await self.session.execute(stmt)
            except IntegrityError as e:
                raise_if_duplicate(
                    e,
                    "Invitation",
                    {"invitations_slug_key": ("slug", invitation.slug.root)},
                )
                raise

            await self.session.flush()
            return invitation

    async def delete(self, invitation_id: InvitationId) -> bool:
        """Delete an invitation; guests and events go with it."""
        stmt = delete(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every invitation owned by a user."""
        stmt = delete(invitations_table).where(invitations_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def increment_view_count(self, invitation_id: InvitationId) -> None:
        """Atomically add one to view_count.

        Runs in a savepoint so a failure does not poison the transaction of
        the page view that triggered it.
        """
        async with self.session.begin_nested():
            await self.session.execute(
                update(invitations_table)
                .where(invitations_table.c.id == invitation_id)
                .values(view_count=invitations_table.c.view_count + 1)
            )

    async def increment_rsvp_counts(
        self, invitation_id: InvitationId, confirmed: bool
    ) -> None:
        """Atomically add one to rsvp_count, and to confirmed_count if confirmed."""
        values = {"rsvp_count": invitations_table.c.rsvp_count + 1}
        if confirmed:
            values["confirmed_count"] = invitations_table.c.confirmed_count + 1
        await self.session.execute(
            update(invitations_table)
            .where(invitations_table.c.id == invitation_id)
            .values(**values)
        )
        await self.session.flush()
