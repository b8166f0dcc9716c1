"""PostgreSQL implementation of Template repository."""

from typing import List, Optional

import logfire
from sqlalchemy import Text, asc, cast, delete, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import Template
from invitely.domain.repository.template import (
    TemplateFilter,
    TemplateRepository,
    TemplateSortOrder,
)
from invitely.domain.value import InvitationCategory, TemplateId, TemplateStyle
from invitely.persistence.mappers import row_to_template, template_to_dict
from invitely.persistence.tables import templates_table


class PostgresTemplateRepository(TemplateRepository):
    """PostgreSQL implementation of TemplateRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filters(stmt, filters: TemplateFilter):
        t = templates_table
        if not filters.include_inactive:
            stmt = stmt.where(t.c.is_active.is_(True))
        if filters.category is not None:
            stmt = stmt.where(t.c.category == filters.category.value)
        if filters.style is not None:
            stmt = stmt.where(t.c.style == filters.style.value)
        if filters.is_premium is not None:
            stmt = stmt.where(t.c.is_premium == filters.is_premium)
        if filters.search:
            pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    t.c.name.ilike(pattern),
                    t.c.description.ilike(pattern),
                    cast(t.c.tags, Text).ilike(pattern),
                )
            )
        return stmt

    async def find_by_id(
        self, template_id: TemplateId, include_inactive: bool = False
    ) -> Optional[Template]:
        """Find a template by ID."""
        stmt = select(templates_table).where(templates_table.c.id == template_id)
        if not include_inactive:
            stmt = stmt.where(templates_table.c.is_active.is_(True))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_template(dict(row)) if row else None

    async def find_all(
        self,
        filters: TemplateFilter,
        sort: TemplateSortOrder = TemplateSortOrder.POPULARITY,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Template]:
        """Find templates with filtering, sorting and pagination."""
        with logfire.span(
            "template_repository.find_all",
            category=filters.category.value if filters.category else None,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(select(templates_table), filters)

            if sort == TemplateSortOrder.NEWEST:
                stmt = stmt.order_by(desc(templates_table.c.created_at))
            elif sort == TemplateSortOrder.NAME:
                stmt = stmt.order_by(asc(templates_table.c.name))
            else:
                stmt = stmt.order_by(
                    desc(templates_table.c.popularity_score),
                    desc(templates_table.c.created_at),
                )

            stmt = stmt.limit(limit).offset(offset)
            result = await self.session.execute(stmt)
            templates = [row_to_template(dict(row)) for row in result.mappings()]
            logfire.info("Found templates", count=len(templates))
            return templates

    async def count(self, filters: TemplateFilter) -> int:
        """Count templates matching filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(templates_table), filters
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_related(self, template: Template, limit: int = 4) -> List[Template]:
        """Find other active templates of the same category."""
        stmt = (
            select(templates_table)
            .where(templates_table.c.category == template.category.value)
            .where(templates_table.c.id != template.id)
            .where(templates_table.c.is_active.is_(True))
            .order_by(desc(templates_table.c.popularity_score))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_template(dict(row)) for row in result.mappings()]

    async def count_by_category(self) -> dict[InvitationCategory, int]:
        """Count active templates per category."""
        stmt = (
            select(templates_table.c.category, func.count())
            .where(templates_table.c.is_active.is_(True))
            .group_by(templates_table.c.category)
        )
        result = await self.session.execute(stmt)
        return {InvitationCategory(c): n for c, n in result.all()}

    async def count_by_style(self) -> dict[TemplateStyle, int]:
        """Count active templates per style."""
        stmt = (
            select(templates_table.c.style, func.count())
            .where(templates_table.c.is_active.is_(True))
            .group_by(templates_table.c.style)
        )
        result = await self.session.execute(stmt)
        return {TemplateStyle(s): n for s, n in result.all()}

    async def save(self, template: Template) -> Template:
        """Save a template (insert or update).

        usage_count is only written on insert; afterwards it changes through
        increment_usage alone.
        """
        with logfire.span("template_repository.save", template_id=str(template.id)):
            data = template_to_dict(template)
            existing = await self.find_by_id(template.id, include_inactive=True)

            if existing:
                data.pop("usage_count")
                stmt = (
                    update(templates_table)
                    .where(templates_table.c.id == template.id)
                    .values(**data)
                )
            else:
                stmt = insert(templates_table).values(**data)

            await self.session.execute(stmt)
            await self.session.flush()
            return template

    async def delete(self, template_id: TemplateId) -> bool:
        """Delete a template."""
        stmt = delete(templates_table).where(templates_table.c.id == template_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def increment_usage(self, template_id: TemplateId) -> None:
        """Atomically add one to usage_count and popularity_score."""
        stmt = (
            update(templates_table)
            .where(templates_table.c.id == template_id)
            .values(
                usage_count=templates_table.c.usage_count + 1,
                popularity_score=templates_table.c.popularity_score + 1,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
