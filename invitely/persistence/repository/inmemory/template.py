"""In-memory template repository for testing."""

from typing import Optional

from invitely.domain.model.template import Template
from invitely.domain.repository.template import (
    TemplateFilter,
    TemplateRepository,
    TemplateSortOrder,
)
from invitely.domain.value import InvitationCategory, TemplateId, TemplateStyle


class InMemoryTemplateRepository(TemplateRepository):
    """In-memory implementation of TemplateRepository for testing."""

    def __init__(self) -> None:
        self._templates: dict[TemplateId, Template] = {}

    def _matching(self, filters: TemplateFilter) -> list[Template]:
        templates = list(self._templates.values())
        if not filters.include_inactive:
            templates = [t for t in templates if t.is_active]
        if filters.category is not None:
            templates = [t for t in templates if t.category == filters.category]
        if filters.style is not None:
            templates = [t for t in templates if t.style == filters.style]
        if filters.is_premium is not None:
            templates = [t for t in templates if t.is_premium == filters.is_premium]
        if filters.search:
            templates = [t for t in templates if t.matches_search(filters.search)]
        return templates

    async def find_by_id(
        self, template_id: TemplateId, include_inactive: bool = False
    ) -> Optional[Template]:
        """Find a template by ID."""
        template = self._templates.get(template_id)
        if template and (template.is_active or include_inactive):
            return template
        return None

    async def find_all(
        self,
        filters: TemplateFilter,
        sort: TemplateSortOrder = TemplateSortOrder.POPULARITY,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Template]:
        """Find templates with filtering, sorting and pagination."""
        templates = self._matching(filters)
        if sort == TemplateSortOrder.NEWEST:
            templates.sort(key=lambda t: t.created_at, reverse=True)
        elif sort == TemplateSortOrder.NAME:
            templates.sort(key=lambda t: t.name)
        else:
            templates.sort(
                key=lambda t: (t.popularity_score, t.created_at), reverse=True
            )
        return templates[offset : offset + limit]

    async def count(self, filters: TemplateFilter) -> int:
        """Count templates matching filters."""
        return len(self._matching(filters))

    async def find_related(self, template: Template, limit: int = 4) -> list[Template]:
        """Find other active templates of the same category."""
        related = [
            t
            for t in self._templates.values()
            if t.category == template.category and t.id != template.id and t.is_active
        ]
        related.sort(key=lambda t: t.popularity_score, reverse=True)
        return related[:limit]

    async def count_by_category(self) -> dict[InvitationCategory, int]:
        """Count active templates per category."""
        counts: dict[InvitationCategory, int] = {}
        for t in self._templates.values():
            if t.is_active:
                counts[t.category] = counts.get(t.category, 0) + 1
        return counts

    async def count_by_style(self) -> dict[TemplateStyle, int]:
        """Count active templates per style."""
        counts: dict[TemplateStyle, int] = {}
        for t in self._templates.values():
            if t.is_active:
                counts[t.style] = counts.get(t.style, 0) + 1
        return counts

    async def save(self, template: Template) -> Template:
        """Save or update a template, keeping the stored usage_count."""
        existing = self._templates.get(template.id)
        if existing:
            template = template.model_copy(update={"usage_count": existing.usage_count})
        self._templates[template.id] = template
        return template

    async def delete(self, template_id: TemplateId) -> bool:
        """Delete a template."""
        return self._templates.pop(template_id, None) is not None

    async def increment_usage(self, template_id: TemplateId) -> None:
        """Add one to usage_count and popularity_score."""
        template = self._templates.get(template_id)
        if template:
            self._templates[template_id] = template.model_copy(
                update={
                    "usage_count": template.usage_count + 1,
                    "popularity_score": template.popularity_score + 1,
                }
            )
