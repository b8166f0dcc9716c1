"""Template domain service."""

from typing import Any, Optional
from uuid import uuid4

import logfire

from invitely.domain.error import NotFoundError, ResourceInUseError
from invitely.domain.model import Template
from invitely.domain.model.common import utcnow
from invitely.domain.repository import (
    InvitationRepository,
    TemplateFilter,
    TemplateRepository,
    TemplateSortOrder,
)
from invitely.domain.value import (
    InvitationCategory,
    PageRequest,
    TemplateId,
    TemplateStyle,
    ValueObject,
)

from .base import Service


class CategoryCount(ValueObject):
    """Active templates in one category, with its most popular template."""

    category: InvitationCategory
    count: int
    popular_template: Optional[Template] = None


class StyleCount(ValueObject):
    """Active templates in one style."""

    style: TemplateStyle
    count: int


class TemplateService(Service):
    """Domain service for browsing and managing templates."""

    def __init__(
        self,
        template_repository: TemplateRepository,
        invitation_repository: InvitationRepository,
    ) -> None:
        """Initialize template service.

        Args:
            template_repository: Template repository
            invitation_repository: Invitation repository (reference checks)
        """
        self.template_repository = template_repository
        self.invitation_repository = invitation_repository

    async def get_template(
        self, template_id: TemplateId, include_inactive: bool = False
    ) -> Template:
        """Get a template by ID.

        Raises:
            NotFoundError: If missing (or inactive, unless include_inactive)
        """
        with logfire.span(
            "template_service.get_template", template_id=str(template_id)
        ):
            template = await self.template_repository.find_by_id(
                template_id, include_inactive=include_inactive
            )
            if template is None:
                logfire.warn("Template not found", template_id=str(template_id))
                raise NotFoundError("Template", str(template_id))
            return template

    async def list_templates(
        self,
        filters: TemplateFilter,
        page: PageRequest,
        sort: TemplateSortOrder = TemplateSortOrder.POPULARITY,
    ) -> tuple[list[Template], int]:
        """List templates.

        Returns:
            Tuple of (page of templates, total matching)
        """
        with logfire.span(
            "template_service.list_templates", sort=sort.value, page=page.page
        ):
            items = await self.template_repository.find_all(
                filters, sort=sort, limit=page.limit, offset=page.offset
            )
            total = await self.template_repository.count(filters)
            return items, total

    async def popular(self, limit: int = 6) -> list[Template]:
        """Most popular active templates."""
        return await self.template_repository.find_all(
            TemplateFilter(), sort=TemplateSortOrder.POPULARITY, limit=limit
        )

    async def by_category(
        self, category: InvitationCategory, limit: int = 20
    ) -> list[Template]:
        """Active templates of one category, most popular first."""
        return await self.template_repository.find_all(
            TemplateFilter(category=category), limit=limit
        )

    async def premium(self, limit: int = 20) -> list[Template]:
        """Active premium templates, most popular first."""
        return await self.template_repository.find_all(
            TemplateFilter(is_premium=True), limit=limit
        )

    async def search(
        self,
        query: str,
        category: Optional[InvitationCategory] = None,
        style: Optional[TemplateStyle] = None,
        limit: int = 10,
    ) -> list[Template]:
        """Free-text search over name, description and tags."""
        with logfire.span("template_service.search", query=query):
            results = await self.template_repository.find_all(
                TemplateFilter(search=query, category=category, style=style),
                limit=limit,
            )
            logfire.info("Template search", query=query, results=len(results))
            return results

    async def related(self, template_id: TemplateId, limit: int = 4) -> list[Template]:
        """Other templates of the same category.

        Raises:
            NotFoundError: If the template does not exist
        """
        template = await self.get_template(template_id)
        return await self.template_repository.find_related(template, limit=limit)

    async def categories_with_counts(self) -> list[CategoryCount]:
        """Active template count and most popular template per category."""
        with logfire.span("template_service.categories_with_counts"):
            counts = await self.template_repository.count_by_category()
            result = []
            for category in InvitationCategory:
                count = counts.get(category, 0)
                popular = None
                if count:
                    top = await self.by_category(category, limit=1)
                    popular = top[0] if top else None
                result.append(
                    CategoryCount(
                        category=category, count=count, popular_template=popular
                    )
                )
            return result

    async def styles_with_counts(self) -> list[StyleCount]:
        """Active template count per style."""
        counts = await self.template_repository.count_by_style()
        return [
            StyleCount(style=style, count=counts.get(style, 0))
            for style in TemplateStyle
        ]

    async def increment_usage(self, template_id: TemplateId) -> None:
        """Count a use of a template.

        Failures are logged and swallowed.
        """
        try:
            await self.template_repository.increment_usage(template_id)
            logfire.info("Template usage incremented", template_id=str(template_id))
        except Exception as e:
            logfire.warn(
                "Template usage increment failed",
                template_id=str(template_id),
                error=str(e),
            )

    async def create_template(self, **fields: Any) -> Template:
        """Create a template from its field values."""
        with logfire.span("template_service.create_template", name=fields.get("name")):
            now = utcnow()
            template = Template(
                id=TemplateId(uuid4()), created_at=now, updated_at=now, **fields
            )
            saved = await self.template_repository.save(template)
            logfire.info("Template created", template_id=str(saved.id))
            return saved

    async def update_template(
        self, template_id: TemplateId, changes: dict[str, Any]
    ) -> Template:
        """Apply field changes to a template (active or not).

        Raises:
            NotFoundError: If the template does not exist
        """
        template = await self.get_template(template_id, include_inactive=True)
        with logfire.span(
            "template_service.update_template",
            template_id=str(template_id),
            fields=sorted(changes),
        ):
            updated = Template.model_validate(
                {**template.model_dump(), **changes, "updated_at": utcnow()}
            )
            return await self.template_repository.save(updated)

    async def delete_template(self, template_id: TemplateId) -> None:
        """Delete a template nobody references.

        Raises:
            NotFoundError: If the template does not exist
            ResourceInUseError: If invitations still reference it
        """
        await self.get_template(template_id, include_inactive=True)
        with logfire.span(
            "template_service.delete_template", template_id=str(template_id)
        ):
            references = await self.invitation_repository.count_by_template(
                template_id
            )
            if references:
                logfire.warn(
                    "Template still referenced",
                    template_id=str(template_id),
                    references=references,
                )
                raise ResourceInUseError("Template", str(template_id), references)
            await self.template_repository.delete(template_id)
            logfire.info("Template deleted", template_id=str(template_id))
