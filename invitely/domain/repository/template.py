"""Template repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from invitely.domain.model import Template
from invitely.domain.value import (
    InvitationCategory,
    TemplateId,
    TemplateStyle,
    ValueObject,
)


class TemplateSortOrder(str, Enum):
    """Sort order for template listings."""

    POPULARITY = "popularity"  # popularity_score DESC
    NEWEST = "newest"  # created_at DESC
    NAME = "name"  # name ASC


class TemplateFilter(ValueObject):
    """Filter predicates for template listings."""

    category: Optional[InvitationCategory] = None
    style: Optional[TemplateStyle] = None
    is_premium: Optional[bool] = None
    search: Optional[str] = None
    include_inactive: bool = False


class TemplateRepository(ABC):
    """Repository for Template entities."""

    @abstractmethod
    async def find_by_id(
        self, template_id: TemplateId, include_inactive: bool = False
    ) -> Optional[Template]:
        """Find a template by ID.

        Args:
            template_id: The template's unique identifier
            include_inactive: Also match templates switched off with is_active

        Returns:
            The template if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: TemplateFilter,
        sort: TemplateSortOrder = TemplateSortOrder.POPULARITY,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Template]:
        """Find templates with filtering, sorting and pagination.

        Args:
            filters: Filter predicates
            sort: Sort order
            limit: Maximum number of templates to return
            offset: Number of templates to skip

        Returns:
            List of templates
        """
        pass

    @abstractmethod
    async def count(self, filters: TemplateFilter) -> int:
        """Count templates matching filters."""
        pass

    @abstractmethod
    async def find_related(
        self, template: Template, limit: int = 4
    ) -> List[Template]:
        """Find other active templates of the same category, most popular first.

        Args:
            template: Template to find relatives of (excluded from the result)
            limit: Maximum number of templates to return

        Returns:
            List of templates
        """
        pass

    @abstractmethod
    async def count_by_category(self) -> dict[InvitationCategory, int]:
        """Count active templates per category."""
        pass

    @abstractmethod
    async def count_by_style(self) -> dict[TemplateStyle, int]:
        """Count active templates per style."""
        pass

    @abstractmethod
    async def save(self, template: Template) -> Template:
        """Save a template (create or update)."""
        pass

    @abstractmethod
    async def delete(self, template_id: TemplateId) -> bool:
        """Delete a template.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def increment_usage(self, template_id: TemplateId) -> None:
        """Atomically add one to usage_count and popularity_score."""
        pass
