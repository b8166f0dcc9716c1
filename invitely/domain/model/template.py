"""Template entity.

Templates are reusable presentation definitions for one invitation category.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from invitely.domain.model.common import DomainModel, utcnow
from invitely.domain.value import InvitationCategory, TemplateId, TemplateStyle


class Template(DomainModel):
    """Template entity.

    Templates are never hard-deleted while an invitation references them;
    they are switched off with ``is_active`` instead.
    """

    id: TemplateId
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    preview_url: Optional[str] = None
    category: InvitationCategory
    style: TemplateStyle
    template_data: dict[str, Any] = Field(default_factory=dict)
    default_config: dict[str, Any] = Field(default_factory=dict)
    supported_fields: list[str] = Field(default_factory=list)
    is_premium: bool = False
    price: float = Field(default=0.0, ge=0)
    popularity_score: int = Field(default=0, ge=0)
    usage_count: int = Field(default=0, ge=0)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_active: bool = True
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def matches_search(self, query: str) -> bool:
        """Case-insensitive match against name, description and tags."""
        needle = query.lower()
        haystacks = [self.name, self.description or "", *self.tags]
        return any(needle in h.lower() for h in haystacks)
