"""Admin template management routes."""

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from invitely.config import PaginationSettings
from invitely.domain.model import AdminUser, Template
from invitely.domain.repository import TemplateFilter, TemplateSortOrder
from invitely.domain.service import TemplateService
from invitely.domain.value import InvitationCategory, TemplateId, TemplateStyle
from invitely.interface.api.envelope import ApiResponse, ok, paginated
from invitely.interface.api.routes.common import (
    MessageResponse,
    page_request,
    parse_choice,
)
from invitely.interface.api.security import current_admin

router = APIRouter(
    prefix="/admin/templates", tags=["admin-templates"], route_class=DishkaRoute
)


class CreateTemplateAPIRequest(BaseModel):
    """API request for creating a template."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    thumbnail_url: str | None = None
    preview_url: str | None = None
    category: InvitationCategory
    style: TemplateStyle
    template_data: dict[str, Any] = Field(default_factory=dict)
    default_config: dict[str, Any] = Field(default_factory=dict)
    supported_fields: list[str] = Field(default_factory=list)
    is_premium: bool = False
    price: float = Field(default=0.0, ge=0)
    popularity_score: int = Field(default=0, ge=0)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_active: bool = True


class UpdateTemplateAPIRequest(BaseModel):
    """API request for editing a template; omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    thumbnail_url: str | None = None
    preview_url: str | None = None
    category: InvitationCategory | None = None
    style: TemplateStyle | None = None
    template_data: dict[str, Any] | None = None
    default_config: dict[str, Any] | None = None
    supported_fields: list[str] | None = None
    is_premium: bool | None = None
    price: float | None = Field(default=None, ge=0)
    popularity_score: int | None = Field(default=None, ge=0)
    features: list[str] | None = None
    tags: list[str] | None = None
    is_active: bool | None = None


@router.get("")
async def list_templates(
    template_service: FromDishka[TemplateService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    category: str | None = None,
    style: str | None = None,
    search: str | None = None,
    include_inactive: bool = True,
    sort: TemplateSortOrder = TemplateSortOrder.NEWEST,
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[list[Template]]:
    """List templates, including switched-off ones by default."""
    page_req = page_request(pagination, page, limit)
    filters = TemplateFilter(
        category=parse_choice(InvitationCategory, category, "category"),
        style=parse_choice(TemplateStyle, style, "style"),
        search=search or None,
        include_inactive=include_inactive,
    )
    templates, total = await template_service.list_templates(filters, page_req, sort)
    return paginated(templates, page_req, total)


@router.get("/{template_id}")
async def get_template(
    template_id: UUID,
    template_service: FromDishka[TemplateService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Template]:
    """Get a template, active or not."""
    template = await template_service.get_template(
        TemplateId(template_id), include_inactive=True
    )
    return ok(template)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_template(
    request: CreateTemplateAPIRequest,
    template_service: FromDishka[TemplateService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Template]:
    """Create a template."""
    template = await template_service.create_template(
        **request.model_dump(), created_by=admin.email
    )
    return ok(template)


@router.put("/{template_id}")
async def update_template(
    template_id: UUID,
    request: UpdateTemplateAPIRequest,
    template_service: FromDishka[TemplateService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[Template]:
    """Edit a template. Set ``is_active`` to false to retire it."""
    template = await template_service.update_template(
        TemplateId(template_id), request.model_dump(exclude_unset=True)
    )
    return ok(template)


@router.delete("/{template_id}")
async def delete_template(
    template_id: UUID,
    template_service: FromDishka[TemplateService],
    admin: AdminUser = Depends(current_admin),
) -> ApiResponse[MessageResponse]:
    """Delete a template that no invitation uses."""
    await template_service.delete_template(TemplateId(template_id))
    return ok(MessageResponse(message="Template deleted successfully"))
