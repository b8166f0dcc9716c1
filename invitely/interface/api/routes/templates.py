"""Public template browsing routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status

from invitely.config import PaginationSettings
from invitely.domain.model import Template
from invitely.domain.repository import TemplateFilter, TemplateSortOrder
from invitely.domain.service import CategoryCount, StyleCount, TemplateService
from invitely.domain.value import InvitationCategory, TemplateId, TemplateStyle
from invitely.interface.api.envelope import ApiResponse, ok, paginated
from invitely.interface.api.routes.common import page_request, parse_choice

router = APIRouter(prefix="/templates", tags=["templates"], route_class=DishkaRoute)

TEMPLATE_PAGE_SIZE = 20


@router.get("")
async def list_templates(
    template_service: FromDishka[TemplateService],
    pagination: FromDishka[PaginationSettings],
    page: int | None = None,
    limit: int | None = None,
    category: str | None = None,
    style: str | None = None,
    is_premium: bool | None = None,
    search: str | None = None,
    sort: TemplateSortOrder = TemplateSortOrder.POPULARITY,
) -> ApiResponse[list[Template]]:
    """List active templates.

    ``category`` and ``style`` accept ``all`` for no filter.
    """
    page_req = page_request(pagination, page, limit, default_limit=TEMPLATE_PAGE_SIZE)
    filters = TemplateFilter(
        category=parse_choice(InvitationCategory, category, "category"),
        style=parse_choice(TemplateStyle, style, "style"),
        is_premium=is_premium,
        search=search or None,
    )
    templates, total = await template_service.list_templates(filters, page_req, sort)
    return paginated(templates, page_req, total)


@router.get("/popular")
async def popular_templates(
    template_service: FromDishka[TemplateService],
    limit: int = Query(default=6, ge=1, le=50),
) -> ApiResponse[list[Template]]:
    """Most used templates."""
    return ok(await template_service.popular(limit=limit))


@router.get("/premium")
async def premium_templates(
    template_service: FromDishka[TemplateService],
    limit: int = Query(default=20, ge=1, le=100),
) -> ApiResponse[list[Template]]:
    """Premium templates, most popular first."""
    return ok(await template_service.premium(limit=limit))


@router.get("/search")
async def search_templates(
    template_service: FromDishka[TemplateService],
    q: str | None = None,
    category: str | None = None,
    style: str | None = None,
    limit: int = Query(default=10, ge=1, le=50),
) -> ApiResponse[list[Template]]:
    """Search templates by name, description and tags."""
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )
    results = await template_service.search(
        q.strip(),
        category=parse_choice(InvitationCategory, category, "category"),
        style=parse_choice(TemplateStyle, style, "style"),
        limit=limit,
    )
    return ok(results)


@router.get("/categories")
async def template_categories(
    template_service: FromDishka[TemplateService],
) -> ApiResponse[list[CategoryCount]]:
    """Active template counts per category, with each category's top template."""
    return ok(await template_service.categories_with_counts())


@router.get("/styles")
async def template_styles(
    template_service: FromDishka[TemplateService],
) -> ApiResponse[list[StyleCount]]:
    """Active template counts per style."""
    return ok(await template_service.styles_with_counts())


@router.get("/category/{category}")
async def templates_by_category(
    category: InvitationCategory,
    template_service: FromDishka[TemplateService],
    limit: int = Query(default=20, ge=1, le=100),
) -> ApiResponse[list[Template]]:
    """Active templates of one category, most popular first."""
    return ok(await template_service.by_category(category, limit=limit))


@router.get("/{template_id}")
async def get_template(
    template_id: UUID,
    template_service: FromDishka[TemplateService],
) -> ApiResponse[Template]:
    """Get an active template."""
    return ok(await template_service.get_template(TemplateId(template_id)))


@router.get("/{template_id}/related")
async def related_templates(
    template_id: UUID,
    template_service: FromDishka[TemplateService],
    limit: int = Query(default=4, ge=1, le=20),
) -> ApiResponse[list[Template]]:
    """Other active templates of the same category."""
    return ok(await template_service.related(TemplateId(template_id), limit=limit))
