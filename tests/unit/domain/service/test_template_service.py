"""Unit tests for TemplateService."""

from uuid import uuid4

import pytest

from invitely.domain.error import NotFoundError, ResourceInUseError
from invitely.domain.repository import TemplateFilter, TemplateSortOrder
from invitely.domain.service import InvitationService, TemplateService
from invitely.domain.value import (
    InvitationCategory,
    PageRequest,
    TemplateId,
    TemplateStyle,
    UserId,
)
from tests.factories import wedding_form_data
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(service: TemplateService):
    """Three wedding templates and one birthday template, one inactive."""
    rose = await service.create_template(
        name="Rose Garden",
        category=InvitationCategory.WEDDING,
        style=TemplateStyle.FLORAL,
        popularity_score=50,
        tags=["roses", "spring"],
    )
    gold = await service.create_template(
        name="Gold Leaf",
        description="Gilded elegance",
        category=InvitationCategory.WEDDING,
        style=TemplateStyle.ELEGANT,
        popularity_score=80,
        is_premium=True,
        price=9.99,
    )
    retired = await service.create_template(
        name="Old Lace",
        category=InvitationCategory.WEDDING,
        style=TemplateStyle.VINTAGE,
        popularity_score=99,
        is_active=False,
    )
    balloons = await service.create_template(
        name="Balloons",
        category=InvitationCategory.BIRTHDAY,
        style=TemplateStyle.MODERN,
        popularity_score=10,
    )
    return rose, gold, retired, balloons


class TestBrowsing:
    """Tests for the public browsing queries."""

    @pytest.mark.asyncio
    async def test_list_hides_inactive_and_sorts_by_popularity(self, unit_env):
        service = await unit_env.get(TemplateService)
        rose, gold, _, balloons = await _seed(service)

        items, total = await service.list_templates(TemplateFilter(), PageRequest())

        assert total == 3
        assert [t.id for t in items] == [gold.id, rose.id, balloons.id]

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, unit_env):
        service = await unit_env.get(TemplateService)
        await _seed(service)

        items, _ = await service.list_templates(
            TemplateFilter(), PageRequest(), sort=TemplateSortOrder.NAME
        )

        assert [t.name for t in items] == ["Balloons", "Gold Leaf", "Rose Garden"]

    @pytest.mark.asyncio
    async def test_list_filters_and_paginates(self, unit_env):
        service = await unit_env.get(TemplateService)
        await _seed(service)

        items, total = await service.list_templates(
            TemplateFilter(category=InvitationCategory.WEDDING),
            PageRequest(page=2, limit=1),
        )

        assert total == 2
        assert [t.name for t in items] == ["Rose Garden"]

    @pytest.mark.asyncio
    async def test_inactive_template_is_hidden_from_public_lookup(self, unit_env):
        service = await unit_env.get(TemplateService)
        _, _, retired, _ = await _seed(service)

        with pytest.raises(NotFoundError):
            await service.get_template(retired.id)
        assert (await service.get_template(retired.id, include_inactive=True)).id == (
            retired.id
        )

    @pytest.mark.asyncio
    async def test_popular_premium_and_category(self, unit_env):
        service = await unit_env.get(TemplateService)
        rose, gold, _, balloons = await _seed(service)

        assert [t.id for t in await service.popular(limit=2)] == [gold.id, rose.id]
        assert [t.id for t in await service.premium()] == [gold.id]
        assert [t.id for t in await service.by_category(InvitationCategory.BIRTHDAY)] == [
            balloons.id
        ]

    @pytest.mark.asyncio
    async def test_search_covers_name_description_and_tags(self, unit_env):
        service = await unit_env.get(TemplateService)
        rose, gold, _, _ = await _seed(service)

        assert [t.id for t in await service.search("GILDED")] == [gold.id]
        assert [t.id for t in await service.search("roses")] == [rose.id]
        assert await service.search("balloons", category=InvitationCategory.WEDDING) == []

    @pytest.mark.asyncio
    async def test_related_excludes_itself_and_inactive(self, unit_env):
        service = await unit_env.get(TemplateService)
        rose, gold, _, _ = await _seed(service)

        related = await service.related(rose.id)

        assert [t.id for t in related] == [gold.id]

    @pytest.mark.asyncio
    async def test_related_of_unknown_template(self, unit_env):
        service = await unit_env.get(TemplateService)

        with pytest.raises(NotFoundError):
            await service.related(TemplateId(uuid4()))

    @pytest.mark.asyncio
    async def test_categories_with_counts(self, unit_env):
        service = await unit_env.get(TemplateService)
        _, gold, _, balloons = await _seed(service)

        counts = {c.category: c for c in await service.categories_with_counts()}

        assert set(counts) == set(InvitationCategory)
        assert counts[InvitationCategory.WEDDING].count == 2
        assert counts[InvitationCategory.WEDDING].popular_template.id == gold.id
        assert counts[InvitationCategory.BIRTHDAY].popular_template.id == balloons.id
        assert counts[InvitationCategory.PARTY].count == 0
        assert counts[InvitationCategory.PARTY].popular_template is None

    @pytest.mark.asyncio
    async def test_styles_with_counts(self, unit_env):
        service = await unit_env.get(TemplateService)
        await _seed(service)

        counts = {s.style: s.count for s in await service.styles_with_counts()}

        assert counts[TemplateStyle.FLORAL] == 1
        assert counts[TemplateStyle.VINTAGE] == 0  # inactive
        assert sum(counts.values()) == 3


class TestManagement:
    """Tests for admin template management."""

    @pytest.mark.asyncio
    async def test_increment_usage_bumps_both_counters(self, unit_env):
        service = await unit_env.get(TemplateService)
        rose, _, _, _ = await _seed(service)

        await service.increment_usage(rose.id)
        await service.increment_usage(rose.id)

        template = await service.get_template(rose.id)
        assert template.usage_count == 2
        assert template.popularity_score == 52

    @pytest.mark.asyncio
    async def test_increment_usage_of_unknown_template_is_harmless(self, unit_env):
        service = await unit_env.get(TemplateService)

        await service.increment_usage(TemplateId(uuid4()))

    @pytest.mark.asyncio
    async def test_update_changes_fields_but_not_usage(self, unit_env):
        service = await unit_env.get(TemplateService)
        rose, _, _, _ = await _seed(service)
        await service.increment_usage(rose.id)

        updated = await service.update_template(
            rose.id, {"name": "Rose Garden II", "is_active": False, "usage_count": 0}
        )

        assert updated.name == "Rose Garden II"
        assert not updated.is_active
        assert updated.usage_count == 1

    @pytest.mark.asyncio
    async def test_delete_unreferenced_template(self, unit_env):
        service = await unit_env.get(TemplateService)
        _, _, _, balloons = await _seed(service)

        await service.delete_template(balloons.id)

        with pytest.raises(NotFoundError):
            await service.get_template(balloons.id, include_inactive=True)

    @pytest.mark.asyncio
    async def test_delete_referenced_template_is_rejected(self, unit_env):
        service = await unit_env.get(TemplateService)
        invitations = await unit_env.get(InvitationService)
        rose, _, _, _ = await _seed(service)
        await invitations.create(
            user_id=UserId(uuid4()),
            title="Our Wedding",
            category=InvitationCategory.WEDDING,
            form_data=wedding_form_data(),
            template_id=rose.id,
        )

        with pytest.raises(ResourceInUseError):
            await service.delete_template(rose.id)
        assert (await service.get_template(rose.id)).id == rose.id
