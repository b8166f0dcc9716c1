"""Unit tests for SlugService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from invitely.config import InvitationSettings
from invitely.domain.error import SlugGenerationError
from invitely.domain.model import Invitation
from invitely.domain.service import SlugService
from invitely.domain.value import InvitationCategory, InvitationId, Slug, UserId
from invitely.persistence.repository.inmemory import InMemoryInvitationRepository


async def _store_slug(repo: InMemoryInvitationRepository, slug: str) -> None:
    await repo.save(
        Invitation(
            id=InvitationId(uuid4()),
            user_id=UserId(uuid4()),
            title="Existing",
            category=InvitationCategory.PARTY,
            slug=Slug(slug),
        )
    )


class TestSlugify:
    """Tests for SlugService.slugify()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Sarah-John-wedding", "sarah-john-wedding"),
            ("  Zoë & Max!! ", "zo-max"),
            ("a---b", "a-b"),
            ("---", ""),
            ("Tim-birthday-30", "tim-birthday-30"),
        ],
    )
    def test_slugify(self, text, expected):
        assert SlugService.slugify(text) == expected

    def test_truncates_to_100_characters(self):
        slug = SlugService.slugify("a" * 150)

        assert len(slug) == 100


class TestBaseSlug:
    """Tests for SlugService.base_slug()."""

    def test_wedding(self):
        base = SlugService.base_slug(
            InvitationCategory.WEDDING, {"brideName": "Sarah", "groomName": "John"}
        )

        assert base == "sarah-john-wedding"

    def test_placeholders_fill_missing_names(self):
        assert (
            SlugService.base_slug(InvitationCategory.WEDDING, {}) == "bride-groom-wedding"
        )
        assert (
            SlugService.base_slug(InvitationCategory.BIRTHDAY, {"celebrantName": "Tim"})
            == "tim-birthday-party"
        )

    def test_birthday_includes_age(self):
        base = SlugService.base_slug(
            InvitationCategory.BIRTHDAY, {"celebrantName": "Tim", "age": 30}
        )

        assert base == "tim-birthday-30"

    def test_graduation(self):
        base = SlugService.base_slug(
            InvitationCategory.GRADUATION, {"graduateName": "Ada Lovelace"}
        )

        assert base == "ada-lovelace-graduation"

    def test_other_categories_use_generic_base(self):
        assert (
            SlugService.base_slug(InvitationCategory.BUSINESS, {"company": "Acme"})
            == "business-invitation"
        )

    def test_names_without_valid_characters_keep_the_structure(self):
        base = SlugService.base_slug(
            InvitationCategory.WEDDING, {"brideName": "!!!", "groomName": "John"}
        )

        assert base == "john-wedding"


class TestGenerateUniqueSlug:
    """Tests for collision handling."""

    @pytest.mark.asyncio
    async def test_free_base_slug_is_used(self):
        repo = InMemoryInvitationRepository()
        service = SlugService(repo, InvitationSettings())

        slug = await service.generate_unique_slug(
            InvitationCategory.WEDDING, {"brideName": "Sarah", "groomName": "John"}
        )

        assert slug == Slug("sarah-john-wedding")

    @pytest.mark.asyncio
    async def test_collisions_append_first_free_counter(self):
        repo = InMemoryInvitationRepository()
        await _store_slug(repo, "sarah-john-wedding")
        await _store_slug(repo, "sarah-john-wedding-1")
        service = SlugService(repo, InvitationSettings())

        slug = await service.generate_unique_slug(
            InvitationCategory.WEDDING, {"brideName": "Sarah", "groomName": "John"}
        )

        assert slug == Slug("sarah-john-wedding-2")

    @pytest.mark.asyncio
    async def test_attempts_are_bounded(self):
        repo = InMemoryInvitationRepository()
        for slug in ("party-invitation", "party-invitation-1", "party-invitation-2"):
            await _store_slug(repo, slug)
        service = SlugService(repo, InvitationSettings(max_slug_attempts=2))

        with pytest.raises(SlugGenerationError):
            await service.generate_unique_slug(InvitationCategory.PARTY, {})


class TestAssignSlug:
    """Tests for the fallback path."""

    @pytest.mark.asyncio
    async def test_store_failure_falls_back_to_random_slug(self):
        repo = InMemoryInvitationRepository()
        repo.slug_exists = AsyncMock(side_effect=RuntimeError("database down"))
        service = SlugService(repo, InvitationSettings())

        slug = await service.assign_slug(InvitationCategory.BIRTHDAY, {})

        assert str(slug).startswith("birthday-invitation-")
        assert slug != Slug("birthday-invitation")

    def test_fallback_slugs_differ(self):
        first = SlugService.fallback_slug(InvitationCategory.PARTY)
        second = SlugService.fallback_slug(InvitationCategory.PARTY)

        assert first != second
