"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from invitely.domain.error import DuplicateKeyError, NotFoundError
from invitely.domain.repository import (
    GuestRepository,
    InvitationFilter,
    InvitationRepository,
)
from invitely.domain.service import (
    GuestService,
    InvitationService,
    ResellerService,
    UserService,
)
from invitely.domain.value import (
    InvitationCategory,
    PageRequest,
    ResellerId,
    ResellerType,
    UserId,
)
from tests.factories import wedding_form_data
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAccounts:
    """Tests for creating and finding users."""

    @pytest.mark.asyncio
    async def test_create_and_find_by_email(self, unit_env):
        service = await unit_env.get(UserService)

        user = await service.create_user("sarah@example.com", name="Sarah")

        assert (await service.get_by_email("SARAH@example.com")).id == user.id
        assert (await service.get_by_id(user.id)).name == "Sarah"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, unit_env):
        service = await unit_env.get(UserService)
        await service.create_user("sarah@example.com")

        with pytest.raises(DuplicateKeyError) as exc_info:
            await service.create_user("sarah@example.com")

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_unknown_reseller_is_rejected(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.create_user("sarah@example.com", reseller_id=ResellerId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_or_create_refreshes_profile(self, unit_env):
        service = await unit_env.get(UserService)

        first = await service.get_or_create("sarah@example.com", name="Sarah")
        again = await service.get_or_create(
            "sarah@example.com", name="Sarah Smith", avatar_url=None
        )

        assert again.id == first.id
        assert again.name == "Sarah Smith"
        assert again.avatar_url is None

    @pytest.mark.asyncio
    async def test_list_with_search(self, unit_env):
        service = await unit_env.get(UserService)
        sarah = await service.create_user("sarah@example.com", name="Sarah")
        await service.create_user("john@example.com", name="John")

        items, total = await service.list_users(PageRequest(), search="SAR")

        assert total == 1
        assert [u.id for u in items] == [sarah.id]


class TestUpdateAndDelete:
    """Tests for changing and removing users."""

    @pytest.mark.asyncio
    async def test_update_with_missing_reseller(self, unit_env):
        service = await unit_env.get(UserService)
        user = await service.create_user("sarah@example.com")

        with pytest.raises(NotFoundError):
            await service.update_user(user.id, {"reseller_id": ResellerId(uuid4())})

    @pytest.mark.asyncio
    async def test_update_assigns_reseller(self, unit_env):
        service = await unit_env.get(UserService)
        resellers = await unit_env.get(ResellerService)
        owner = await service.create_user("owner@example.com")
        reseller = await resellers.create_reseller(owner.id)
        user = await service.create_user("sarah@example.com")

        updated = await service.update_user(
            user.id, {"name": "Sarah", "reseller_id": reseller.id}
        )

        assert updated.name == "Sarah"
        assert updated.reseller_id == reseller.id

    @pytest.mark.asyncio
    async def test_delete_removes_invitations_and_guests(self, unit_env):
        service = await unit_env.get(UserService)
        invitations = await unit_env.get(InvitationService)
        guests = await unit_env.get(GuestService)
        user = await service.create_user("sarah@example.com")
        invitation = await invitations.create(
            user_id=user.id,
            title="Our Wedding",
            category=InvitationCategory.WEDDING,
            form_data=wedding_form_data(),
        )
        await guests.add_guest(invitation.id, name="Aunt May")

        await service.delete_user(user.id)

        invitation_repo = await unit_env.get(InvitationRepository)
        guest_repo = await unit_env.get(GuestRepository)
        assert await invitation_repo.count(InvitationFilter(user_id=user.id)) == 0
        assert await guest_repo.count_by_invitation(invitation.id) == 0
        with pytest.raises(NotFoundError):
            await service.get_by_id(user.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_user(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.delete_user(UserId(uuid4()))


@pytest.mark.asyncio
async def test_stats(unit_env):
    service = await unit_env.get(UserService)
    invitations = await unit_env.get(InvitationService)
    resellers = await unit_env.get(ResellerService)
    sarah = await service.create_user("sarah@example.com")
    await service.create_user("john@example.com")
    await resellers.create_reseller(sarah.id, type=ResellerType.PREMIUM)
    await invitations.create(
        user_id=sarah.id,
        title="Our Wedding",
        category=InvitationCategory.WEDDING,
        form_data=wedding_form_data(),
    )

    stats = await service.stats()

    assert stats.total_users == 2
    assert stats.recent_signups == 2
    assert stats.total_invitations == 1
    assert stats.total_resellers == 1
    assert stats.reseller_type_distribution[ResellerType.PREMIUM] == 1
    assert stats.reseller_type_distribution[ResellerType.FREE] == 0
    assert stats.category_distribution[InvitationCategory.WEDDING] == 1
    assert stats.category_distribution[InvitationCategory.BUSINESS] == 0
