"""Unit tests for ResellerService."""

import re
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from invitely.domain.error import (
    ConflictError,
    NotFoundError,
    ReferralCodeGenerationError,
)
from invitely.domain.repository import UserRepository
from invitely.domain.service import ResellerService, random_referral_code
from invitely.domain.value import PageRequest, ResellerType, UserId
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _user(unit_env, email: str = "sarah@example.com"):
    users = await unit_env.get(UserRepository)
    return await users.save(make_user(email=email))


def test_random_referral_code_alphabet():
    for _ in range(50):
        assert re.fullmatch(r"[A-Z0-9]{8}", random_referral_code())
    assert len(random_referral_code(12)) == 12


class TestCreateReseller:
    """Tests for ResellerService.create_reseller()."""

    @pytest.mark.asyncio
    async def test_create_assigns_referral_code(self, unit_env):
        service = await unit_env.get(ResellerService)
        user = await _user(unit_env)

        reseller = await service.create_reseller(
            user.id, type=ResellerType.PREMIUM, landing_slug="sarah-events"
        )

        assert reseller.user_id == user.id
        assert reseller.type == ResellerType.PREMIUM
        assert re.fullmatch(r"[A-Z0-9]{8}", str(reseller.referral_code))

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        service = await unit_env.get(ResellerService)

        with pytest.raises(NotFoundError):
            await service.create_reseller(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_user_can_only_be_reseller_once(self, unit_env):
        service = await unit_env.get(ResellerService)
        user = await _user(unit_env)
        await service.create_reseller(user.id)

        with pytest.raises(ConflictError):
            await service.create_reseller(user.id)


class TestReferralCodes:
    """Tests for referral code generation and lookup."""

    @pytest.mark.asyncio
    async def test_collision_draws_again(self, unit_env):
        service = await unit_env.get(ResellerService)
        service.reseller_repository.referral_code_exists = AsyncMock(
            side_effect=[True, True, False]
        )

        code = await service.generate_referral_code()

        assert re.fullmatch(r"[A-Z0-9]{8}", str(code))
        assert service.reseller_repository.referral_code_exists.await_count == 3

    @pytest.mark.asyncio
    async def test_exhausted_attempts(self, unit_env):
        service = await unit_env.get(ResellerService)
        service.reseller_repository.referral_code_exists = AsyncMock(
            return_value=True
        )

        with pytest.raises(ReferralCodeGenerationError) as exc_info:
            await service.generate_referral_code()

        assert str(exc_info.value) == "Failed to generate unique referral code"
        assert service.reseller_repository.referral_code_exists.await_count == 10

    @pytest.mark.asyncio
    async def test_lookup_ignores_case(self, unit_env):
        service = await unit_env.get(ResellerService)
        user = await _user(unit_env)
        reseller = await service.create_reseller(user.id)

        found = await service.get_by_referral_code(str(reseller.referral_code).lower())

        assert found.id == reseller.id

    @pytest.mark.asyncio
    async def test_lookup_of_malformed_code(self, unit_env):
        service = await unit_env.get(ResellerService)

        with pytest.raises(NotFoundError):
            await service.get_by_referral_code("no!")


class TestManagement:
    """Tests for listing, updating and deleting resellers."""

    @pytest.mark.asyncio
    async def test_list_filters_by_type(self, unit_env):
        service = await unit_env.get(ResellerService)
        free = await service.create_reseller((await _user(unit_env, "a@x.com")).id)
        await service.create_reseller(
            (await _user(unit_env, "b@x.com")).id, type=ResellerType.PREMIUM
        )

        items, total = await service.list_resellers(
            PageRequest(), type=ResellerType.FREE
        )

        assert total == 1
        assert [r.id for r in items] == [free.id]

    @pytest.mark.asyncio
    async def test_type_distribution_includes_zeros(self, unit_env):
        service = await unit_env.get(ResellerService)
        await service.create_reseller((await _user(unit_env)).id)

        assert await service.type_distribution() == {
            ResellerType.FREE: 1,
            ResellerType.PREMIUM: 0,
        }

    @pytest.mark.asyncio
    async def test_update_keeps_referral_code(self, unit_env):
        service = await unit_env.get(ResellerService)
        reseller = await service.create_reseller((await _user(unit_env)).id)

        updated = await service.update_reseller(
            reseller.id, {"type": ResellerType.PREMIUM, "custom_domain": "x.com"}
        )

        assert updated.type == ResellerType.PREMIUM
        assert updated.custom_domain == "x.com"
        assert updated.referral_code == reseller.referral_code

    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        service = await unit_env.get(ResellerService)
        reseller = await service.create_reseller((await _user(unit_env)).id)

        await service.delete_reseller(reseller.id)

        with pytest.raises(NotFoundError):
            await service.get_reseller(reseller.id)
        with pytest.raises(NotFoundError):
            await service.delete_reseller(reseller.id)
