"""Unit tests for AdminAuthService."""

import pytest

from invitely.domain.error import DuplicateKeyError, InvalidCredentialsError
from invitely.domain.repository import AdminRepository
from invitely.domain.service import AdminAuthService
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

EMAIL = "admin@example.com"
PASSWORD = "correct horse battery"


async def _admin(unit_env):
    service = await unit_env.get(AdminAuthService)
    return await service.create_admin(EMAIL, PASSWORD, "Ada Admin")


class TestCreateAdmin:
    """Tests for AdminAuthService.create_admin()."""

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, unit_env):
        admin = await _admin(unit_env)

        assert admin.password_hash != PASSWORD
        assert admin.password_hash.startswith("$2")
        assert admin.role == "admin"
        assert admin.is_active

    @pytest.mark.asyncio
    async def test_duplicate_email(self, unit_env):
        service = await unit_env.get(AdminAuthService)
        await _admin(unit_env)

        with pytest.raises(DuplicateKeyError):
            await service.create_admin(EMAIL, "another password", "Someone")


class TestAuthenticate:
    """Tests for AdminAuthService.authenticate()."""

    @pytest.mark.asyncio
    async def test_success_records_login(self, unit_env):
        service = await unit_env.get(AdminAuthService)
        created = await _admin(unit_env)
        assert created.last_login_at is None

        admin = await service.authenticate(EMAIL, PASSWORD)

        assert admin.id == created.id
        assert admin.last_login_at is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        service = await unit_env.get(AdminAuthService)
        await _admin(unit_env)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.authenticate(EMAIL, "wrong password")

        assert str(exc_info.value) == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_unknown_email_fails_the_same_way(self, unit_env):
        service = await unit_env.get(AdminAuthService)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.authenticate("nobody@example.com", PASSWORD)

        assert str(exc_info.value) == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_inactive_admin(self, unit_env):
        service = await unit_env.get(AdminAuthService)
        repo = await unit_env.get(AdminRepository)
        admin = await _admin(unit_env)
        await repo.save(admin.model_copy(update={"is_active": False}))

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate(EMAIL, PASSWORD)
        assert await service.get_active_admin(str(admin.id)) is None


@pytest.mark.asyncio
async def test_get_active_admin_with_malformed_subject(unit_env):
    service = await unit_env.get(AdminAuthService)

    assert await service.get_active_admin("not-a-uuid") is None
