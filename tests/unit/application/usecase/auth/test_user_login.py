"""Unit tests for the end-user authentication use cases."""

import pytest
from dishka import AsyncContainer

from invitely.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    UserLoginRequest,
    UserLoginUseCase,
)
from invitely.domain.error import InvalidCredentialsError, NotAuthorizedError
from invitely.domain.service import AdminAuthService, JWTService, UserService
from invitely.domain.value import PageRequest
from invitely.util.jwt import USER_ROLE, JWTError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUserLoginUseCase:
    """Tests for UserLoginUseCase (mock Google tokens)."""

    @pytest.mark.asyncio
    async def test_first_login_creates_account(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(UserLoginUseCase)
        jwt_service = await unit_env.get(JWTService)

        response = await use_case.execute(
            UserLoginRequest(id_token="valid:sarah@example.com:Sarah")
        )

        assert response.user.email == "sarah@example.com"
        assert response.user.name == "Sarah"
        payload = jwt_service.verify_token(response.token)
        assert payload.sub == response.user.id
        assert payload.role == USER_ROLE

    @pytest.mark.asyncio
    async def test_second_login_reuses_account(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(UserLoginUseCase)
        users = await unit_env.get(UserService)

        first = await use_case.execute(
            UserLoginRequest(id_token="valid:sarah@example.com:Sarah")
        )
        second = await use_case.execute(
            UserLoginRequest(id_token="valid:sarah@example.com:Sarah Smith")
        )

        assert first.user.id == second.user.id
        assert second.user.name == "Sarah Smith"
        _, total = await users.list_users(PageRequest())
        assert total == 1

    @pytest.mark.asyncio
    async def test_rejected_token(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(UserLoginUseCase)

        with pytest.raises(InvalidCredentialsError, match="Invalid Google credentials"):
            await use_case.execute(UserLoginRequest(id_token="forged"))


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_resolves_user_token(self, unit_env: AsyncContainer):
        login = await unit_env.get(UserLoginUseCase)
        use_case = await unit_env.get(GetCurrentUserUseCase)
        logged_in = await login.execute(
            UserLoginRequest(id_token="valid:sarah@example.com")
        )

        user = await use_case.execute(GetCurrentUserRequest(token=logged_in.token))

        assert str(user.id) == logged_in.user.id

    @pytest.mark.asyncio
    async def test_admin_token_is_not_a_user_token(self, unit_env: AsyncContainer):
        admins = await unit_env.get(AdminAuthService)
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(GetCurrentUserUseCase)
        admin = await admins.create_admin("admin@example.com", "password123", "Ada")

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                GetCurrentUserRequest(token=jwt_service.create_admin_token(admin))
            )

    @pytest.mark.asyncio
    async def test_deleted_user(self, unit_env: AsyncContainer):
        login = await unit_env.get(UserLoginUseCase)
        users = await unit_env.get(UserService)
        use_case = await unit_env.get(GetCurrentUserUseCase)
        logged_in = await login.execute(
            UserLoginRequest(id_token="valid:sarah@example.com")
        )
        user = await users.get_by_email("sarah@example.com")
        await users.delete_user(user.id)

        with pytest.raises(JWTError, match="User account not found"):
            await use_case.execute(GetCurrentUserRequest(token=logged_in.token))
