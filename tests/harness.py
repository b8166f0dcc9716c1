"""Test harness for unit and end-to-end tests.

Everything runs against the mock providers in ``tests.di`` unless a
component is explicitly unmocked.
"""

from collections.abc import Iterator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from invitely.domain.service import AdminAuthService
from invitely.interface.api.app import create_app
from invitely.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a fresh test container with specified unmocking
    - Yields request-scoped container for service access

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_create_template(unit_env):
            service = await unit_env.get(TemplateService)
            template = await service.create_template(...)
            assert template.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_client_fixture(unmock: set[Component] | None = None):
    """Factory for fixtures yielding a ``TestClient`` over a fresh app.

    Each test gets its own container, so in-memory data never leaks between
    tests. Unhandled exceptions surface as 500 responses, as in production.
    """

    @pytest.fixture
    def _client() -> Iterator[TestClient]:
        container = build_test_container(unmock=unmock or set())
        app = create_app(container=container)
        with TestClient(app, raise_server_exceptions=False) as client:
            yield client

    return _client


def login_user(client: TestClient, email: str, name: str = "Test User") -> dict:
    """Sign a user in with a mock Google token.

    Returns bearer headers for the user. The user cookie set by the login
    is dropped so several users can be driven from one client.
    """
    response = client.post(
        "/auth/login/google", json={"id_token": f"valid:{email}:{name}"}
    )
    assert response.status_code == 200, response.text
    client.cookies.delete("user_token")
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


def seed_admin(
    client: TestClient,
    email: str = "admin@example.com",
    password: str = "admin-password",
) -> None:
    """Create an admin account inside the app's container."""
    container = client.app.state.dishka_container

    async def _create() -> None:
        async with container() as request_container:
            service = await request_container.get(AdminAuthService)
            await service.create_admin(email=email, password=password, name="Ada Admin")

    client.portal.call(_create)
