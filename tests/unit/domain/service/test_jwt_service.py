"""Unit tests for JWTService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from invitely.config import AuthSettings
from invitely.domain.model import AdminUser
from invitely.domain.service import JWTService
from invitely.domain.value import AdminId
from invitely.util.jwt import ADMIN_ROLE, USER_ROLE, JWTError, create_token
from tests.factories import make_user

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-that-is-long-enough-for-hs256")


@pytest.fixture
def service() -> JWTService:
    return JWTService(SETTINGS)


def _admin() -> AdminUser:
    return AdminUser(
        id=AdminId(uuid4()),
        email="admin@example.com",
        name="Ada Admin",
        password_hash="$2b$04$invalid",
    )


def test_user_token_round_trip(service):
    user = make_user()

    payload = service.verify_token(service.create_user_token(user))

    assert payload.sub == str(user.id)
    assert payload.email == "sarah@example.com"
    assert payload.role == USER_ROLE


def test_admin_token_carries_admin_role(service):
    admin = _admin()

    payload = service.verify_token(service.create_admin_token(admin))

    assert payload.sub == str(admin.id)
    assert payload.role == ADMIN_ROLE


def test_expired_token(service):
    token = create_token(
        str(uuid4()), "a@example.com", None, USER_ROLE, timedelta(seconds=-5), SETTINGS
    )

    with pytest.raises(JWTError) as exc_info:
        service.verify_token(token)

    assert str(exc_info.value) == "Token has expired"
    assert exc_info.value.expired


def test_token_signed_with_other_secret(service):
    other = SETTINGS.model_copy(
        update={"jwt_secret": "a-completely-different-secret-of-decent-length"}
    )
    token = create_token(
        str(uuid4()), "a@example.com", None, USER_ROLE, timedelta(hours=1), other
    )

    with pytest.raises(JWTError, match="Invalid token"):
        service.verify_token(token)


def test_garbage_token(service):
    with pytest.raises(JWTError, match="Invalid token"):
        service.verify_token("not.a.jwt")
