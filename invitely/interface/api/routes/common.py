"""Helpers shared by the route modules."""

from enum import Enum
from typing import TypeVar

from fastapi import Response
from pydantic import BaseModel

from invitely.config import AuthSettings, PaginationSettings
from invitely.domain.error import ValidationError
from invitely.domain.value import PageRequest

E = TypeVar("E", bound=Enum)


class MessageResponse(BaseModel):
    """Plain acknowledgement payload."""

    message: str


def page_request(
    pagination: PaginationSettings,
    page: int | None,
    limit: int | None,
    default_limit: int | None = None,
) -> PageRequest:
    """Clamp raw query parameters into a page request."""
    return PageRequest.clamp(
        page,
        limit,
        default_limit=default_limit or pagination.default_limit,
        max_limit=pagination.max_limit,
    )


def parse_choice(enum_cls: type[E], raw: str | None, label: str) -> E | None:
    """Parse an optional enum filter; ``None``, ``""`` and ``"all"`` mean no filter.

    Raises:
        ValidationError: If the value is not a member of the enum
    """
    if raw is None or raw == "" or raw == "all":
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValidationError([f"Invalid {label}: {raw}"])


def set_auth_cookie(
    response: Response,
    name: str,
    token: str,
    max_age: int,
    auth_settings: AuthSettings,
) -> None:
    """Attach an HTTP-only auth cookie to the response."""
    response.set_cookie(
        key=name,
        value=token,
        httponly=True,
        secure=auth_settings.cookie_secure,
        samesite="lax",
        path="/",
        max_age=max_age,
    )


def clear_auth_cookie(
    response: Response, name: str, auth_settings: AuthSettings
) -> None:
    """Expire an auth cookie."""
    response.delete_cookie(
        key=name,
        path="/",
        httponly=True,
        secure=auth_settings.cookie_secure,
        samesite="lax",
    )
