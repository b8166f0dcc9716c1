"""Builders for domain objects used across tests."""

from typing import Any
from uuid import uuid4

from invitely.domain.model import Template, User
from invitely.domain.value import InvitationCategory, TemplateId, TemplateStyle, UserId


def wedding_form_data(**overrides: Any) -> dict[str, Any]:
    """Wedding form data for Sarah and John; keyword arguments replace keys."""
    data: dict[str, Any] = {
        "brideName": "Sarah",
        "groomName": "John",
        "eventDate": "2024-08-15T16:00:00Z",
        "venueName": "Grand Ballroom",
    }
    data.update(overrides)
    return data


def make_user(email: str = "sarah@example.com", name: str | None = "Sarah") -> User:
    return User(id=UserId(uuid4()), email=email, name=name)


def make_template(
    name: str = "Rose Garden",
    category: InvitationCategory = InvitationCategory.WEDDING,
    style: TemplateStyle = TemplateStyle.FLORAL,
    **fields: Any,
) -> Template:
    return Template(
        id=TemplateId(uuid4()), name=name, category=category, style=style, **fields
    )
