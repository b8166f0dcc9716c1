"""Invitation read models returned by the invitation use cases."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from invitely.domain.model import Invitation
from invitely.domain.value import InvitationCategory, InvitationStatus


class PublicInvitationView(BaseModel):
    """What anyone holding the slug may see."""

    id: str
    title: str
    category: InvitationCategory
    form_data: dict[str, Any]
    event_date: datetime | None
    venue_name: str | None
    venue_address: str | None
    template_id: str | None
    template_customization: dict[str, Any]
    slug: str
    rsvp_enabled: bool
    rsvp_deadline: datetime | None
    published_at: datetime | None
    expires_at: datetime | None
    meta_title: str | None
    meta_description: str | None
    og_image_url: str | None
    view_count: int

    @classmethod
    def from_domain(cls, invitation: Invitation) -> "PublicInvitationView":
        return cls(**_common_fields(invitation))


class InvitationView(PublicInvitationView):
    """Full invitation as seen by its owner or an admin."""

    user_id: str
    status: InvitationStatus
    is_published: bool
    guest_can_invite_others: bool
    require_approval: bool
    unique_view_count: int
    rsvp_count: int
    confirmed_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, invitation: Invitation) -> "InvitationView":
        return cls(
            **_common_fields(invitation),
            user_id=str(invitation.user_id),
            status=invitation.status,
            is_published=invitation.is_published,
            guest_can_invite_others=invitation.guest_can_invite_others,
            require_approval=invitation.require_approval,
            unique_view_count=invitation.unique_view_count,
            rsvp_count=invitation.rsvp_count,
            confirmed_count=invitation.confirmed_count,
            created_at=invitation.created_at,
            updated_at=invitation.updated_at,
        )


def _common_fields(invitation: Invitation) -> dict[str, Any]:
    return {
        "id": str(invitation.id),
        "title": invitation.title,
        "category": invitation.category,
        "form_data": invitation.form_data,
        "event_date": invitation.event_date,
        "venue_name": invitation.venue_name,
        "venue_address": invitation.venue_address,
        "template_id": str(invitation.template_id) if invitation.template_id else None,
        "template_customization": invitation.template_customization,
        "slug": str(invitation.slug),
        "rsvp_enabled": invitation.rsvp_enabled,
        "rsvp_deadline": invitation.rsvp_deadline,
        "published_at": invitation.published_at,
        "expires_at": invitation.expires_at,
        "meta_title": invitation.meta_title,
        "meta_description": invitation.meta_description,
        "og_image_url": invitation.og_image_url,
        "view_count": invitation.view_count,
    }
