"""Invitation aggregate root.

An invitation belongs to exactly one user. Its ``form_data`` shape depends on
its category; ``event_date``, ``venue_name`` and ``venue_address`` are derived
from the form data and never written directly.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, model_validator

from invitely.domain.model.common import DomainModel, UtcDatetime, utcnow
from invitely.domain.value import (
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    Slug,
    TemplateId,
    UserId,
)


class Invitation(DomainModel):
    """Invitation aggregate root.

    Business rules:
    - Category never changes after creation
    - Slug is globally unique and assigned once
    - status == published exactly when is_published is set and published_at recorded
    - Counters only move through tracking operations
    """

    id: InvitationId
    user_id: UserId
    template_id: Optional[TemplateId] = None
    title: str = Field(min_length=1, max_length=200)
    category: InvitationCategory
    status: InvitationStatus = InvitationStatus.DRAFT
    form_data: dict[str, Any] = Field(default_factory=dict)

    # Derived from form_data
    event_date: Optional[datetime] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None

    template_customization: dict[str, Any] = Field(default_factory=dict)
    slug: Slug

    # Publishing
    is_published: bool = False
    published_at: Optional[datetime] = None
    expires_at: Optional[UtcDatetime] = None

    # RSVP settings
    rsvp_enabled: bool = True
    rsvp_deadline: Optional[UtcDatetime] = None
    guest_can_invite_others: bool = False
    require_approval: bool = False

    # Tracking counters
    view_count: int = Field(default=0, ge=0)
    unique_view_count: int = Field(default=0, ge=0)
    rsvp_count: int = Field(default=0, ge=0)
    confirmed_count: int = Field(default=0, ge=0)

    # Sharing metadata
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    og_image_url: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_publication_state(self) -> "Invitation":
        """Keep status and the publication flags in step."""
        published = self.is_published and self.published_at is not None
        if (self.status == InvitationStatus.PUBLISHED) != published:
            raise ValueError(
                "status must be 'published' exactly when is_published is set "
                "and published_at is recorded"
            )
        return self

    def is_owned_by(self, user_id: UserId) -> bool:
        """Check whether the user owns this invitation."""
        return self.user_id == user_id

    def is_expired(self, now: datetime) -> bool:
        """Check whether the publication window has passed."""
        return self.expires_at is not None and self.expires_at <= now
