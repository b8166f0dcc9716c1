"""Invitation guest entity.

Guests belong to one invitation and are deleted with it.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from invitely.domain.model.common import DomainModel, utcnow
from invitely.domain.value import GuestId, GuestResponse, InvitationId


class InvitationGuest(DomainModel):
    """One invited person and their RSVP."""

    id: GuestId
    invitation_id: InvitationId
    name: str = Field(min_length=1, max_length=200)
    email: Optional[str] = None
    phone: Optional[str] = None
    response: GuestResponse = GuestResponse.PENDING
    response_data: dict[str, Any] = Field(default_factory=dict)
    plus_ones_count: int = Field(default=0, ge=0)
    plus_ones_details: list[dict[str, Any]] = Field(default_factory=list)
    invitation_opened_at: Optional[datetime] = None
    response_submitted_at: Optional[datetime] = None
    reminder_sent_count: int = Field(default=0, ge=0)
    last_reminder_sent_at: Optional[datetime] = None
    email_notifications: bool = True
    sms_notifications: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
