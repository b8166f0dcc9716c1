"""Invitation analytics event."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from invitely.domain.model.common import DomainModel, utcnow
from invitely.domain.value import AnalyticsEventId, AnalyticsEventType, InvitationId


class InvitationAnalyticsEvent(DomainModel):
    """A single tracked interaction with a published invitation."""

    id: AnalyticsEventId
    invitation_id: InvitationId
    event_type: AnalyticsEventType
    event_data: dict[str, Any] = Field(default_factory=dict)
    session_id: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    referrer: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
