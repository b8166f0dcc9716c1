"""User entity.

End users own invitations and may be attributed to a reseller.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from invitely.domain.model.common import DomainModel, utcnow
from invitely.domain.value import ResellerId, UserId


class User(DomainModel):
    """End-user account."""

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    reseller_id: Optional[ResellerId] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
