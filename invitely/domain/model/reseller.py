"""Reseller entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from invitely.domain.model.common import DomainModel, utcnow
from invitely.domain.value import ReferralCode, ResellerId, ResellerType, UserId


class Reseller(DomainModel):
    """Partner account that brings in users through its referral code.

    A user can be at most one reseller.
    """

    id: ResellerId
    user_id: UserId
    referral_code: ReferralCode
    type: ResellerType = ResellerType.FREE
    landing_slug: Optional[str] = Field(default=None, min_length=3, max_length=50)
    custom_domain: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
