"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import math
import re
from enum import Enum

from pydantic import Field, field_validator

from invitely.domain.value.common import RootValueObject, ValueObject


class InvitationCategory(str, Enum):
    """Closed set of invitation categories.

    The category decides the shape of an invitation's form data.
    """

    WEDDING = "wedding"
    BIRTHDAY = "birthday"
    GRADUATION = "graduation"
    BABY_SHOWER = "baby_shower"
    BUSINESS = "business"
    ANNIVERSARY = "anniversary"
    PARTY = "party"


class InvitationStatus(str, Enum):
    """Lifecycle status of an invitation."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    EXPIRED = "expired"


class TemplateStyle(str, Enum):
    """Visual style of a template."""

    CLASSIC = "classic"
    MODERN = "modern"
    ELEGANT = "elegant"
    FLORAL = "floral"
    MINIMALIST = "minimalist"
    RUSTIC = "rustic"
    VINTAGE = "vintage"
    TROPICAL = "tropical"


class GuestResponse(str, Enum):
    """A guest's RSVP answer."""

    PENDING = "pending"
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"
    MAYBE = "maybe"


class ResellerType(str, Enum):
    """Reseller plan."""

    FREE = "FREE"
    PREMIUM = "PREMIUM"


class AnalyticsEventType(str, Enum):
    """Kinds of tracked invitation events."""

    VIEW = "view"
    RSVP = "rsvp"
    SHARE = "share"


class Slug(RootValueObject[str]):
    """URL-safe slug for public invitation lookup.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'sarah-john-wedding', 'emma-birthday-30-2'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class ReferralCode(RootValueObject[str]):
    """Reseller referral code: upper-case letters and digits."""

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Normalize to upper case and validate the alphabet."""
        v = v.upper()
        if not re.match(r"^[A-Z0-9]{4,32}$", v):
            raise ValueError("Referral code must be 4-32 characters of A-Z and 0-9")
        return v


class PageRequest(ValueObject):
    """1-indexed page request with a clamped page size."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @classmethod
    def clamp(
        cls,
        page: int | None,
        limit: int | None,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> "PageRequest":
        """Build a page request, clamping out-of-range values instead of rejecting.

        Args:
            page: Requested page (values below 1 become 1)
            limit: Requested page size (clamped to 1..max_limit)
            default_limit: Page size when none was requested
            max_limit: Largest page size allowed

        Returns:
            Page request within bounds
        """
        page = max(1, page or 1)
        limit = default_limit if limit is None else limit
        limit = min(max_limit, max(1, limit))
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        """Number of pages needed for ``total`` rows."""
        return math.ceil(total / self.limit)
