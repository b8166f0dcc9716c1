"""Domain value objects and identifiers."""

from invitely.domain.value.common import RootValueObject, ValueObject
from invitely.domain.value.identifiers import (
    AdminId,
    AnalyticsEventId,
    GuestId,
    InvitationId,
    ResellerId,
    TemplateId,
    UserId,
)
from invitely.domain.value.types import (
    AnalyticsEventType,
    GuestResponse,
    InvitationCategory,
    InvitationStatus,
    PageRequest,
    ReferralCode,
    ResellerType,
    Slug,
    TemplateStyle,
)

__all__ = [
    # Base classes
    "RootValueObject",
    "ValueObject",
    # Identifiers
    "AdminId",
    "AnalyticsEventId",
    "GuestId",
    "InvitationId",
    "ResellerId",
    "TemplateId",
    "UserId",
    # Enums
    "AnalyticsEventType",
    "GuestResponse",
    "InvitationCategory",
    "InvitationStatus",
    "ResellerType",
    "TemplateStyle",
    # Value objects
    "PageRequest",
    "ReferralCode",
    "Slug",
]
