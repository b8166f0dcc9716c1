"""Domain model entities."""

from invitely.domain.model.admin import AdminUser
from invitely.domain.model.analytics import InvitationAnalyticsEvent
from invitely.domain.model.guest import InvitationGuest
from invitely.domain.model.invitation import Invitation
from invitely.domain.model.reseller import Reseller
from invitely.domain.model.template import Template
from invitely.domain.model.user import User

__all__ = [
    "AdminUser",
    "Invitation",
    "InvitationAnalyticsEvent",
    "InvitationGuest",
    "Reseller",
    "Template",
    "User",
]
