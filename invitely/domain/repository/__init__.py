"""Domain repository interfaces."""

from .admin import AdminRepository
from .analytics import AnalyticsRepository
from .guest import GuestRepository
from .invitation import InvitationFilter, InvitationRepository
from .reseller import ResellerRepository
from .template import TemplateFilter, TemplateRepository, TemplateSortOrder
from .user import UserRepository

__all__ = [
    "AdminRepository",
    "AnalyticsRepository",
    "GuestRepository",
    "InvitationFilter",
    "InvitationRepository",
    "ResellerRepository",
    "TemplateFilter",
    "TemplateRepository",
    "TemplateSortOrder",
    "UserRepository",
]
