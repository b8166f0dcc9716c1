"""In-memory repository implementations for testing."""

from .admin import InMemoryAdminRepository
from .analytics import InMemoryAnalyticsRepository
from .guest import InMemoryGuestRepository
from .invitation import InMemoryInvitationRepository
from .reseller import InMemoryResellerRepository
from .template import InMemoryTemplateRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAdminRepository",
    "InMemoryAnalyticsRepository",
    "InMemoryGuestRepository",
    "InMemoryInvitationRepository",
    "InMemoryResellerRepository",
    "InMemoryTemplateRepository",
    "InMemoryUserRepository",
]
