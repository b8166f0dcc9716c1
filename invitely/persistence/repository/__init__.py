"""PostgreSQL repository implementations."""

from .admin import PostgresAdminRepository
from .analytics import PostgresAnalyticsRepository
from .guest import PostgresGuestRepository
from .invitation import PostgresInvitationRepository
from .reseller import PostgresResellerRepository
from .template import PostgresTemplateRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresAdminRepository",
    "PostgresAnalyticsRepository",
    "PostgresGuestRepository",
    "PostgresInvitationRepository",
    "PostgresResellerRepository",
    "PostgresTemplateRepository",
    "PostgresUserRepository",
]
