"""Domain services."""

from .admin_service import AdminAuthService
from .base import Service
from .field_extractor import DerivedFields, extract_derived_fields
from .form_validator import FormDataValidator, ValidationResult
from .guest_service import GuestService
from .identity import ExternalIdentity, IdentityProvider
from .invitation_service import InvitationService, InvitationStats, ViewContext
from .invite_service import InviteService, InviteStats
from .jwt_service import JWTService
from .reseller_service import ResellerService, random_referral_code
from .slug_service import SlugService
from .template_service import CategoryCount, StyleCount, TemplateService
from .user_service import UserService, UserStats

__all__ = [
    "AdminAuthService",
    "CategoryCount",
    "DerivedFields",
    "ExternalIdentity",
    "FormDataValidator",
    "GuestService",
    "IdentityProvider",
    "InvitationService",
    "InvitationStats",
    "InviteService",
    "InviteStats",
    "JWTService",
    "ResellerService",
    "Service",
    "SlugService",
    "StyleCount",
    "TemplateService",
    "UserService",
    "UserStats",
    "ValidationResult",
    "ViewContext",
    "extract_derived_fields",
    "random_referral_code",
]
