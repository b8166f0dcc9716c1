"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from invitely.domain.model import (
    AdminUser,
    Invitation,
    InvitationAnalyticsEvent,
    InvitationGuest,
    Reseller,
    Template,
    User,
)
from invitely.domain.value import (
    AdminId,
    GuestId,
    GuestResponse,
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    ReferralCode,
    ResellerId,
    ResellerType,
    Slug,
    TemplateId,
    TemplateStyle,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return None if value is None else _uuid(value)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    reseller_id = _optional_uuid(row.get("reseller_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row.get("name"),
        avatar_url=row.get("avatar_url"),
        reseller_id=ResellerId(reseller_id) if reseller_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_reseller(row: Dict[str, Any]) -> Reseller:
    """Convert database row to Reseller domain model."""
    return Reseller(
        id=ResellerId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        referral_code=ReferralCode(row["referral_code"]),
        type=ResellerType(row["type"]),
        landing_slug=row.get("landing_slug"),
        custom_domain=row.get("custom_domain"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reseller_to_dict(reseller: Reseller) -> Dict[str, Any]:
    """Convert Reseller domain model to database dict."""
    data = reseller.model_dump()
    data["type"] = reseller.type.value
    return data


def row_to_admin(row: Dict[str, Any]) -> AdminUser:
    """Convert database row to AdminUser domain model."""
    return AdminUser(
        id=AdminId(_uuid(row["id"])),
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        role=row.get("role", "admin"),
        is_active=row["is_active"],
        last_login_at=row.get("last_login_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def admin_to_dict(admin: AdminUser) -> Dict[str, Any]:
    """Convert AdminUser domain model to database dict."""
    return admin.model_dump()


def row_to_template(row: Dict[str, Any]) -> Template:
    """Convert database row to Template domain model.

    ``price`` comes back from NUMERIC as a Decimal and is stored as float.
    """
    return Template(
        id=TemplateId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description"),
        thumbnail_url=row.get("thumbnail_url"),
        preview_url=row.get("preview_url"),
        category=InvitationCategory(row["category"]),
        style=TemplateStyle(row["style"]),
        template_data=row.get("template_data") or {},
        default_config=row.get("default_config") or {},
        supported_fields=row.get("supported_fields") or [],
        is_premium=row["is_premium"],
        price=float(row["price"]),
        popularity_score=row["popularity_score"],
        usage_count=row["usage_count"],
        features=row.get("features") or [],
        tags=row.get("tags") or [],
        is_active=row["is_active"],
        created_by=row.get("created_by"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def template_to_dict(template: Template) -> Dict[str, Any]:
    """Convert Template domain model to database dict."""
    data = template.model_dump()
    data["category"] = template.category.value
    data["style"] = template.style.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model."""
    template_id = _optional_uuid(row.get("template_id"))
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        template_id=TemplateId(template_id) if template_id else None,
        title=row["title"],
        category=InvitationCategory(row["category"]),
        status=InvitationStatus(row["status"]),
        form_data=row.get("form_data") or {},
        event_date=row.get("event_date"),
        venue_name=row.get("venue_name"),
        venue_address=row.get("venue_address"),
        template_customization=row.get("template_customization") or {},
        slug=Slug(row["slug"]),
        is_published=row["is_published"],
        published_at=row.get("published_at"),
        expires_at=row.get("expires_at"),
        rsvp_enabled=row["rsvp_enabled"],
        rsvp_deadline=row.get("rsvp_deadline"),
        guest_can_invite_others=row["guest_can_invite_others"],
        require_approval=row["require_approval"],
        view_count=row["view_count"],
        unique_view_count=row["unique_view_count"],
        rsvp_count=row["rsvp_count"],
        confirmed_count=row["confirmed_count"],
        meta_title=row.get("meta_title"),
        meta_description=row.get("meta_description"),
        og_image_url=row.get("og_image_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Counters are left out: they only change through atomic increments.
    """
    data = invitation.model_dump(
        exclude={"view_count", "unique_view_count", "rsvp_count", "confirmed_count"}
    )
    data["category"] = invitation.category.value
    data["status"] = invitation.status.value
    return data


def row_to_guest(row: Dict[str, Any]) -> InvitationGuest:
    """Convert database row to InvitationGuest domain model."""
    return InvitationGuest(
        id=GuestId(_uuid(row["id"])),
        invitation_id=InvitationId(_uuid(row["invitation_id"])),
        name=row["name"],
        email=row.get("email"),
        phone=row.get("phone"),
        response=GuestResponse(row["response"]),
        response_data=row.get("response_data") or {},
        plus_ones_count=row["plus_ones_count"],
        plus_ones_details=row.get("plus_ones_details") or [],
        invitation_opened_at=row.get("invitation_opened_at"),
        response_submitted_at=row.get("response_submitted_at"),
        reminder_sent_count=row["reminder_sent_count"],
        last_reminder_sent_at=row.get("last_reminder_sent_at"),
        email_notifications=row["email_notifications"],
        sms_notifications=row["sms_notifications"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def guest_to_dict(guest: InvitationGuest) -> Dict[str, Any]:
    """Convert InvitationGuest domain model to database dict."""
    data = guest.model_dump()
    data["response"] = guest.response.value
    return data


def analytics_event_to_dict(event: InvitationAnalyticsEvent) -> Dict[str, Any]:
    """Convert InvitationAnalyticsEvent domain model to database dict."""
    data = event.model_dump()
    data["event_type"] = event.event_type.value
    return data

