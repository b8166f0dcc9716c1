"""SQLAlchemy table definitions for Invitely.

These tables are used with SQLAlchemy Core and hand-written mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

metadata = MetaData()

INVITATION_CATEGORIES = (
    "wedding",
    "birthday",
    "graduation",
    "baby_shower",
    "business",
    "anniversary",
    "party",
)
INVITATION_STATUSES = ("draft", "published", "archived", "expired")
TEMPLATE_STYLES = (
    "classic",
    "modern",
    "elegant",
    "floral",
    "minimalist",
    "rustic",
    "vintage",
    "tropical",
)
GUEST_RESPONSES = ("pending", "attending", "not_attending", "maybe")
RESELLER_TYPES = ("FREE", "PREMIUM")
ANALYTICS_EVENT_TYPES = ("view", "rsvp", "share")


def _one_of(column: str, values: tuple[str, ...], name: str) -> CheckConstraint:
    allowed = ", ".join(f"'{v}'" for v in values)
    return CheckConstraint(f"{column} IN ({allowed})", name=name)


def _timestamps() -> list[Column]:
    return [
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        Column(
            "updated_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
    ]


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "reseller_id",
        UUID,
        ForeignKey("resellers.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    ),
    *_timestamps(),
)

Index("idx_users_reseller_id", users_table.c.reseller_id)
Index("idx_users_created_at", users_table.c.created_at.desc())

# ============================================================================
# RESELLERS TABLE
# ============================================================================
resellers_table = Table(
    "resellers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("referral_code", String(32), nullable=False, unique=True),
    Column("type", String(20), nullable=False, server_default="FREE"),
    Column("landing_slug", String(50), nullable=True),
    Column("custom_domain", String(255), nullable=True),
    *_timestamps(),
    _one_of("type", RESELLER_TYPES, "ck_resellers_type"),
)

Index("idx_resellers_type", resellers_table.c.type)

# ============================================================================
# ADMIN USERS TABLE
# ============================================================================
admin_users_table = Table(
    "admin_users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(200), nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("role", String(20), nullable=False, server_default="admin"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    *_timestamps(),
    CheckConstraint("role = 'admin'", name="ck_admin_users_role"),
)

# ============================================================================
# TEMPLATES TABLE
# ============================================================================
templates_table = Table(
    "templates",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(200), nullable=False),
    Column("description", Text, nullable=True),
    Column("thumbnail_url", Text, nullable=True),
    Column("preview_url", Text, nullable=True),
    Column("category", String(30), nullable=False),
    Column("style", String(30), nullable=False),
    Column("template_data", JSONB, nullable=False, server_default="{}"),
    Column("default_config", JSONB, nullable=False, server_default="{}"),
    Column("supported_fields", JSONB, nullable=False, server_default="[]"),
    Column("is_premium", Boolean, nullable=False, server_default="false"),
    Column("price", Numeric(10, 2), nullable=False, server_default="0"),
    Column("popularity_score", Integer, nullable=False, server_default="0"),
    Column("usage_count", Integer, nullable=False, server_default="0"),
    Column("features", JSONB, nullable=False, server_default="[]"),
    Column("tags", JSONB, nullable=False, server_default="[]"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("created_by", String(255), nullable=True),
    *_timestamps(),
    _one_of("category", INVITATION_CATEGORIES, "ck_templates_category"),
    _one_of("style", TEMPLATE_STYLES, "ck_templates_style"),
    CheckConstraint("price >= 0", name="ck_templates_price_non_negative"),
)

Index("idx_templates_category", templates_table.c.category)
Index("idx_templates_style", templates_table.c.style)
Index("idx_templates_popularity", templates_table.c.popularity_score.desc())
Index("idx_templates_is_active", templates_table.c.is_active)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "template_id",
        UUID,
        ForeignKey("templates.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column("title", String(200), nullable=False),
    Column("category", String(30), nullable=False),
    Column("status", String(20), nullable=False, server_default="draft"),
    Column("form_data", JSONB, nullable=False, server_default="{}"),
    # Derived from form_data
    Column("event_date", TIMESTAMP(timezone=True), nullable=True),
    Column("venue_name", Text, nullable=True),
    Column("venue_address", Text, nullable=True),
    Column("template_customization", JSONB, nullable=False, server_default="{}"),
    Column("slug", String(100), nullable=False, unique=True),
    Column("is_published", Boolean, nullable=False, server_default="false"),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("rsvp_enabled", Boolean, nullable=False, server_default="true"),
    Column("rsvp_deadline", TIMESTAMP(timezone=True), nullable=True),
    Column("guest_can_invite_others", Boolean, nullable=False, server_default="false"),
    Column("require_approval", Boolean, nullable=False, server_default="false"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("unique_view_count", Integer, nullable=False, server_default="0"),
    Column("rsvp_count", Integer, nullable=False, server_default="0"),
    Column("confirmed_count", Integer, nullable=False, server_default="0"),
    Column("meta_title", String(200), nullable=True),
    Column("meta_description", Text, nullable=True),
    Column("og_image_url", Text, nullable=True),
    *_timestamps(),
    _one_of("category", INVITATION_CATEGORIES, "ck_invitations_category"),
    _one_of("status", INVITATION_STATUSES, "ck_invitations_status"),
    CheckConstraint(
        "(status = 'published') = (is_published AND published_at IS NOT NULL)",
        name="ck_invitations_publication_state",
    ),
    CheckConstraint(
        "view_count >= 0 AND unique_view_count >= 0 "
        "AND rsvp_count >= 0 AND confirmed_count >= 0",
        name="ck_invitations_counters_non_negative",
    ),
)

Index("idx_invitations_user_id", invitations_table.c.user_id)
Index("idx_invitations_template_id", invitations_table.c.template_id)
Index("idx_invitations_category", invitations_table.c.category)
Index("idx_invitations_status", invitations_table.c.status)
Index("idx_invitations_is_published", invitations_table.c.is_published)
Index("idx_invitations_updated_at", invitations_table.c.updated_at.desc())
Index("idx_invitations_event_date", invitations_table.c.event_date)

# ============================================================================
# INVITATION GUESTS TABLE
# ============================================================================
invitation_guests_table = Table(
    "invitation_guests",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "invitation_id",
        UUID,
        ForeignKey("invitations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(200), nullable=False),
    Column("email", String(255), nullable=True),
    Column("phone", String(50), nullable=True),
    Column("response", String(20), nullable=False, server_default="pending"),
    Column("response_data", JSONB, nullable=False, server_default="{}"),
    Column("plus_ones_count", Integer, nullable=False, server_default="0"),
    Column("plus_ones_details", JSONB, nullable=False, server_default="[]"),
    Column("invitation_opened_at", TIMESTAMP(timezone=True), nullable=True),
    Column("response_submitted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("reminder_sent_count", Integer, nullable=False, server_default="0"),
    Column("last_reminder_sent_at", TIMESTAMP(timezone=True), nullable=True),
    Column("email_notifications", Boolean, nullable=False, server_default="true"),
    Column("sms_notifications", Boolean, nullable=False, server_default="false"),
    *_timestamps(),
    _one_of("response", GUEST_RESPONSES, "ck_invitation_guests_response"),
    CheckConstraint("plus_ones_count >= 0", name="ck_invitation_guests_plus_ones"),
)

Index("idx_invitation_guests_invitation_id", invitation_guests_table.c.invitation_id)
Index("idx_invitation_guests_response", invitation_guests_table.c.response)

# ============================================================================
# INVITATION ANALYTICS TABLE
# ============================================================================
invitation_analytics_table = Table(
    "invitation_analytics",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "invitation_id",
        UUID,
        ForeignKey("invitations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("event_type", String(20), nullable=False),
    Column("event_data", JSONB, nullable=False, server_default="{}"),
    Column("session_id", String(255), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("ip_address", String(64), nullable=True),
    Column("referrer", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    _one_of("event_type", ANALYTICS_EVENT_TYPES, "ck_invitation_analytics_event_type"),
)

Index("idx_invitation_analytics_invitation_id", invitation_analytics_table.c.invitation_id)
Index("idx_invitation_analytics_event_type", invitation_analytics_table.c.event_type)
