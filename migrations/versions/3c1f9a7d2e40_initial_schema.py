"""initial_schema

Create the schema for Invitely:
- Users (end users, signed in with Google)
- Resellers (partner accounts with referral codes)
- Admin users (password login)
- Templates (invitation designs)
- Invitations (per-category form data, publication state, counters)
- Invitation guests (guest list and RSVP responses)
- Invitation analytics (view/rsvp/share events)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

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

UPDATED_AT_TABLES = (
    "users",
    "resellers",
    "admin_users",
    "templates",
    "invitations",
    "invitation_guests",
)


def _one_of(column: str, values: tuple[str, ...], name: str) -> sa.CheckConstraint:
    allowed = ", ".join(f"'{v}'" for v in values)
    return sa.CheckConstraint(f"{column} IN ({allowed})", name=name)


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def _jsonb(name: str, default: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.JSONB(astext_type=sa.Text()),
        nullable=False,
        server_default=sa.text(f"'{default}'::jsonb"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13; pgcrypto covers older servers
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("reseller_id", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )
    op.create_index("idx_users_reseller_id", "users", ["reseller_id"])
    op.create_index(
        "idx_users_created_at", "users", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # RESELLERS table
    # ========================================================================
    op.create_table(
        "resellers",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("referral_code", sa.String(32), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="FREE"),
        sa.Column("landing_slug", sa.String(50), nullable=True),
        sa.Column("custom_domain", sa.String(255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", name="resellers_user_id_key"),
        sa.UniqueConstraint("referral_code", name="resellers_referral_code_key"),
        _one_of("type", RESELLER_TYPES, "ck_resellers_type"),
    )
    op.create_index("idx_resellers_type", "resellers", ["type"])

    # users and resellers reference each other
    op.create_foreign_key(
        "users_reseller_id_fkey",
        "users",
        "resellers",
        ["reseller_id"],
        ["id"],
        ondelete="SET NULL",
    )

    # ========================================================================
    # ADMIN_USERS table
    # ========================================================================
    op.create_table(
        "admin_users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("last_login_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="admin_users_email_key"),
        sa.CheckConstraint("role = 'admin'", name="ck_admin_users_role"),
    )

    # ========================================================================
    # TEMPLATES table
    # ========================================================================
    op.create_table(
        "templates",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("preview_url", sa.Text(), nullable=True),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("style", sa.String(30), nullable=False),
        _jsonb("template_data", "{}"),
        _jsonb("default_config", "{}"),
        _jsonb("supported_fields", "[]"),
        sa.Column("is_premium", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("popularity_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        _jsonb("features", "[]"),
        _jsonb("tags", "[]"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_by", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        _one_of("category", INVITATION_CATEGORIES, "ck_templates_category"),
        _one_of("style", TEMPLATE_STYLES, "ck_templates_style"),
        sa.CheckConstraint("price >= 0", name="ck_templates_price_non_negative"),
    )
    op.create_index("idx_templates_category", "templates", ["category"])
    op.create_index("idx_templates_style", "templates", ["style"])
    op.create_index(
        "idx_templates_popularity", "templates", [sa.text("popularity_score DESC")]
    )
    op.create_index("idx_templates_is_active", "templates", ["is_active"])

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("template_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        _jsonb("form_data", "{}"),
        # Derived from form_data on every write
        sa.Column("event_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("venue_name", sa.Text(), nullable=True),
        sa.Column("venue_address", sa.Text(), nullable=True),
        _jsonb("template_customization", "{}"),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("rsvp_enabled", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("rsvp_deadline", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "guest_can_invite_others",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.Column(
            "require_approval", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "unique_view_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("rsvp_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("confirmed_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("meta_title", sa.String(200), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("og_image_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["template_id"], ["templates.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="invitations_slug_key"),
        _one_of("category", INVITATION_CATEGORIES, "ck_invitations_category"),
        _one_of("status", INVITATION_STATUSES, "ck_invitations_status"),
        sa.CheckConstraint(
            "(status = 'published') = (is_published AND published_at IS NOT NULL)",
            name="ck_invitations_publication_state",
        ),
        sa.CheckConstraint(
            "view_count >= 0 AND unique_view_count >= 0 "
            "AND rsvp_count >= 0 AND confirmed_count >= 0",
            name="ck_invitations_counters_non_negative",
        ),
    )
    op.create_index("idx_invitations_user_id", "invitations", ["user_id"])
    op.create_index("idx_invitations_template_id", "invitations", ["template_id"])
    op.create_index("idx_invitations_category", "invitations", ["category"])
    op.create_index("idx_invitations_status", "invitations", ["status"])
    op.create_index("idx_invitations_is_published", "invitations", ["is_published"])
    op.create_index(
        "idx_invitations_updated_at", "invitations", [sa.text("updated_at DESC")]
    )
    op.create_index("idx_invitations_event_date", "invitations", ["event_date"])

    # ========================================================================
    # INVITATION_GUESTS table
    # ========================================================================
    op.create_table(
        "invitation_guests",
        _id(),
        sa.Column("invitation_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("response", sa.String(20), nullable=False, server_default="pending"),
        _jsonb("response_data", "{}"),
        sa.Column("plus_ones_count", sa.Integer(), nullable=False, server_default="0"),
        _jsonb("plus_ones_details", "[]"),
        sa.Column("invitation_opened_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "response_submitted_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column(
            "reminder_sent_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "last_reminder_sent_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column(
            "email_notifications", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column(
            "sms_notifications", sa.Boolean(), nullable=False, server_default="false"
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["invitation_id"], ["invitations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        _one_of("response", GUEST_RESPONSES, "ck_invitation_guests_response"),
        sa.CheckConstraint(
            "plus_ones_count >= 0", name="ck_invitation_guests_plus_ones"
        ),
    )
    op.create_index(
        "idx_invitation_guests_invitation_id", "invitation_guests", ["invitation_id"]
    )
    op.create_index("idx_invitation_guests_response", "invitation_guests", ["response"])

    # ========================================================================
    # INVITATION_ANALYTICS table
    # ========================================================================
    op.create_table(
        "invitation_analytics",
        _id(),
        sa.Column("invitation_id", sa.UUID(), nullable=False),
        sa.Column("event_type", sa.String(20), nullable=False),
        _jsonb("event_data", "{}"),
        sa.Column("session_id", sa.String(255), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("referrer", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["invitation_id"], ["invitations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        _one_of(
            "event_type", ANALYTICS_EVENT_TYPES, "ck_invitation_analytics_event_type"
        ),
    )
    op.create_index(
        "idx_invitation_analytics_invitation_id",
        "invitation_analytics",
        ["invitation_id"],
    )
    op.create_index(
        "idx_invitation_analytics_event_type", "invitation_analytics", ["event_type"]
    )

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in UPDATED_AT_TABLES:
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in UPDATED_AT_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("invitation_analytics")
    op.drop_table("invitation_guests")
    op.drop_table("invitations")
    op.drop_table("templates")
    op.drop_table("admin_users")
    op.drop_constraint("users_reseller_id_fkey", "users", type_="foreignkey")
    op.drop_table("resellers")
    op.drop_table("users")
