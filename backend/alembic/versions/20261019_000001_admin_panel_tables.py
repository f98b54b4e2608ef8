"""Create the admin panel tables.

profiles, system_settings, feature_flags, email_settings (singleton row),
api_keys, activity_logs, workspaces, workspace_members, templates,
template_usage, system_backups.  Seeds the four built-in templates.

Revision ID: 0001_admin_panel
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "0001_admin_panel"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (name, description)
BUILTIN_TEMPLATES: list[tuple[str, str]] = [
    ("Maintenance Log", "Track downtime by machine, shift, and reason."),
    ("Production QC", "Log batch-level inspections and defects."),
    ("Inventory Count", "Cycle counts with variance analysis."),
    ("Safety Audit", "Track findings, severity, and resolution."),
]


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def _profile_fk(name: str) -> sa.Column:
    return sa.Column(
        name,
        UUID(as_uuid=True),
        sa.ForeignKey("profiles.user_id", ondelete="SET NULL"),
        nullable=True,
    )


def upgrade() -> None:
    # -- profiles ------------------------------------------------------------
    op.create_table(
        "profiles",
        sa.Column("user_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'user'")),
        sa.Column("admin_role", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("first_name", sa.Text(), nullable=True),
        sa.Column("last_name", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("company", sa.Text(), nullable=True),
        sa.Column("position", sa.Text(), nullable=True),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.CheckConstraint("role IN ('user', 'admin')", name="profiles_role_check"),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'inactive')", name="profiles_status_check"
        ),
        sa.CheckConstraint(
            "admin_role IS NULL OR admin_role IN ('editor', 'super_admin', 'admin')",
            name="profiles_admin_role_check",
        ),
    )
    # Profiles go away with the identity-provider user.
    op.execute(
        "ALTER TABLE profiles ADD CONSTRAINT profiles_user_id_fkey "
        "FOREIGN KEY (user_id) REFERENCES auth.users (id) ON DELETE CASCADE"
    )

    # -- configuration -------------------------------------------------------
    op.create_table(
        "system_settings",
        sa.Column("key", sa.Text(), primary_key=True),
        sa.Column("value", JSONB(), nullable=True),
        _profile_fk("updated_by"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "feature_flags",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _profile_fk("updated_by"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "email_settings",
        _uuid_pk(),
        sa.Column("singleton", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column(
            "notification_signups", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column("from_name", sa.Text(), nullable=True),
        sa.Column("from_email", sa.Text(), nullable=True),
        sa.Column("reply_to", sa.Text(), nullable=True),
        _profile_fk("updated_by"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("singleton", name="email_settings_singleton_key"),
        sa.CheckConstraint("singleton", name="email_settings_singleton_check"),
    )

    op.create_table(
        "api_keys",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("key_prefix", sa.Text(), nullable=False),
        sa.Column("key_hash", sa.Text(), nullable=False, unique=True),
        sa.Column("key_visible", sa.Text(), nullable=False),
        sa.Column("environment", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _profile_fk("created_by"),
        _created_at(),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "environment IN ('production', 'test')", name="api_keys_environment_check"
        ),
    )
    op.create_index("ix_api_keys_active_created", "api_keys", ["is_active", "created_at"])

    # -- audit ---------------------------------------------------------------
    op.create_table(
        "activity_logs",
        _uuid_pk(),
        sa.Column("level", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=True),
        sa.Column("user_email", sa.Text(), nullable=True),
        sa.Column("metadata", JSONB(), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "level IN ('info', 'warning', 'error')", name="activity_logs_level_check"
        ),
    )
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])
    op.create_index(
        "ix_activity_logs_level_created_at", "activity_logs", ["level", "created_at"]
    )

    # -- workspaces & templates ---------------------------------------------
    op.create_table(
        "workspaces",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _created_at(),
    )

    op.create_table(
        "workspace_members",
        sa.Column(
            "workspace_id",
            UUID(as_uuid=True),
            sa.ForeignKey("workspaces.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("profiles.user_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'member'")),
        _created_at(),
    )

    op.create_table(
        "templates",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_by",
            UUID(as_uuid=True),
            sa.ForeignKey(
                "profiles.user_id", ondelete="SET NULL", name="templates_created_by_fkey"
            ),
            nullable=True,
        ),
        sa.Column(
            "updated_by",
            UUID(as_uuid=True),
            sa.ForeignKey(
                "profiles.user_id", ondelete="SET NULL", name="templates_updated_by_fkey"
            ),
            nullable=True,
        ),
        _created_at(),
    )

    op.create_table(
        "template_usage",
        _uuid_pk(),
        sa.Column(
            "template_id",
            UUID(as_uuid=True),
            sa.ForeignKey("templates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "workspace_id",
            UUID(as_uuid=True),
            sa.ForeignKey("workspaces.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("used_for", sa.Text(), nullable=True),
        _created_at(),
    )

    # -- backups -------------------------------------------------------------
    op.create_table(
        "system_backups",
        _uuid_pk(),
        sa.Column("filename", sa.Text(), nullable=False, unique=True),
        sa.Column("size_bytes", sa.BigInteger(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        _profile_fk("created_by"),
        _created_at(),
    )

    # Seed built-in templates
    templates = sa.table(
        "templates",
        sa.column("name", sa.Text()),
        sa.column("description", sa.Text()),
    )
    op.bulk_insert(
        templates,
        [{"name": name, "description": desc} for name, desc in BUILTIN_TEMPLATES],
    )


def downgrade() -> None:
    op.drop_table("system_backups")
    op.drop_table("template_usage")
    op.drop_table("templates")
    op.drop_table("workspace_members")
    op.drop_table("workspaces")
    op.drop_index("ix_activity_logs_level_created_at", table_name="activity_logs")
    op.drop_index("ix_activity_logs_created_at", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index("ix_api_keys_active_created", table_name="api_keys")
    op.drop_table("api_keys")
    op.drop_table("email_settings")
    op.drop_table("feature_flags")
    op.drop_table("system_settings")
    op.drop_table("profiles")
