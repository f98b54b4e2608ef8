"""Workspaces, their members, and data-entry templates."""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from forgenova_admin.models.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin

__all__ = ["Workspace", "WorkspaceMember", "Template", "TemplateUsage"]


class Workspace(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class WorkspaceMember(CreatedAtMixin, Base):
    __tablename__ = "workspace_members"

    workspace_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("profiles.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'member'"))


class Template(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "templates"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Constraint names are referenced by the PostgREST embeds in
    # services/templates.py (profiles!templates_created_by_fkey).
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey(
            "profiles.user_id", ondelete="SET NULL", name="templates_created_by_fkey"
        ),
        nullable=True,
    )
    updated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey(
            "profiles.user_id", ondelete="SET NULL", name="templates_updated_by_fkey"
        ),
        nullable=True,
    )


class TemplateUsage(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "template_usage"

    template_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("templates.id", ondelete="CASCADE"),
        nullable=False,
    )
    workspace_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
    )
    used_for: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
