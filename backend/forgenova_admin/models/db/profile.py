"""Profile ORM model.

One row per identity-provider user (``auth.users``); the FK to the auth
schema is created by the migration, not modelled here.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from forgenova_admin.models.db.base import Base, CreatedAtMixin

__all__ = ["Profile"]


class Profile(CreatedAtMixin, Base):
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="profiles_role_check"),
        CheckConstraint(
            "status IN ('pending', 'active', 'inactive')", name="profiles_status_check"
        ),
        CheckConstraint(
            "admin_role IS NULL OR admin_role IN ('editor', 'super_admin', 'admin')",
            name="profiles_admin_role_check",
        ),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)

    role: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'user'"))
    admin_role: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'pending'")
    )

    # Contact fields
    full_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    company: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    last_active_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
