"""Append-only admin activity log."""

import uuid
from typing import Optional

from sqlalchemy import CheckConstraint, Index, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from forgenova_admin.models.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin

__all__ = ["ActivityLog"]


class ActivityLog(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "activity_logs"
    __table_args__ = (
        CheckConstraint(
            "level IN ('info', 'warning', 'error')", name="activity_logs_level_check"
        ),
        Index("ix_activity_logs_created_at", "created_at"),
        Index("ix_activity_logs_level_created_at", "level", "created_at"),
    )

    level: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # No FK: entries must outlive the users they mention.
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(UUID(as_uuid=True), nullable=True)
    user_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    metadata_: Mapped[Optional[dict]] = mapped_column("metadata", JSONB, nullable=True)
