"""System configuration tables: key/value settings, feature flags, and the
singleton email settings row."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from forgenova_admin.models.db.base import Base, UUIDPrimaryKeyMixin

__all__ = ["SystemSetting", "FeatureFlag", "EmailSettings"]


class SystemSetting(Base):
    """A single key-value setting for system-wide configuration."""

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True)
    updated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.user_id", ondelete="SET NULL"), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )


class FeatureFlag(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "feature_flags"

    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    updated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.user_id", ondelete="SET NULL"), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )


class EmailSettings(UUIDPrimaryKeyMixin, Base):
    """At most one row: ``singleton`` is unique and can only be true."""

    __tablename__ = "email_settings"
    __table_args__ = (
        UniqueConstraint("singleton", name="email_settings_singleton_key"),
        CheckConstraint("singleton", name="email_settings_singleton_check"),
    )

    singleton: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    notification_signups: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    from_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    from_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reply_to: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.user_id", ondelete="SET NULL"), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )
