"""Backup bookkeeping rows (no dump is attached)."""

import uuid
from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from forgenova_admin.models.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin

__all__ = ["SystemBackup"]


class SystemBackup(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "system_backups"

    filename: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    size_bytes: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'pending'")
    )
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.user_id", ondelete="SET NULL"), nullable=True
    )
