"""Re-export Base and provide common mixins for ORM models."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from forgenova_admin.database import Base

__all__ = ["Base", "UUIDPrimaryKeyMixin", "CreatedAtMixin"]


class UUIDPrimaryKeyMixin:
    """``id uuid primary key default gen_random_uuid()``"""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )


class CreatedAtMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
