"""Image: one profile image URL per user."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from user_service.db.session import Base


class Image(Base):
    """Profile image URL keyed by user_id."""

    __tablename__ = "images"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
