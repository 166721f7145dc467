"""
SQLAlchemy ORM models for persistent storage.

Grades are persisted as one opaque JSON blob per set, keyed by storage key.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StoredBlobDB(Base):
    """
    A text blob stored under a unique key.

    The contents are never interpreted by the database layer.
    """

    __tablename__ = "blobs"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<StoredBlobDB(key={self.key}, size={len(self.value)})>"
