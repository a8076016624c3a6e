"""
SQLAlchemy ORM models.

The credential store keeps a handful of named values (failure count,
lockout deadline, remembered token) in a single key-value table.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from loginguard.core.time import utcnow
from loginguard.db.database import Base


class CredentialEntry(Base):
    """One persisted credential-store value."""

    __tablename__ = "credential_entries"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, default=utcnow, onupdate=utcnow
    )
