"""
Module: mess_kernel.db.base
Responsibility: Declarative base for the document-store tables.  Every
    table gets an integer surrogate key and row timestamps; the documents
    themselves are addressed by their string key, never by ``id``.
Architecture position: Kernel > DB.  Lowest-level import target for ORM
    models.  MUST NOT import from models/, services/ or outer layers.
"""

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base; datetimes are always timezone-aware columns."""

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
    }


class TimestampedBase(Base):
    """
    Abstract base with a surrogate key and row timestamps.

    Guarantees:
        - created_at is set on INSERT and never changes.
        - updated_at is refreshed on every UPDATE.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
