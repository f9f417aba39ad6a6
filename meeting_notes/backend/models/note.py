"""
Note Model.

Database model for meeting notes.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from meeting_notes.backend.models.base import Base, SoftDeleteMixin, TimestampMixin


class Note(SoftDeleteMixin, TimestampMixin, Base):
    """
    Note database model.

    One row per meeting. Title and content are required by the service
    layer; storage only enforces NOT NULL.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    category: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        index=True,
    )
    meeting_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, meeting_date={self.meeting_date})>"
