"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model, including the conjunctive filter query.
"""

from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_notes.backend.models.note import Note
from meeting_notes.backend.repositories.base import BaseRepository
from meeting_notes.backend.schemas.note import NoteFilter


def keyword_condition(keyword: str) -> ColumnElement[bool]:
    """Case-insensitive substring match against title or content."""
    return or_(
        Note.title.icontains(keyword, autoescape=True),
        Note.content.icontains(keyword, autoescape=True),
    )


def build_filter_conditions(note_filter: NoteFilter) -> list[ColumnElement[bool]]:
    """
    Build the WHERE predicates for a filter.

    Starts unconstrained and appends one predicate per populated field;
    the caller ANDs them together. Date bounds are inclusive.
    """
    conditions: list[ColumnElement[bool]] = []

    if note_filter.keyword:
        conditions.append(keyword_condition(note_filter.keyword))

    if note_filter.category:
        conditions.append(Note.category == note_filter.category)

    if note_filter.from_date is not None:
        conditions.append(Note.meeting_date >= note_filter.from_date)

    if note_filter.to_date is not None:
        conditions.append(Note.meeting_date <= note_filter.to_date)

    return conditions


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits soft-delete aware CRUD from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_window(self, limit: int, offset: int) -> list[Note]:
        """
        Get a window of live notes.

        Rows are ordered newest meeting first (ties by id) before the
        window is applied, so consecutive pages never overlap.

        Args:
            limit: Maximum number of notes to return
            offset: Number of notes to skip
        """
        result = await self.session.execute(
            self._live()
            .order_by(Note.meeting_date.desc(), Note.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def search(self, keyword: str) -> list[Note]:
        """Get live notes whose title or content contains the keyword."""
        result = await self.session.execute(
            self._live().where(keyword_condition(keyword))
        )
        return list(result.scalars().all())

    async def filter(self, note_filter: NoteFilter) -> list[Note]:
        """Get live notes matching every populated field of the filter."""
        result = await self.session.execute(
            self._live().where(*build_filter_conditions(note_filter))
        )
        return list(result.scalars().all())
