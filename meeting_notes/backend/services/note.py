"""
Note Service.

Business logic layer for notes. Validates input, applies the ordering
contract, and classifies repository failures into the note error taxonomy.

Every list returned by this service is sorted newest meeting first,
with ties broken by the higher id.
"""

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_notes.backend.core.exceptions import (
    ApplicationError,
    CreateFailedError,
    DeleteFailedError,
    EmptyContentError,
    EmptyKeywordError,
    EmptyTitleError,
    FilterFailedError,
    InvalidDateRangeError,
    NoteNotFoundError,
    NotFoundError,
    RetrieveFailedError,
    SearchFailedError,
    UpdateFailedError,
)
from meeting_notes.backend.models.note import Note
from meeting_notes.backend.repositories.note import NoteRepository
from meeting_notes.backend.schemas.note import NoteCreate, NoteFilter, NoteUpdate
from meeting_notes.backend.services.base import BaseService


def sort_by_meeting_date(notes: list[Note]) -> list[Note]:
    """Order notes by meeting date descending, then id descending."""
    return sorted(notes, key=lambda note: (note.meeting_date, note.id), reverse=True)


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, updates, retrieval, search and filtering
    with validation and error classification.
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: NoteRepository | None = None,
    ) -> None:
        super().__init__(session)
        self.repo = repo or NoteRepository(session)

    @staticmethod
    def _validate_note_fields(title: str, content: str) -> None:
        # Literal emptiness only; whitespace-only values are accepted.
        if title == "":
            raise EmptyTitleError()
        if content == "":
            raise EmptyContentError()

    async def _get_live_note(
        self,
        note_id: int,
        failure: Callable[[], ApplicationError],
    ) -> Note:
        """
        Fetch a live note, separating "absent" from "storage failed".

        Raises:
            NoteNotFoundError: If no live note has this id
            ApplicationError: `failure()` on any storage error
        """
        try:
            return await self.repo.get_by_id(note_id)
        except NotFoundError:
            raise NoteNotFoundError()
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": "get_note", "note_id": note_id, "error": str(e)},
            )
            raise failure()

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Args:
            data: Note creation data

        Returns:
            Created note, with its id assigned

        Raises:
            EmptyTitleError: If the title is an empty string
            EmptyContentError: If the content is an empty string
            CreateFailedError: On storage failure
        """
        self._validate_note_fields(data.title, data.content)
        self._log_operation("Creating note", title=data.title)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                Note(
                    title=data.title,
                    content=data.content,
                    category=data.category,
                    meeting_date=data.meeting_date,
                )
            ),
            CreateFailedError,
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_all_notes(self) -> list[Note]:
        """Get every live note. An empty list is not an error."""
        notes = await self._execute_db_operation(
            "get_all_notes",
            self.repo.get_all(),
            RetrieveFailedError,
        )
        self._log_debug("Notes retrieved", count=len(notes))
        return sort_by_meeting_date(notes)

    async def get_paginated_notes(self, limit: int, offset: int) -> list[Note]:
        """
        Get one window of live notes.

        limit and offset are passed through unchanged; callers are
        responsible for keeping them non-negative.
        """
        notes = await self._execute_db_operation(
            "get_paginated_notes",
            self.repo.get_window(limit=limit, offset=offset),
            RetrieveFailedError,
        )
        self._log_debug("Paginated notes retrieved", limit=limit, offset=offset, count=len(notes))
        return sort_by_meeting_date(notes)

    async def count_notes(self) -> int:
        """Count live notes."""
        return await self._execute_db_operation(
            "count_notes",
            self.repo.count(),
            RetrieveFailedError,
        )

    async def get_note_by_id(self, note_id: int) -> Note:
        """
        Get a note by ID.

        Raises:
            NoteNotFoundError: If note not found or deleted
            RetrieveFailedError: On storage failure
        """
        note = await self._get_live_note(note_id, RetrieveFailedError)
        self._log_debug("Note retrieved", note_id=note_id)
        return note

    async def update_note(self, note_id: int, data: NoteUpdate) -> Note:
        """
        Replace the editable fields of an existing note.

        The note is looked up before the payload is validated, so an
        unknown id reports NoteNotFoundError even for an invalid payload.
        id and created_at are never touched.

        Raises:
            NoteNotFoundError: If note not found or deleted
            EmptyTitleError: If the new title is an empty string
            EmptyContentError: If the new content is an empty string
            UpdateFailedError: On storage failure
        """
        existing = await self._get_live_note(note_id, UpdateFailedError)
        self._validate_note_fields(data.title, data.content)

        self._log_operation("Updating note", note_id=note_id)

        existing.title = data.title
        existing.content = data.content
        existing.category = data.category
        existing.meeting_date = data.meeting_date

        return await self._execute_db_operation(
            "update_note",
            self.repo.save(existing),
            UpdateFailedError,
        )

    async def delete_note(self, note_id: int) -> None:
        """
        Soft-delete a note.

        Raises:
            NoteNotFoundError: If note not found or already deleted
            DeleteFailedError: On storage failure
        """
        await self._get_live_note(note_id, DeleteFailedError)

        self._log_operation("Deleting note", note_id=note_id)

        await self._execute_db_operation(
            "delete_note",
            self.repo.soft_delete(note_id),
            DeleteFailedError,
        )

    async def search_notes(self, keyword: str) -> list[Note]:
        """
        Search notes by keyword in title or content (case-insensitive).

        The blank check trims whitespace; the keyword itself is matched
        as given.

        Raises:
            EmptyKeywordError: If the keyword is blank
            SearchFailedError: On storage failure
        """
        if not keyword.strip():
            raise EmptyKeywordError()

        self._log_debug("Searching notes", keyword=keyword)

        notes = await self._execute_db_operation(
            "search_notes",
            self.repo.search(keyword),
            SearchFailedError,
        )
        return sort_by_meeting_date(notes)

    async def filter_notes(self, note_filter: NoteFilter) -> list[Note]:
        """
        Filter notes by keyword, category and meeting date range.

        Keyword and category are trimmed first; populated fields are
        combined with AND. No query is issued for an inverted range.

        Raises:
            InvalidDateRangeError: If from_date is after to_date
            FilterFailedError: On storage failure
        """
        note_filter = note_filter.model_copy(
            update={
                "keyword": note_filter.keyword.strip(),
                "category": note_filter.category.strip(),
            }
        )

        if (
            note_filter.from_date is not None
            and note_filter.to_date is not None
            and note_filter.from_date > note_filter.to_date
        ):
            raise InvalidDateRangeError()

        self._log_debug("Filtering notes", **note_filter.model_dump(mode="json"))

        notes = await self._execute_db_operation(
            "filter_notes",
            self.repo.filter(note_filter),
            FilterFailedError,
        )
        return sort_by_meeting_date(notes)
