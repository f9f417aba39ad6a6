"""
Notes API Endpoints.

REST API endpoints for meeting notes. Handlers only decode requests and
wrap results; NoteService raises typed errors that the registered
exception handlers turn into status codes.

Fixed paths (/paginated, /search, /filter) are declared before
/{note_id} so they are not captured as ids.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Query

from meeting_notes.backend.core.dependencies import NoteServiceDep, RequestId
from meeting_notes.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from meeting_notes.backend.models.note import Note
from meeting_notes.backend.schemas.base import ApiResponse, ResponseMetadata
from meeting_notes.backend.schemas.note import (
    NoteCreate,
    NoteFilter,
    NoteResponse,
    NoteUpdate,
)

router = APIRouter()

NO_NOTES_MESSAGE = "No notes found"
NO_SEARCH_MATCH_MESSAGE = "No notes match search criteria"
NO_FILTER_MATCH_MESSAGE = "No notes match filter criteria"


def _note_response(note: Note, request_id: str) -> ApiResponse[NoteResponse]:
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


def _note_list_response(
    notes: list[Note],
    request_id: str,
    empty_message: str,
) -> ApiResponse[list[NoteResponse]]:
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        message=empty_message if not notes else None,
        metadata=ResponseMetadata(request_id=request_id),
    )


def get_note_filter(
    keyword: str = Query(
        default="",
        description="Case-insensitive substring of title or content",
    ),
    category: str = Query(
        default="",
        description="Exact category match",
    ),
    from_date: datetime | None = Query(
        default=None,
        alias="fromDate",
        description="Earliest meeting date (inclusive, ISO-8601)",
    ),
    to_date: datetime | None = Query(
        default=None,
        alias="toDate",
        description="Latest meeting date (inclusive, ISO-8601)",
    ),
) -> NoteFilter:
    """FastAPI dependency assembling a NoteFilter from the query string."""
    return NoteFilter(
        keyword=keyword,
        category=category,
        from_date=from_date,
        to_date=to_date,
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new meeting note. Title and content must not be empty.",
)
async def create_note(
    data: NoteCreate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = await service.create_note(data)
    return _note_response(note, request_id)


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description="Get every note, most recent meeting first.",
)
async def list_notes(
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List all notes."""
    notes = await service.get_all_notes()
    return _note_list_response(notes, request_id, NO_NOTES_MESSAGE)


@router.get(
    "/paginated",
    summary="List notes (paginated)",
    description="Get one page of notes with total count and pagination info.",
)
async def list_notes_paginated(
    service: NoteServiceDep,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    """List notes with offset pagination."""
    notes = await service.get_paginated_notes(
        limit=pagination.limit,
        offset=pagination.offset,
    )
    total = await service.count_notes()

    return create_paginated_response(
        items=notes,
        item_schema=NoteResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
        empty_message=NO_NOTES_MESSAGE,
    )


@router.get(
    "/search",
    response_model=ApiResponse[list[NoteResponse]],
    summary="Search notes",
    description="Search notes by keyword in title or content.",
)
async def search_notes(
    service: NoteServiceDep,
    request_id: RequestId,
    keyword: str = Query(
        default="",
        description="Keyword to look for (case-insensitive)",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """Search notes by keyword."""
    notes = await service.search_notes(keyword)
    return _note_list_response(notes, request_id, NO_SEARCH_MATCH_MESSAGE)


@router.get(
    "/filter",
    response_model=ApiResponse[list[NoteResponse]],
    summary="Filter notes",
    description="Filter notes by keyword, category and meeting date range.",
)
async def filter_notes(
    service: NoteServiceDep,
    request_id: RequestId,
    note_filter: NoteFilter = Depends(get_note_filter),
) -> ApiResponse[list[NoteResponse]]:
    """Filter notes."""
    notes = await service.filter_notes(note_filter)
    return _note_list_response(notes, request_id, NO_FILTER_MATCH_MESSAGE)


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: int,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = await service.get_note_by_id(note_id)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Replace title, content, category and meeting date of a note.",
)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    note = await service.update_note(note_id, data)
    return _note_response(note, request_id)


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[None],
    summary="Delete a note",
    description="Soft-delete a note. Deleted notes disappear from every read.",
)
async def delete_note(
    note_id: int,
    service: NoteServiceDep,
    request_id: RequestId,
) -> ApiResponse[None]:
    """Delete a note."""
    await service.delete_note(note_id)
    return ApiResponse(
        message="Note deleted",
        metadata=ResponseMetadata(request_id=request_id),
    )
