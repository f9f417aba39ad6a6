"""
Note Schemas.

Pydantic schemas for note API request/response validation.

Title and content are deliberately allowed to be empty here: emptiness
is a domain rule checked by NoteService so that it surfaces as
EmptyTitleError / EmptyContentError rather than a generic request error.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from meeting_notes.backend.core.utils import to_naive_utc, to_utc_iso


class NoteWrite(BaseModel):
    """Fields accepted when creating or replacing a note."""

    title: str = Field(
        ...,
        description="Note title",
        examples=["Team Standup"],
    )
    content: str = Field(
        ...,
        description="Note content",
        examples=["Went over items in the current sprint"],
    )
    category: str | None = Field(
        default=None,
        description="Meeting category, matched exactly by filters",
        examples=["Standup"],
    )
    meeting_date: datetime = Field(
        ...,
        validation_alias=AliasChoices("meeting_date", "meetingDate"),
        description="When the meeting took place (ISO-8601)",
        examples=["2025-05-10T14:30:00Z"],
    )

    @field_validator("meeting_date")
    @classmethod
    def _normalize_meeting_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class NoteCreate(NoteWrite):
    """Schema for creating a new note."""


class NoteUpdate(NoteWrite):
    """Schema for replacing the editable fields of an existing note."""


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: int = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    category: str | None = Field(description="Meeting category")
    meeting_date: datetime = Field(description="Meeting timestamp (UTC)")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("meeting_date", "created_at", "updated_at", when_used="json")
    def _serialize_utc(self, value: datetime) -> str:
        return to_utc_iso(value)


class NoteFilter(BaseModel):
    """
    Ephemeral query descriptor for filtering notes.

    Every populated field narrows the result; empty strings and None
    impose no constraint. Date bounds are inclusive.
    """

    keyword: str = ""
    category: str = ""
    from_date: datetime | None = None
    to_date: datetime | None = None

    @field_validator("from_date", "to_date")
    @classmethod
    def _normalize_bounds(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)
