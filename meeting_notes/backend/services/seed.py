"""
Sample Data.

Inserts a small set of meeting notes through NoteService so that seeded
rows pass the same validation as API-created ones.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from meeting_notes.backend.core.logging import get_logger
from meeting_notes.backend.models.note import Note
from meeting_notes.backend.schemas.note import NoteCreate
from meeting_notes.backend.services.note import NoteService

logger = get_logger(__name__)

SEED_NOTES: tuple[NoteCreate, ...] = (
    NoteCreate(
        title="Performance Review",
        content="Went over my performance over the year with my boss",
        category="1:1",
        meeting_date=datetime(2025, 4, 1, 13, 30),
    ),
    NoteCreate(
        title="Team Standup",
        content="Went over items in the current sprint",
        category="Standup",
        meeting_date=datetime(2025, 5, 10, 14, 30),
    ),
    NoteCreate(
        title="All-Hands Meeting",
        content="Quarterly meeting covering recent company news or updates",
        category="Company-wide",
        meeting_date=datetime(2025, 6, 15, 10, 30),
    ),
)


async def seed_notes(session: AsyncSession) -> list[Note]:
    """
    Create the sample notes in the given session.

    Does nothing and returns an empty list when live notes already exist,
    so repeated runs never duplicate the samples. The caller owns the
    transaction and decides whether to commit. Stops at the first failure
    and lets the error propagate.
    """
    service = NoteService(session)
    existing = await service.count_notes()
    if existing:
        logger.info("Notes already present, skipping seed", extra={"existing": existing})
        return []

    created = []
    for data in SEED_NOTES:
        created.append(await service.create_note(data))

    logger.info("Seeded initial notes", extra={"count": len(created)})
    return created
