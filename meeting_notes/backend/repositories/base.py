"""
Base Repository.

Base class for repositories over soft-deletable models. Every read is
scoped to live rows; delete sets the tombstone instead of removing the row.

Storage errors (SQLAlchemyError) propagate unmodified. Classifying them
is the service layer's job.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_notes.backend.core.exceptions import NotFoundError
from meeting_notes.backend.core.utils import utc_now
from meeting_notes.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with soft-delete aware CRUD operations.

    Subclasses set the model class, which must carry an integer `id`
    and the SoftDeleteMixin columns:

        class NoteRepository(BaseRepository[Note]):
            model = Note
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _live(self) -> Select[Any]:
        """Select statement restricted to rows without a tombstone."""
        return select(self.model).where(self.model.is_deleted == False)  # noqa: E712

    async def get_by_id(self, id: int) -> ModelType:
        """
        Get a single live record by ID.

        Raises:
            NotFoundError: If no live record has this ID
        """
        result = await self.session.execute(
            self._live().where(self.model.id == id)
        )
        instance = result.scalar_one_or_none()

        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")

        return instance

    async def get_all(self) -> list[ModelType]:
        """Get every live record, in storage order."""
        result = await self.session.execute(self._live())
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count live records."""
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.is_deleted == False)  # noqa: E712
        )
        return result.scalar_one()

    async def create(self, instance: ModelType) -> ModelType:
        """Persist a new record; the primary key is populated on return."""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def save(self, instance: ModelType) -> ModelType:
        """Write back all attribute changes on an existing record."""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def soft_delete(self, id: int) -> None:
        """Set the tombstone on a live record. Missing IDs are a no-op."""
        await self.session.execute(
            update(self.model)
            .where(self.model.id == id)
            .where(self.model.is_deleted == False)  # noqa: E712
            .values(is_deleted=True, deleted_at=utc_now())
        )
        await self.session.flush()
