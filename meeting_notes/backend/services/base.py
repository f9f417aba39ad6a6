"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, validate input, and are the single
place where raw storage errors are classified into application errors.

Usage:
    from meeting_notes.backend.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)

        async def create_note(self, data: NoteCreate) -> Note:
            if data.title == "":
                raise EmptyTitleError()
            return await self._execute_db_operation(
                "create_note", self.repo.create(Note(...)), CreateFailedError,
            )
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_notes.backend.core.exceptions import ApplicationError
from meeting_notes.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Translation of storage errors into opaque application errors

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        failure: Callable[[], ApplicationError],
    ) -> T:
        """
        Execute a database operation with error handling.

        The driver error is logged with the operation name and replaced
        by `failure()`, so nothing from the storage layer reaches clients.
        Application errors raised by the repository pass through untouched.

        Args:
            operation: Description of the operation for logging
            coro: Awaitable to execute
            failure: Factory for the error raised on storage failure

        Returns:
            Result of the awaitable
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise failure()

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
