"""
Unit Tests for Base Service.

Tests the BaseService class methods and error handling.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from meeting_notes.backend.core.exceptions import (
    CreateFailedError,
    EmptyTitleError,
    NoteOperationError,
    SearchFailedError,
)
from meeting_notes.backend.services.base import BaseService


class TestBaseServiceInit:
    """Tests for BaseService initialization."""

    def test_init_stores_session(self):
        """Should store the provided session."""
        mock_session = AsyncMock()

        service = BaseService(mock_session)

        assert service._session is mock_session
        assert service.session is mock_session

    def test_init_creates_logger(self):
        """Should create a logger for the service."""
        service = BaseService(AsyncMock())

        assert service._logger is not None


class TestExecuteDbOperation:
    """Tests for _execute_db_operation method."""

    @pytest.fixture
    def service(self):
        """Create a BaseService instance with a mock logger."""
        service = BaseService(AsyncMock())
        service._logger = MagicMock()
        return service

    @pytest.mark.asyncio
    async def test_returns_result_on_success(self, service):
        """Should return the awaitable's result on success."""
        async def successful_operation():
            return {"id": 1, "title": "Standup"}

        result = await service._execute_db_operation(
            "test_operation",
            successful_operation(),
            CreateFailedError,
        )

        assert result == {"id": 1, "title": "Standup"}

    @pytest.mark.asyncio
    async def test_sqlalchemy_error_becomes_failure(self, service):
        """Should raise the supplied failure type on storage errors."""
        async def failing_operation():
            raise SQLAlchemyError("Connection lost")

        with pytest.raises(SearchFailedError) as exc_info:
            await service._execute_db_operation(
                "search_notes",
                failing_operation(),
                SearchFailedError,
            )

        assert exc_info.value.code == "NOTE_SEARCH_FAILED"
        assert "Connection lost" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_failure(self, service):
        """Constraint violations are storage failures like any other."""
        async def failing_operation():
            raise IntegrityError("statement", {}, Exception("NOT NULL constraint failed"))

        with pytest.raises(CreateFailedError):
            await service._execute_db_operation(
                "create_note",
                failing_operation(),
                CreateFailedError,
            )

    @pytest.mark.asyncio
    async def test_driver_error_logged(self, service):
        """The original error text goes to the log, not to the caller."""
        async def failing_operation():
            raise SQLAlchemyError("Connection lost")

        with pytest.raises(NoteOperationError):
            await service._execute_db_operation(
                "count_notes",
                failing_operation(),
                CreateFailedError,
            )

        service._logger.error.assert_called_once()
        extra = service._logger.error.call_args[1]["extra"]
        assert extra["operation"] == "count_notes"
        assert "Connection lost" in extra["error"]

    @pytest.mark.asyncio
    async def test_application_errors_pass_through(self, service):
        """Errors that are not storage errors are not reclassified."""
        async def failing_operation():
            raise EmptyTitleError()

        with pytest.raises(EmptyTitleError):
            await service._execute_db_operation(
                "create_note",
                failing_operation(),
                CreateFailedError,
            )

        service._logger.error.assert_not_called()


class TestLoggingMethods:
    """Tests for logging helper methods."""

    @pytest.fixture
    def service(self):
        """Create a BaseService instance with a mock logger."""
        service = BaseService(AsyncMock())
        service._logger = MagicMock()
        return service

    def test_log_operation_includes_service_name(self, service):
        """Should include service class name in log context."""
        service._log_operation("Creating note", title="Standup")

        service._logger.info.assert_called_once()
        extra = service._logger.info.call_args[1]["extra"]
        assert extra["service"] == "BaseService"
        assert extra["title"] == "Standup"

    def test_log_debug_includes_service_name(self, service):
        """Should include service class name in debug log context."""
        service._log_debug("Processing step", step=1)

        service._logger.debug.assert_called_once()
        extra = service._logger.debug.call_args[1]["extra"]
        assert extra["service"] == "BaseService"
        assert extra["step"] == 1


class TestServiceInheritance:
    """Tests for service inheritance patterns."""

    def test_subclass_can_access_session(self):
        """Subclass should be able to access the session."""
        class MyService(BaseService):
            def get_session(self):
                return self.session

        mock_session = AsyncMock()
        service = MyService(mock_session)

        assert service.get_session() is mock_session

    def test_subclass_logger_named_after_module(self):
        """Subclass loggers are created from the subclass's module."""
        class MyService(BaseService):
            pass

        service = MyService(AsyncMock())

        assert service._logger is not None
