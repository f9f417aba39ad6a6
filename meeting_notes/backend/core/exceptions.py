"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Errors are matched by type, never by message text.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict | None = None,
        code: str = "VAL_VALIDATION_ERROR",
    ) -> None:
        self.details = details or {}
        super().__init__(message, code=code)


# =============================================================================
# Note domain errors
# =============================================================================


class NoteNotFoundError(NotFoundError):
    """Raised when no live note matches the requested identifier."""

    def __init__(self, message: str = "note not found") -> None:
        super().__init__(message)


class EmptyTitleError(ValidationError):
    """Raised when a note is created or updated with an empty title."""

    def __init__(self, message: str = "note title cannot be empty") -> None:
        super().__init__(
            message,
            details={"field": "title"},
            code="NOTE_EMPTY_TITLE",
        )


class EmptyContentError(ValidationError):
    """Raised when a note is created or updated with empty content."""

    def __init__(self, message: str = "note content cannot be empty") -> None:
        super().__init__(
            message,
            details={"field": "content"},
            code="NOTE_EMPTY_CONTENT",
        )


class EmptyKeywordError(ValidationError):
    """Raised when a keyword search is requested with a blank keyword."""

    def __init__(self, message: str = "search keyword cannot be empty") -> None:
        super().__init__(
            message,
            details={"field": "keyword"},
            code="NOTE_EMPTY_KEYWORD",
        )


class InvalidDateRangeError(ValidationError):
    """Raised when a filter's from-date is after its to-date."""

    def __init__(self, message: str = "fromDate must be before toDate") -> None:
        super().__init__(
            message,
            details={"fields": ["fromDate", "toDate"]},
            code="NOTE_INVALID_DATE_RANGE",
        )


class NoteOperationError(ApplicationError):
    """
    Opaque storage failure during a note operation.

    The message is safe to return to clients; the underlying driver
    error is only logged.
    """

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message, code=code)


class CreateFailedError(NoteOperationError):
    def __init__(self, message: str = "failed to create note") -> None:
        super().__init__(message, code="NOTE_CREATE_FAILED")


class RetrieveFailedError(NoteOperationError):
    def __init__(self, message: str = "failed to retrieve notes") -> None:
        super().__init__(message, code="NOTE_RETRIEVE_FAILED")


class UpdateFailedError(NoteOperationError):
    def __init__(self, message: str = "failed to update note") -> None:
        super().__init__(message, code="NOTE_UPDATE_FAILED")


class DeleteFailedError(NoteOperationError):
    def __init__(self, message: str = "failed to delete note") -> None:
        super().__init__(message, code="NOTE_DELETE_FAILED")


class SearchFailedError(NoteOperationError):
    def __init__(self, message: str = "failed to find notes") -> None:
        super().__init__(message, code="NOTE_SEARCH_FAILED")


class FilterFailedError(NoteOperationError):
    def __init__(self, message: str = "failed to filter notes") -> None:
        super().__init__(message, code="NOTE_FILTER_FAILED")
