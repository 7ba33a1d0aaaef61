"""Custom exception classes for the course image service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_COURSE_LOOKUP_FAILED,
    ERROR_CODE_FORBIDDEN,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_STORAGE_NOT_CONFIGURED,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_VALIDATION_FAILED,
)


class CourseStorageError(Exception):
    """
    Base exception for all course image service errors.

    Subclasses set ``default_error_code``; the base class has none, so
    raising it directly requires an explicit ``error_code``.
    Optional contextual information can be supplied via `details`.
    """

    default_error_code: str | None = None

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        code = error_code or self.default_error_code
        if code is None:
            raise TypeError(f"{type(self).__name__} requires an error_code")

        self.message = message
        self.error_code = code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(CourseStorageError):
    """Raised when request or upload input validation fails."""

    default_error_code = ERROR_CODE_VALIDATION_FAILED


class NotFoundError(CourseStorageError):
    """Raised when a requested resource is not found."""

    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class UnauthorizedError(CourseStorageError):
    """Raised when the caller identity is missing."""

    default_error_code = ERROR_CODE_UNAUTHORIZED


class ForbiddenError(CourseStorageError):
    """Raised when the caller may not modify the requested course."""

    default_error_code = ERROR_CODE_FORBIDDEN


class ConfigurationError(CourseStorageError):
    """Raised when the storage backend cannot be built from configuration."""

    default_error_code = ERROR_CODE_STORAGE_NOT_CONFIGURED


class StorageProviderError(CourseStorageError):
    """Raised when a storage backend operation fails.

    This is the only error type that crosses the storage provider boundary;
    the backend SDK exception is kept as ``__cause__``.
    """

    default_error_code = ERROR_CODE_STORAGE

    @property
    def provider(self) -> str | None:
        return self.details.get("provider")

    @property
    def stage(self) -> str | None:
        return self.details.get("stage")


class CourseLookupFailedError(CourseStorageError):
    """Raised when the course document store cannot be read."""

    default_error_code = ERROR_CODE_COURSE_LOOKUP_FAILED
