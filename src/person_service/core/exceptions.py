"""Custom exceptions for the person service.

Every exception that reaches the HTTP layer carries a human readable message,
a stable error code and the HTTP status it maps to. The application-level
exception handler renders them as ``{"message": ..., "errorCode": ...}``.
"""

from typing import Any


class PersonServiceException(Exception):
    """Base exception class for the person service."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(PersonServiceException):
    """Raised when path parameters or the request body are malformed or incomplete."""

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, error_code=error_code, status_code=400, details=details)


class NotFoundError(PersonServiceException):
    """Raised when a person, attribute or key does not exist."""

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, error_code=error_code, status_code=404, details=details)


class AuthenticationError(PersonServiceException):
    """Raised when the API key is missing, malformed or not recognised."""

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, error_code=error_code, status_code=401, details=details)


class ServiceUnavailableError(PersonServiceException):
    """Raised when a subsystem is not configured well enough to serve requests."""

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, error_code=error_code, status_code=503, details=details)


class InternalError(PersonServiceException):
    """Raised when a storage operation fails.

    The message stays generic; the error code identifies the failed operation.
    """

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, error_code=error_code, status_code=500, details=details)


class AuditError(PersonServiceException):
    """Raised when an audit record cannot be written.

    Never rendered to clients: the attribute service logs and drops it.
    """

    def __init__(self, trace_id: str, reason: str, error_code: str):
        super().__init__(
            message=f"Failed to write audit record for trace '{trace_id}': {reason}",
            error_code=error_code,
            status_code=500,
            details={"trace_id": trace_id},
        )
