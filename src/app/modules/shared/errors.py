"""
Service Error Taxonomy

Every error raised by a service or repository-facing helper carries a
human readable message, a stable machine readable code and the HTTP status
it maps to. Routers convert them with ``to_http_exception``; anything that
escapes a router is handled by the application-level exception handlers in
``app.main``.
"""

from fastapi import HTTPException, status


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when input is missing or refers to something that does not exist."""

    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class AuthenticationError(ServiceError):
    """Raised when credentials are wrong."""

    def __init__(
        self,
        message: str = "Invalid credentials.",
        error_code: str = "INVALID_CREDENTIALS",
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class PermissionDeniedError(ServiceError):
    """Raised when the caller may not perform an operation."""

    def __init__(self, message: str, error_code: str = "PERMISSION_DENIED"):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_403_FORBIDDEN,
        )


class NotFoundError(ServiceError):
    """Raised when a resource does not exist."""

    def __init__(self, resource: str, resource_id: object | None = None):
        message = f"{resource} {resource_id} not found" if resource_id else f"{resource} not found"
        error_code = f"{resource.upper().replace(' ', '_')}_NOT_FOUND"
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_404_NOT_FOUND,
        )


class ConflictError(ServiceError):
    """Raised when an operation conflicts with the current state."""

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_409_CONFLICT,
        )


class StorageError(ServiceError):
    """Raised when a persistence operation fails. Details stay in the server log."""

    def __init__(self, message: str = "A storage error occurred. Please try again."):
        super().__init__(
            message=message,
            error_code="STORAGE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class InvariantError(ServiceError):
    """Raised when data the operation just wrote is not where it must be."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="INVARIANT_VIOLATION",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error to an HTTPException with a structured detail."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )
