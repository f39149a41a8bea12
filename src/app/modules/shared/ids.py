"""Helpers for the UUID string identifiers used as primary keys."""

from uuid import UUID

from app.modules.shared.errors import NotFoundError


def is_uuid(value: object) -> bool:
    """True if ``value`` parses as a UUID."""
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def require_uuid(value: str, resource: str) -> str:
    """
    Normalize an identifier taken from a URL.

    A value that is not a UUID cannot name an existing row, so it is
    reported as not found rather than reaching the database.

    Raises:
        NotFoundError: If ``value`` is not a UUID
    """
    if not is_uuid(value):
        raise NotFoundError(resource, value)
    return str(UUID(str(value)))
