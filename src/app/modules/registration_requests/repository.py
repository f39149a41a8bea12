"""
Registration Requests Repository

Database operations for student registration requests.
Functions flush but never commit; the service owns the transaction so that
a decision and its side effects (student, notification) commit together.

Design Principles:
- All queries are parameterized (no SQL injection)
- Status changes go through a conditional UPDATE guarded by the current
  status, so concurrent decisions on one request cannot both succeed
- Timezone-aware datetime handling (UTC)
"""

from datetime import date, datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import RegistrationRequest, RequestStatus


async def create(
    db: AsyncSession,
    *,
    student_name: str,
    parent_name: str,
    parent_email: str,
    class_id: str,
    student_dob: date | None = None,
    grade_level: str | None = None,
) -> RegistrationRequest:
    """Create a new pending registration request."""

    new_request = RegistrationRequest(
        student_name=student_name,
        parent_name=parent_name,
        parent_email=parent_email,
        class_id=class_id,
        student_dob=student_dob,
        grade_level=grade_level,
        status=RequestStatus.PENDING,
    )

    db.add(new_request)
    await db.flush()
    await db.refresh(new_request)

    return new_request


async def get_by_id(
    db: AsyncSession,
    id: str,
    *,
    refresh: bool = False,
) -> RegistrationRequest | None:
    """
    Get a request by ID.

    Args:
        db: Database session
        id: Request ID
        refresh: Overwrite any copy already in the session with the row
            as it is now (needed after a bulk UPDATE)
    """
    query = select(RegistrationRequest).where(RegistrationRequest.id == str(id))
    if refresh:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_status(db: AsyncSession, id: str) -> RequestStatus | None:
    """Current status of a request, or None if it does not exist."""
    result = await db.execute(
        select(RegistrationRequest.status).where(RegistrationRequest.id == str(id))
    )
    return result.scalar_one_or_none()


async def list_requests(
    db: AsyncSession,
    status: RequestStatus | None = None,
) -> list[RegistrationRequest]:
    """List requests, newest submission first, optionally filtered by status."""
    query = select(RegistrationRequest)
    if status is not None:
        query = query.where(RegistrationRequest.status == status)
    query = query.order_by(RegistrationRequest.submitted_at.desc(), RegistrationRequest.id)

    result = await db.execute(query)
    return list(result.scalars().all())


async def count(db: AsyncSession, status: RequestStatus | None = None) -> int:
    """Count requests, optionally restricted to one status."""
    query = select(func.count()).select_from(RegistrationRequest)
    if status is not None:
        query = query.where(RegistrationRequest.status == status)
    result = await db.execute(query)
    return result.scalar() or 0


# Valid status transitions - a request is decided exactly once
VALID_STATUS_TRANSITIONS: dict[RequestStatus, set[RequestStatus]] = {
    RequestStatus.PENDING: {
        RequestStatus.APPROVED,
        RequestStatus.REJECTED,
    },
    # Terminal states - no transitions allowed
    RequestStatus.APPROVED: set(),
    RequestStatus.REJECTED: set(),
}


class InvalidStatusTransitionError(ValueError):
    """Raised when an invalid status transition is attempted."""

    def __init__(
        self,
        current_status: RequestStatus,
        new_status: RequestStatus,
    ):
        self.current_status = current_status
        self.new_status = new_status
        valid_transitions = VALID_STATUS_TRANSITIONS.get(current_status, set())
        super().__init__(
            f"Invalid status transition: {current_status.value} -> {new_status.value}. "
            f"Valid transitions: {sorted(s.value for s in valid_transitions)}"
        )


async def mark_processed(
    db: AsyncSession,
    id: str,
    status: RequestStatus,
    *,
    processed_by: str,
    processed_at: datetime,
    decision_reason: str | None = None,
) -> bool:
    """
    Move a pending request to a decided status.

    Issues ``UPDATE ... WHERE id = :id AND status = 'pending'``. The row lock
    taken by the UPDATE serializes concurrent decisions: only the first one
    matches, later ones see zero affected rows.

    Args:
        db: Database session
        id: Request ID
        status: APPROVED or REJECTED
        processed_by: ID of the deciding administrator
        processed_at: Decision timestamp
        decision_reason: Optional reason (rejections)

    Returns:
        True if the request was pending and is now decided, False if no
        pending request with that ID exists

    Raises:
        InvalidStatusTransitionError: If ``status`` is not reachable from pending
    """
    if status not in VALID_STATUS_TRANSITIONS[RequestStatus.PENDING]:
        raise InvalidStatusTransitionError(RequestStatus.PENDING, status)

    result = await db.execute(
        update(RegistrationRequest)
        .where(
            RegistrationRequest.id == str(id),
            RegistrationRequest.status == RequestStatus.PENDING,
        )
        .values(
            status=status,
            processed_at=processed_at,
            processed_by=str(processed_by),
            decision_reason=decision_reason,
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def attach_student(
    db: AsyncSession,
    request: RegistrationRequest,
    student_id: str,
) -> RegistrationRequest:
    """Record the student created from an approved request."""
    request.student_id = str(student_id)
    await db.flush()
    return request
