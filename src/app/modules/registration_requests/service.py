"""
Registration Requests Service Layer

Business logic for student registration requests.
Orchestrates repository operations, student creation, parent notifications
and decision emails.

This module implements:
1. Submission Flow:
   - Check required fields (blank values count as missing)
   - Check the class exists
   - Store the request as pending
   - Send an acknowledgement email to the parent (best effort)

2. Decision Flow (approve / reject), one transaction per decision:
   - Conditionally move the request out of pending (the UPDATE is the only
     arbiter between concurrent decisions)
   - Re-read the request
   - Find the parent account by email (case-insensitive, parent role only)
   - On approval, create exactly one Student and link it to the request
   - Notify the parent account if one exists
   - Commit; roll back everything on any failure
   - Send the decision email after commit (best effort)

3. Listing for administrators, newest submission first.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.email import (
    send_registration_approved,
    send_registration_received,
    send_registration_rejected,
)
from app.modules.classes.repository import ClassRepository
from app.modules.notifications.models import REQUEST_NOTIFICATION_TYPE
from app.modules.notifications.repository import NotificationRepository
from app.modules.registration_requests import repository
from app.modules.registration_requests.models import RegistrationRequest, RequestStatus
from app.modules.registration_requests.schemas import RegistrationRequestCreate
from app.modules.shared import (
    ConflictError,
    InvariantError,
    NotFoundError,
    ServiceError,
    StorageError,
    ValidationError,
    is_uuid,
)
from app.modules.students.repository import StudentRepository
from app.modules.users.models import UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("student_name", "parent_name", "parent_email", "class_id")

NOTIFICATION_TITLES = {
    RequestStatus.APPROVED: "Registration Approved",
    RequestStatus.REJECTED: "Registration Rejected",
}


def decision_message(student_name: str, status: RequestStatus) -> str:
    """Notification text for a decided request."""
    return f"Your registration request for {student_name} has been {status.value}."


class RequestAlreadyProcessedError(ConflictError):
    """Raised when a decision is attempted on a request that is no longer pending."""

    def __init__(self, request_id: str, current_status: RequestStatus):
        self.current_status = current_status
        super().__init__(
            message=(
                f"Registration request {request_id} has already been processed "
                f"(status: {current_status.value})."
            ),
            error_code="REQUEST_ALREADY_PROCESSED",
        )


async def _send_safely(send, **kwargs) -> None:
    """Send an email without letting a failure reach the caller."""
    try:
        sent = await send(**kwargs)
        if not sent:
            logger.error(f"Email to {kwargs.get('to_email')} was not sent")
    except Exception as e:
        logger.error(f"Exception sending email to {kwargs.get('to_email')}: {e}", exc_info=True)


# ============================================
# Submission
# ============================================


async def submit_request(
    db: AsyncSession,
    data: RegistrationRequestCreate,
) -> RegistrationRequest:
    """
    Store a new registration request as pending.

    Args:
        db: Database session
        data: Submitted fields

    Returns:
        The stored request

    Raises:
        ValidationError: If a required field is missing or the class does not exist
        StorageError: If the insert fails
    """
    missing = [name for name in REQUIRED_FIELDS if not getattr(data, name)]
    if missing:
        logger.warning(f"Registration request rejected, missing fields: {missing}")
        raise ValidationError(
            f"All required fields must be provided. Missing: {', '.join(missing)}"
        )

    if not is_uuid(data.class_id) or not await ClassRepository.exists(db, data.class_id):
        logger.warning(f"Registration request for unknown class {data.class_id}")
        raise ValidationError(f"Class {data.class_id} does not exist.", error_code="INVALID_CLASS")

    try:
        request = await repository.create(
            db,
            student_name=data.student_name,
            parent_name=data.parent_name,
            parent_email=str(data.parent_email),
            class_id=data.class_id,
            student_dob=data.student_dob,
            grade_level=data.grade_level,
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to store registration request: {e}", exc_info=True)
        raise StorageError() from e

    logger.info(f"Created registration request {request.id} for class {request.class_id}")

    await _send_safely(
        send_registration_received,
        to_email=request.parent_email,
        parent_name=request.parent_name,
        student_name=request.student_name,
    )

    return request


# ============================================
# Listing
# ============================================


async def list_requests(
    db: AsyncSession,
    status: RequestStatus | None = None,
) -> list[RegistrationRequest]:
    """
    List requests, newest submission first, pending and processed alike.

    Raises:
        StorageError: If the query fails
    """
    try:
        requests = await repository.list_requests(db, status=status)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list registration requests: {e}", exc_info=True)
        raise StorageError() from e

    logger.info(f"Listing {len(requests)} registration requests (status={status})")
    return requests


# ============================================
# Decisions
# ============================================


async def _decide(
    db: AsyncSession,
    request_id: str,
    admin_id: str,
    status: RequestStatus,
    reason: str | None = None,
) -> tuple[RegistrationRequest, str | None, bool]:
    """
    Apply a decision inside one transaction.

    Returns:
        (request, created student id or None, whether a parent was notified)
    """
    if not is_uuid(request_id):
        raise NotFoundError("Registration request", request_id)

    try:
        updated = await repository.mark_processed(
            db,
            request_id,
            status,
            processed_by=admin_id,
            processed_at=datetime.now(UTC),
            decision_reason=reason,
        )

        if not updated:
            current_status = await repository.get_status(db, request_id)
            if current_status is None:
                logger.warning(f"Registration request not found: {request_id}")
                raise NotFoundError("Registration request", request_id)
            logger.warning(
                f"Registration request {request_id} already processed "
                f"(status={current_status.value}, attempted={status.value})"
            )
            raise RequestAlreadyProcessedError(request_id, current_status)

        request = await repository.get_by_id(db, request_id, refresh=True)
        if request is None:
            raise InvariantError(f"Registration request {request_id} vanished after update.")

        parent = await UserRepository.get_by_email_and_role(
            db, request.parent_email, UserRole.PARENT
        )

        student_id = None
        if status == RequestStatus.APPROVED:
            student = await StudentRepository.create(
                db,
                student_name=request.student_name,
                parent_id=parent.id if parent else None,
                parent_name=request.parent_name,
                parent_email=request.parent_email,
                student_dob=request.student_dob,
                grade_level=request.grade_level,
                class_id=request.class_id,
            )
            await repository.attach_student(db, request, student.id)
            student_id = student.id

        if parent:
            await NotificationRepository.create(
                db,
                user_id=parent.id,
                title=NOTIFICATION_TITLES[status],
                message=decision_message(request.student_name, status),
                notification_type=REQUEST_NOTIFICATION_TYPE,
            )

        await db.commit()

    except ServiceError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Storage failure while deciding registration request {request_id}: {e}",
            exc_info=True,
        )
        raise StorageError() from e

    logger.info(
        f"Registration request {request_id} {status.value} by admin {admin_id} "
        f"(student={student_id}, parent_notified={parent is not None})"
    )
    return request, student_id, parent is not None


async def approve_request(
    db: AsyncSession,
    request_id: str,
    admin_id: str,
) -> dict:
    """
    Approve a pending request and create the student.

    A Student is created whether or not a parent account exists; it is
    linked to the parent (and the parent notified) only when one matches
    the request's email. All writes commit together or not at all. The
    decision email goes out after the commit.

    Args:
        db: Database session
        request_id: ID of the request
        admin_id: ID of the approving administrator

    Returns:
        Dict with id, status, student_id, parent_notified, message

    Raises:
        NotFoundError: If the request doesn't exist
        RequestAlreadyProcessedError: If the request is no longer pending
        StorageError: If any write fails (nothing is persisted)
    """
    logger.info(f"Admin {admin_id} approving registration request {request_id}")

    request, student_id, parent_notified = await _decide(
        db, request_id, admin_id, RequestStatus.APPROVED
    )

    await _send_safely(
        send_registration_approved,
        to_email=request.parent_email,
        parent_name=request.parent_name,
        student_name=request.student_name,
    )

    return {
        "id": request.id,
        "status": RequestStatus.APPROVED,
        "student_id": student_id,
        "parent_notified": parent_notified,
        "message": "Request approved and student added.",
    }


async def reject_request(
    db: AsyncSession,
    request_id: str,
    admin_id: str,
    reason: str | None = None,
) -> dict:
    """
    Reject a pending request. Never creates a student.

    Args:
        db: Database session
        request_id: ID of the request
        admin_id: ID of the rejecting administrator
        reason: Optional reason stored with the request and sent to the parent

    Returns:
        Dict with id, status, student_id (always None), parent_notified, message

    Raises:
        NotFoundError: If the request doesn't exist
        RequestAlreadyProcessedError: If the request is no longer pending
        StorageError: If any write fails (nothing is persisted)
    """
    logger.info(f"Admin {admin_id} rejecting registration request {request_id}")

    request, _, parent_notified = await _decide(
        db, request_id, admin_id, RequestStatus.REJECTED, reason=reason
    )

    await _send_safely(
        send_registration_rejected,
        to_email=request.parent_email,
        parent_name=request.parent_name,
        student_name=request.student_name,
        reason=reason,
    )

    message = (
        "Request rejected and parent notified."
        if parent_notified
        else "Request rejected. No parent account to notify."
    )
    return {
        "id": request.id,
        "status": RequestStatus.REJECTED,
        "student_id": None,
        "parent_notified": parent_notified,
        "message": message,
    }
