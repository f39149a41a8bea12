"""
Registration Requests Router

API endpoints for the student registration workflow.

Endpoints:
- POST /registration-request - Submit a request (public)
- GET /registration-requests - List requests (admin)
- PATCH /registration-requests/{id}/approve - Approve and create the student (admin)
- PATCH /registration-requests/{id}/reject - Reject (admin)

Security:
- Submission is public and rate limited per client IP
- Decisions require an admin token and are rate limited per admin
- Input validation via Pydantic schemas
- Service errors are converted to structured HTTP errors here
"""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_admin
from app.core.database import get_db
from app.core.rate_limit import client_ip, enforce_rate_limit
from app.modules.registration_requests import service
from app.modules.registration_requests.models import RequestStatus
from app.modules.registration_requests.schemas import (
    DecisionResponse,
    RegistrationRequestCreate,
    RegistrationRequestResponse,
    RegistrationRequestSubmitted,
    RejectRequest,
)
from app.modules.shared import ServiceError, to_http_exception
from app.modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Rate Limiting Configuration
# ============================================

RATE_LIMIT_SUBMIT = (5, 3600)  # 5 submissions per hour per IP
RATE_LIMIT_APPROVE = (30, 60)  # 30 approvals per minute per admin
RATE_LIMIT_REJECT = (30, 60)  # 30 rejections per minute per admin


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error while trying to {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


@router.post(
    "/registration-request",
    response_model=RegistrationRequestSubmitted,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Student Registration Request",
    description="""
Submit a registration request for a student. Public endpoint used by parents.

Required: `studentName`, `parentName`, `parentEmail`, `classId`
(snake_case keys are accepted too). Blank values count as missing.

The request waits as `pending` until an administrator approves or rejects it.
""",
    responses={
        400: {"description": "Missing required fields or unknown class"},
        429: {"description": "Too many submissions from this address"},
        500: {"description": "Storage failure"},
    },
)
async def submit_registration_request(
    request: Request,
    data: RegistrationRequestCreate,
    db: AsyncSession = Depends(get_db),
) -> RegistrationRequestSubmitted:
    """Submit a new registration request."""
    await enforce_rate_limit(f"registration:submit:{client_ip(request)}", *RATE_LIMIT_SUBMIT)

    try:
        registration = await service.submit_request(db, data)
        return RegistrationRequestSubmitted(
            id=registration.id,
            status=registration.status,
            message="Registration request submitted",
        )
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("submit a registration request", e) from e


@router.get(
    "/registration-requests",
    response_model=list[RegistrationRequestResponse],
    summary="List Registration Requests",
    description="""
List all registration requests, newest submission first, including processed ones.

**Access:** Admin only
""",
)
async def list_registration_requests(
    status_filter: RequestStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> list[RegistrationRequestResponse]:
    """List registration requests."""
    try:
        requests = await service.list_requests(db, status=status_filter)
        return [RegistrationRequestResponse.model_validate(r) for r in requests]
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise _internal_error("list registration requests", e) from e


@router.patch(
    "/registration-requests/{request_id}/approve",
    response_model=DecisionResponse,
    summary="Approve Registration Request",
    description="""
Approve a pending request. In one transaction this marks the request
`approved`, creates the Student record and, when a parent account with the
request's email exists, links the student to it and notifies the parent.

**Access:** Admin only
""",
    responses={
        404: {"description": "Request not found"},
        409: {"description": "Request already processed"},
        500: {"description": "Storage failure, nothing was changed"},
    },
)
async def approve_registration_request(
    request_id: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> DecisionResponse:
    """Approve a registration request."""
    await enforce_rate_limit(f"admin:approve:{admin.id}", *RATE_LIMIT_APPROVE)

    try:
        result = await service.approve_request(db, request_id, admin.id)
        return DecisionResponse(**result)
    except ServiceError as e:
        logger.warning(f"Approve of {request_id} by {admin.id} failed: {e.error_code}")
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("approve a registration request", e) from e


@router.patch(
    "/registration-requests/{request_id}/reject",
    response_model=DecisionResponse,
    summary="Reject Registration Request",
    description="""
Reject a pending request with an optional reason. No student is created.
The parent account, if one exists, is notified.

**Access:** Admin only
""",
    responses={
        404: {"description": "Request not found"},
        409: {"description": "Request already processed"},
        500: {"description": "Storage failure, nothing was changed"},
    },
)
async def reject_registration_request(
    request_id: str,
    data: RejectRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> DecisionResponse:
    """Reject a registration request."""
    await enforce_rate_limit(f"admin:reject:{admin.id}", *RATE_LIMIT_REJECT)

    reason = data.reason if data else None

    try:
        result = await service.reject_request(db, request_id, admin.id, reason=reason)
        return DecisionResponse(**result)
    except ServiceError as e:
        logger.warning(f"Reject of {request_id} by {admin.id} failed: {e.error_code}")
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise _internal_error("reject a registration request", e) from e
