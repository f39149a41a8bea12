"""
Shared fixtures.

Services are exercised against a mocked AsyncSession; repositories and
email senders are patched per test.
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.modules.registration_requests.models import RegistrationRequest, RequestStatus
from app.modules.registration_requests.schemas import RegistrationRequestCreate
from app.modules.users.models import User, UserRole


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def class_id():
    return str(uuid4())


@pytest.fixture
def admin_id():
    return str(uuid4())


@pytest.fixture
def request_id():
    return str(uuid4())


@pytest.fixture
def sample_request_create(class_id):
    """A complete submission using the camelCase keys the web form sends."""
    return RegistrationRequestCreate(
        studentName="Ama Mensah",
        parentName="Kofi Mensah",
        parentEmail="kofi@test.com",
        studentDob="2012-05-14",
        gradeLevel="S2",
        classId=class_id,
    )


@pytest.fixture
def sample_request_model(request_id, class_id):
    """A pending registration request."""
    request = MagicMock(spec=RegistrationRequest)
    request.id = request_id
    request.student_name = "Ama Mensah"
    request.parent_name = "Kofi Mensah"
    request.parent_email = "kofi@test.com"
    request.student_dob = date(2012, 5, 14)
    request.grade_level = "S2"
    request.class_id = class_id
    request.status = RequestStatus.PENDING
    request.submitted_at = datetime.now(UTC)
    request.processed_at = None
    request.processed_by = None
    request.decision_reason = None
    request.student_id = None
    return request


@pytest.fixture
def parent_user():
    """An active parent account."""
    user = MagicMock(spec=User)
    user.id = str(uuid4())
    user.email = "kofi@test.com"
    user.first_name = "Kofi"
    user.last_name = "Mensah"
    user.role = UserRole.PARENT
    user.is_active = True
    return user


@pytest.fixture
def admin_user(admin_id):
    """An active administrator."""
    user = MagicMock(spec=User)
    user.id = admin_id
    user.email = "admin@test.com"
    user.role = UserRole.ADMIN
    user.is_active = True
    return user
