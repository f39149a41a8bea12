"""
Unit tests for registration request schemas.
"""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.modules.registration_requests.models import RequestStatus
from app.modules.registration_requests.schemas import (
    DecisionResponse,
    RegistrationRequestCreate,
    RejectRequest,
)


class TestRegistrationRequestCreate:
    """Tests for the submission body."""

    def test_accepts_camel_case_keys(self):
        class_id = str(uuid4())
        data = RegistrationRequestCreate.model_validate(
            {
                "studentName": "Ama Mensah",
                "parentName": "Kofi Mensah",
                "parentEmail": "kofi@test.com",
                "classId": class_id,
                "gradeLevel": "S2",
            }
        )
        assert data.student_name == "Ama Mensah"
        assert data.class_id == class_id
        assert data.grade_level == "S2"

    def test_accepts_snake_case_keys(self):
        data = RegistrationRequestCreate.model_validate(
            {"student_name": "Ama Mensah", "parent_email": "kofi@test.com"}
        )
        assert data.student_name == "Ama Mensah"
        assert str(data.parent_email) == "kofi@test.com"

    def test_blank_strings_become_none(self):
        data = RegistrationRequestCreate.model_validate(
            {"studentName": "   ", "parentEmail": "", "studentDob": ""}
        )
        assert data.student_name is None
        assert data.parent_email is None
        assert data.student_dob is None

    def test_whitespace_is_stripped(self):
        data = RegistrationRequestCreate.model_validate({"parentName": "  Kofi Mensah  "})
        assert data.parent_name == "Kofi Mensah"

    def test_everything_is_optional(self):
        """Missing fields are reported by the service, not by the schema."""
        data = RegistrationRequestCreate.model_validate({})
        assert data.student_name is None
        assert data.class_id is None

    def test_malformed_email_is_rejected(self):
        with pytest.raises(ValidationError):
            RegistrationRequestCreate.model_validate({"parentEmail": "not-an-email"})


class TestDecisionSchemas:
    def test_reject_reason_is_optional(self):
        assert RejectRequest().reason is None

    def test_decision_response_serializes_status_value(self):
        response = DecisionResponse(
            id=str(uuid4()),
            status=RequestStatus.APPROVED,
            student_id=None,
            parent_notified=False,
            message="Request approved and student added.",
        )
        assert response.model_dump(mode="json")["status"] == "approved"
