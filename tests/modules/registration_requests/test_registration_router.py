"""
HTTP tests for the registration request endpoints.

The database session is replaced with a mock through dependency overrides;
the real auth guard runs unless a test overrides it.
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.core import rate_limit
from app.core.auth import require_admin
from app.core.database import get_db
from app.core.security import create_access_token
from app.main import app
from app.modules.registration_requests.models import RequestStatus
from app.modules.registration_requests.service import RequestAlreadyProcessedError
from app.modules.shared import NotFoundError

SERVICE = "app.modules.registration_requests.router.service"

ADMIN_ENDPOINTS = [
    ("get", "/api/registration-requests"),
    ("patch", "/api/registration-requests/{id}/approve"),
    ("patch", "/api/registration-requests/{id}/reject"),
]


@pytest.fixture(autouse=True)
def clear_rate_limits():
    rate_limit._memory_store.clear()
    yield
    rate_limit._memory_store.clear()


@pytest.fixture
def client(mock_db):
    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def as_admin(admin_user):
    app.dependency_overrides[require_admin] = lambda: admin_user
    return admin_user


def _call(client: TestClient, method: str, path: str, **kwargs):
    return getattr(client, method)(path.format(id=uuid4()), **kwargs)


class TestAdminEndpointsAccess:
    @pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
    def test_requires_token(self, client, method, path):
        response = _call(client, method, path)

        assert response.status_code == 401
        assert response.json()["detail"]["error"] == "AUTHENTICATION_REQUIRED"

    @pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
    def test_parent_token_is_forbidden(self, client, parent_user, method, path):
        token = create_access_token(parent_user.id)

        lookup = AsyncMock(return_value=parent_user)
        with patch("app.core.auth.UserRepository.get_by_id", new=lookup):
            response = _call(client, method, path, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403
        assert response.json()["detail"]["error"] == "INSUFFICIENT_PERMISSIONS"


class TestSubmit:
    def test_missing_fields_return_400(self, client):
        response = client.post("/api/registration-request", json={"studentName": "Ama"})

        assert response.status_code == 400
        body = response.json()["detail"]
        assert body["error"] == "VALIDATION_ERROR"
        assert "parent_email" in body["message"]

    def test_created_request_returns_201(self, client):
        stored = MagicMock(id=str(uuid4()), status=RequestStatus.PENDING)

        with patch(SERVICE) as mock_service:
            mock_service.submit_request = AsyncMock(return_value=stored)

            response = client.post(
                "/api/registration-request",
                json={
                    "studentName": "Ama Mensah",
                    "parentName": "Kofi Mensah",
                    "parentEmail": "kofi@test.com",
                    "classId": str(uuid4()),
                },
            )

        assert response.status_code == 201
        assert response.json() == {
            "id": stored.id,
            "status": "pending",
            "message": "Registration request submitted",
        }

    def test_submissions_are_rate_limited_per_address(self, client):
        stored = MagicMock(id=str(uuid4()), status=RequestStatus.PENDING)

        with patch(SERVICE) as mock_service:
            mock_service.submit_request = AsyncMock(return_value=stored)
            codes = [
                client.post("/api/registration-request", json={}).status_code for _ in range(6)
            ]

        assert codes[:5] == [201] * 5
        assert codes[5] == 429


class TestList:
    def test_admin_gets_requests(self, client, as_admin, sample_request_model):
        with patch(SERVICE) as mock_service:
            mock_service.list_requests = AsyncMock(return_value=[sample_request_model])

            response = client.get("/api/registration-requests")

        assert response.status_code == 200
        [item] = response.json()
        assert item["id"] == sample_request_model.id
        assert item["status"] == "pending"
        mock_service.list_requests.assert_awaited_once()
        assert mock_service.list_requests.call_args.kwargs["status"] is None


class TestDecisions:
    @pytest.mark.parametrize("action", ["approve", "reject"])
    def test_unknown_request_returns_404(self, client, as_admin, action):
        with patch(SERVICE) as mock_service:
            setattr(
                mock_service,
                f"{action}_request",
                AsyncMock(side_effect=NotFoundError("Registration request", "x")),
            )

            response = client.patch(f"/api/registration-requests/{uuid4()}/{action}")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "REGISTRATION_REQUEST_NOT_FOUND"

    @pytest.mark.parametrize("action", ["approve", "reject"])
    def test_processed_request_returns_409(self, client, as_admin, action):
        request_id = str(uuid4())
        error = RequestAlreadyProcessedError(request_id, RequestStatus.APPROVED)

        with patch(SERVICE) as mock_service:
            setattr(mock_service, f"{action}_request", AsyncMock(side_effect=error))

            response = client.patch(f"/api/registration-requests/{request_id}/{action}")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "REQUEST_ALREADY_PROCESSED"

    def test_approve_returns_decision(self, client, as_admin):
        request_id = str(uuid4())
        student_id = str(uuid4())

        with patch(SERVICE) as mock_service:
            mock_service.approve_request = AsyncMock(
                return_value={
                    "id": request_id,
                    "status": RequestStatus.APPROVED,
                    "student_id": student_id,
                    "parent_notified": True,
                    "message": "Request approved and student added.",
                }
            )

            response = client.patch(f"/api/registration-requests/{request_id}/approve")

        assert response.status_code == 200
        assert response.json()["student_id"] == student_id
        mock_service.approve_request.assert_awaited_once()
        assert mock_service.approve_request.call_args.args[1:] == (request_id, as_admin.id)

    def test_reject_passes_reason(self, client, as_admin):
        request_id = str(uuid4())

        with patch(SERVICE) as mock_service:
            mock_service.reject_request = AsyncMock(
                return_value={
                    "id": request_id,
                    "status": RequestStatus.REJECTED,
                    "student_id": None,
                    "parent_notified": False,
                    "message": "Request rejected.",
                }
            )

            response = client.patch(
                f"/api/registration-requests/{request_id}/reject",
                json={"reason": "Class is full"},
            )

        assert response.status_code == 200
        assert response.json()["status"] == "rejected"
        assert mock_service.reject_request.call_args.kwargs["reason"] == "Class is full"
