"""
Unit tests for the registration requests repository layer.

These tests focus on the status state machine and the conditional
update that guards decisions.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from app.modules.registration_requests import repository
from app.modules.registration_requests.models import RequestStatus
from app.modules.registration_requests.repository import (
    VALID_STATUS_TRANSITIONS,
    InvalidStatusTransitionError,
)


class TestStatusTransitions:
    """Tests for status transition state machine."""

    def test_pending_can_be_approved_or_rejected(self):
        valid = VALID_STATUS_TRANSITIONS[RequestStatus.PENDING]
        assert valid == {RequestStatus.APPROVED, RequestStatus.REJECTED}

    def test_terminal_states_have_no_transitions(self):
        """Decided requests never change again."""
        assert VALID_STATUS_TRANSITIONS[RequestStatus.APPROVED] == set()
        assert VALID_STATUS_TRANSITIONS[RequestStatus.REJECTED] == set()

    def test_all_statuses_are_in_transition_map(self):
        for status in RequestStatus:
            assert status in VALID_STATUS_TRANSITIONS


class TestInvalidStatusTransitionError:
    """Tests for InvalidStatusTransitionError."""

    def test_error_message_contains_both_statuses(self):
        error = InvalidStatusTransitionError(RequestStatus.APPROVED, RequestStatus.REJECTED)
        message = str(error)
        assert "approved -> rejected" in message
        assert "[]" in message

    def test_error_keeps_statuses(self):
        error = InvalidStatusTransitionError(RequestStatus.PENDING, RequestStatus.PENDING)
        assert error.current_status == RequestStatus.PENDING
        assert error.new_status == RequestStatus.PENDING


class TestMarkProcessed:
    """Tests for the guarded status update."""

    @pytest.mark.asyncio
    async def test_returns_true_when_a_pending_row_was_updated(self, mock_db):
        mock_db.execute = AsyncMock(return_value=MagicMock(rowcount=1))

        updated = await repository.mark_processed(
            mock_db,
            str(uuid4()),
            RequestStatus.APPROVED,
            processed_by=str(uuid4()),
            processed_at=datetime.now(UTC),
        )

        assert updated is True
        mock_db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_returns_false_when_no_pending_row_matched(self, mock_db):
        mock_db.execute = AsyncMock(return_value=MagicMock(rowcount=0))

        updated = await repository.mark_processed(
            mock_db,
            str(uuid4()),
            RequestStatus.REJECTED,
            processed_by=str(uuid4()),
            processed_at=datetime.now(UTC),
            decision_reason="Duplicate request",
        )

        assert updated is False

    @pytest.mark.asyncio
    async def test_rejects_pending_as_target(self, mock_db):
        with pytest.raises(InvalidStatusTransitionError):
            await repository.mark_processed(
                mock_db,
                str(uuid4()),
                RequestStatus.PENDING,
                processed_by=str(uuid4()),
                processed_at=datetime.now(UTC),
            )

        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_is_guarded_by_pending_status(self, mock_db):
        mock_db.execute = AsyncMock(return_value=MagicMock(rowcount=1))

        await repository.mark_processed(
            mock_db,
            str(uuid4()),
            RequestStatus.APPROVED,
            processed_by=str(uuid4()),
            processed_at=datetime.now(UTC),
        )

        statement = mock_db.execute.call_args.args[0]
        where = str(statement.whereclause)
        assert "registration_requests.status" in where
        assert "registration_requests.id" in where


class TestAttachStudent:
    @pytest.mark.asyncio
    async def test_sets_student_id_and_flushes(self, mock_db, sample_request_model):
        student_id = str(uuid4())

        result = await repository.attach_student(mock_db, sample_request_model, student_id)

        assert result.student_id == student_id
        mock_db.flush.assert_awaited_once()


def _compiled(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


class TestListRequests:
    @pytest.mark.asyncio
    async def test_orders_newest_submission_first(self, mock_db, sample_request_model):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [sample_request_model]
        mock_db.execute = AsyncMock(return_value=result)

        requests = await repository.list_requests(mock_db)

        assert requests == [sample_request_model]
        sql = _compiled(mock_db.execute.call_args.args[0])
        assert "ORDER BY registration_requests.submitted_at DESC" in sql

    @pytest.mark.asyncio
    async def test_no_status_condition_without_filter(self, mock_db):
        mock_db.execute = AsyncMock(return_value=MagicMock())

        await repository.list_requests(mock_db, status=None)

        sql = _compiled(mock_db.execute.call_args.args[0])
        assert "WHERE" not in sql
        assert "registration_requests.status =" not in sql

    @pytest.mark.asyncio
    async def test_filters_by_status(self, mock_db):
        mock_db.execute = AsyncMock(return_value=MagicMock())

        await repository.list_requests(mock_db, status=RequestStatus.PENDING)

        sql = _compiled(mock_db.execute.call_args.args[0])
        assert "WHERE registration_requests.status = " in sql
        assert sql.index("WHERE") < sql.index("ORDER BY")
