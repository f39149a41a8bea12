"""Attendance schemas."""

import datetime

from pydantic import BaseModel, ConfigDict

from app.modules.attendance.models import AttendanceStatus


class AttendanceMark(BaseModel):
    student_id: str
    status: AttendanceStatus


class AttendanceSubmit(BaseModel):
    """Request body for POST /classes/{class_id}/attendance."""

    date: datetime.date
    attendance: list[AttendanceMark]


class AttendanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    class_id: str
    date: datetime.date
    status: AttendanceStatus


class AttendanceOverviewResponse(AttendanceResponse):
    """Attendance with student and class names, for the dashboard."""

    student_name: str | None = None
    class_name: str | None = None
    class_level: str | None = None
