"""Attendance module - Daily attendance per class."""

from app.modules.attendance.models import Attendance, AttendanceStatus
from app.modules.attendance.repository import AttendanceRepository

__all__ = ["Attendance", "AttendanceStatus", "AttendanceRepository"]
