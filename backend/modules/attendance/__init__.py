"""
Attendance module.

Handles student self check-in and admin verification of attendance.

Public API:
- IAttendanceService: Interface for attendance operations
- Attendance models: AttendanceRecord, PendingAttendance, etc.
- Attendance exceptions: NoClassTodayError, AlreadyCheckedInError, etc.
"""

from .interfaces import IAttendanceService
from .models import (
    AttendanceRecord,
    AttendanceStatsResponse,
    AttendanceStatus,
    AttendanceSummary,
    BulkVerifyResult,
    PendingAttendance,
    StudentAttendanceOverview,
    StudentAttendanceStats,
)
from .exceptions import AlreadyCheckedInError, AttendanceNotFoundError, NoClassTodayError

__all__ = [
    "IAttendanceService",
    "AttendanceRecord",
    "AttendanceStatsResponse",
    "AttendanceStatus",
    "AttendanceSummary",
    "BulkVerifyResult",
    "PendingAttendance",
    "StudentAttendanceOverview",
    "StudentAttendanceStats",
    "AlreadyCheckedInError",
    "AttendanceNotFoundError",
    "NoClassTodayError",
]
