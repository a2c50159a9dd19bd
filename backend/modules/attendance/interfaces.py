"""
Attendance module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import StudentRecord

from .models import (
    AttendanceRecord,
    AttendanceStatsResponse,
    AttendanceSummary,
    BulkVerifyResult,
    PendingAttendance,
    StudentAttendanceOverview,
)


@runtime_checkable
class IAttendanceService(Protocol):
    """Interface for attendance operations."""

    async def student_overview(self, student: StudentRecord) -> StudentAttendanceOverview:
        """History, totals and today's check-in state for one student."""
        ...

    async def check_in(self, student: StudentRecord) -> AttendanceRecord:
        """
        Record an unverified PRESENT check-in for today's class.

        Raises:
            NoClassTodayError: If the student's cohort has no class today
            AlreadyCheckedInError: If the student already checked in today
        """
        ...

    async def summary(self) -> AttendanceSummary:
        ...

    async def pending_queue(self) -> list[PendingAttendance]:
        """Unverified check-ins, newest first, with student and cohort names."""
        ...

    async def student_stats(self) -> AttendanceStatsResponse:
        """Per-student attendance percentages and the low-attendance count."""
        ...

    async def verify(self, attendance_id: str) -> None:
        """
        Raises:
            AttendanceNotFoundError: If no record has this id
        """
        ...

    async def decline(self, attendance_id: str) -> None:
        """
        Delete an unverified check-in.

        Raises:
            AttendanceNotFoundError: If no record has this id
        """
        ...

    async def verify_all_pending(self) -> BulkVerifyResult:
        ...

    async def history_for(self, student_id: str) -> list[AttendanceRecord]:
        ...
