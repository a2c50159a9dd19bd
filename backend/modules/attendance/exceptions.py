"""
Attendance module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class NoClassTodayError(ConflictError):
    """Raised when a student checks in on a day without a scheduled class."""

    def __init__(self):
        super().__init__(
            "There is no class scheduled for your cohort today.",
            code="NO_CLASS_TODAY",
        )


class AlreadyCheckedInError(ConflictError):
    """Raised when a student checks in twice for the same day."""

    def __init__(self, student_id: str):
        super().__init__(
            "You have already checked in for today.",
            code="ALREADY_CHECKED_IN",
            details={"student_id": student_id},
        )


class AttendanceNotFoundError(NotFoundError):
    """Raised when an attendance record does not exist."""

    def __init__(self, attendance_id: str):
        super().__init__(
            f"Attendance record not found: {attendance_id}",
            code="ATTENDANCE_NOT_FOUND",
            details={"attendance_id": attendance_id},
        )
