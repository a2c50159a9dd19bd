"""
Admissions module exceptions.
"""

from shared.exceptions import NotFoundError


class StudentNotFoundError(NotFoundError):
    """Raised when an admissions action targets an unknown student record."""

    def __init__(self, student_id: str):
        super().__init__(
            f"Student not found: {student_id}",
            code="STUDENT_NOT_FOUND",
            details={"student_id": student_id},
        )


class StudentRecordNotFoundError(NotFoundError):
    """Raised when a signed-in user has no student record yet."""

    def __init__(self, profile_id: str):
        super().__init__(
            "No student record found. Please complete your registration.",
            code="STUDENT_RECORD_NOT_FOUND",
            details={"profile_id": profile_id},
        )
