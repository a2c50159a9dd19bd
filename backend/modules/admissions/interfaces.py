"""
Admissions module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AdmissionStatus

from .models import Application, ApplicationListResponse


@runtime_checkable
class IAdmissionsService(Protocol):
    """Interface for the admissions back-office operations."""

    async def list_applications(self) -> ApplicationListResponse:
        """All applications, most recent first."""
        ...

    async def list_students(
        self,
        search: Optional[str] = None,
        status: Optional[AdmissionStatus] = None,
    ) -> ApplicationListResponse:
        """
        Student records filtered by name/email substring and status.
        """
        ...

    async def set_status(self, student_id: str, status: AdmissionStatus) -> Application:
        """
        Change a student's admission status.

        Raises:
            StudentNotFoundError: If no student has this id
        """
        ...

    async def approve(self, student_id: str) -> Application:
        """Shorthand for ``set_status(student_id, ADMITTED)``."""
        ...

    async def reject(self, student_id: str) -> Application:
        """Shorthand for ``set_status(student_id, REJECTED)``."""
        ...
