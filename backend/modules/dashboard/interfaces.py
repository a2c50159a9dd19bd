"""
Dashboard module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import Profile, StudentRecord

from .models import AdminDashboard, StudentDashboard, TimetableResponse


@runtime_checkable
class IDashboardService(Protocol):
    """Interface for the dashboard and timetable read models."""

    async def admin_dashboard(self) -> AdminDashboard:
        """Headline counts, revenue and the newest student profiles."""
        ...

    async def student_dashboard(
        self,
        profile: Optional[Profile],
        student: Optional[StudentRecord],
    ) -> StudentDashboard:
        """
        Figures for the student home page.

        Works for users without a student record yet (everything locked).
        """
        ...

    async def student_timetable(self, student: StudentRecord) -> TimetableResponse:
        """The student's cohort timetable grouped by day name."""
        ...
