"""
Dashboard service implementation.
"""

import asyncio
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Optional

from shared.models import AdmissionStatus, Profile, StudentRecord
from modules.attendance.models import AttendanceStatus
from modules.attendance.service import percent

from .interfaces import IDashboardService
from .models import (
    AdminDashboard,
    FeeStatus,
    StudentDashboard,
    TimetableDay,
    TimetableEntry,
    TimetableResponse,
    UpcomingClass,
)
from .repository import DashboardRepository

logger = logging.getLogger(__name__)

DEFAULT_CLASS_TITLE = "Class session"
END_OF_DAY = time(23, 59, 59)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def summarize_fee_status(statuses: list[str]) -> FeeStatus:
    """
    Collapse per-fee payment states.

    All paid is Paid; any paid or partial is Partial; no fees is N/A.
    """
    if not statuses:
        return FeeStatus.NOT_APPLICABLE
    if all(s == FeeStatus.PAID.value for s in statuses):
        return FeeStatus.PAID
    if any(s in (FeeStatus.PAID.value, FeeStatus.PARTIAL.value) for s in statuses):
        return FeeStatus.PARTIAL
    return FeeStatus.UNPAID


def _parse_time(value: Optional[str]) -> time:
    if not value:
        return END_OF_DAY
    try:
        return time.fromisoformat(value)
    except ValueError:
        return END_OF_DAY


def _course_title(row: dict[str, Any]) -> str:
    course = row.get("courses") or {}
    return course.get("title") or row.get("description") or DEFAULT_CLASS_TITLE


class DashboardService(IDashboardService):
    """
    Implementation of the dashboard service.

    Schedule dates and times are compared as UTC wall-clock values. Each
    view is assembled from several blocking repository reads, so the whole
    assembly runs in a worker thread.
    """

    def __init__(
        self,
        repository: DashboardRepository,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._repository = repository
        self._clock = clock

    async def admin_dashboard(self) -> AdminDashboard:
        return await asyncio.to_thread(self._admin_dashboard)

    async def student_dashboard(
        self,
        profile: Optional[Profile],
        student: Optional[StudentRecord],
    ) -> StudentDashboard:
        return await asyncio.to_thread(self._student_dashboard, profile, student)

    async def student_timetable(self, student: StudentRecord) -> TimetableResponse:
        return await asyncio.to_thread(self._student_timetable, student)

    def _admin_dashboard(self) -> AdminDashboard:
        return AdminDashboard(
            total_students=self._repository.count_students(),
            new_applications=self._repository.count_students_with_status(AdmissionStatus.PENDING),
            active_courses=self._repository.count_courses(),
            revenue=sum(self._repository.paid_fee_amounts()),
            recent_students=self._repository.recent_students(),
        )

    def _student_dashboard(
        self,
        profile: Optional[Profile],
        student: Optional[StudentRecord],
    ) -> StudentDashboard:
        status = student.admission_status if student else AdmissionStatus.PENDING
        locked = status is AdmissionStatus.PENDING

        attendance_rate = None
        pending_assignments = 0
        fee_status = FeeStatus.NOT_APPLICABLE

        if student is not None:
            if not locked:
                statuses = self._repository.attendance_statuses(student.id)
                present = sum(1 for s in statuses if s.upper() == AttendanceStatus.PRESENT.value)
                attendance_rate = percent(present, len(statuses)) if statuses else None

                if student.cohort_id:
                    assigned = self._repository.cohort_assignment_ids(student.cohort_id)
                    submitted = self._repository.submitted_assignment_ids(student.id)
                    pending_assignments = len(assigned - submitted)

            fee_status = summarize_fee_status(self._repository.fee_statuses(student.id))

        upcoming = [
            UpcomingClass(
                date=row["date"],
                day=row.get("day"),
                start_time=row.get("start_time"),
                end_time=row.get("end_time"),
                title=_course_title(row),
            )
            for row in self._repository.upcoming_schedule(self._clock().date())
        ]

        return StudentDashboard(
            first_name=profile.first_name if profile else "Student",
            admission_status=status,
            materials_locked=locked,
            attendance_rate=attendance_rate,
            total_courses=self._repository.count_courses(),
            pending_assignments=pending_assignments,
            fee_status=fee_status,
            upcoming_classes=upcoming,
            announcements=self._repository.latest_announcements(),
        )

    def _student_timetable(self, student: StudentRecord) -> TimetableResponse:
        if not student.cohort_id:
            return TimetableResponse(days=[])

        now = self._clock().replace(tzinfo=None)
        days: dict[str, list[TimetableEntry]] = {}

        for row in self._repository.cohort_timetable(student.cohort_id):
            class_date = date.fromisoformat(str(row["date"])[:10])
            day_name = row.get("day") or class_date.strftime("%A")
            ends_at = datetime.combine(class_date, _parse_time(row.get("end_time")))

            days.setdefault(day_name, []).append(
                TimetableEntry(
                    id=row["id"],
                    date=class_date,
                    day_name=day_name,
                    start_time=row.get("start_time"),
                    end_time=row.get("end_time"),
                    title=_course_title(row),
                    is_completed=ends_at < now,
                )
            )

        return TimetableResponse(
            days=[TimetableDay(day=day, entries=entries) for day, entries in days.items()]
        )
