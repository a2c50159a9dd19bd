"""
Dashboard repository for database access.

Read-only counts and lists across students, courses, fees, schedule,
assignments and announcements.
"""

from datetime import date
from typing import Any

from shared.models import AdmissionStatus
from shared.repository import BaseRepository

from .models import Announcement, RecentStudent

PAID = "Paid"


class DashboardRepository(BaseRepository[Any]):
    """Queries behind the admin and student dashboards."""

    def _count(self, table: str, **filters: Any) -> int:
        query = self._db.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        return query.execute().count or 0

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    def count_students(self) -> int:
        return self._count("students")

    def count_students_with_status(self, status: AdmissionStatus) -> int:
        """Count by status, matching legacy spellings of unmigrated rows too."""
        result = (
            self._db.table("students")
            .select("id", count="exact")
            .in_("admission_status", status.stored_values())
            .execute()
        )
        return result.count or 0

    def count_courses(self) -> int:
        return self._count("courses")

    def paid_fee_amounts(self) -> list[float]:
        result = (
            self._db.table("fees")
            .select("amount_paid")
            .eq("payment_status", PAID)
            .execute()
        )
        return [float(row.get("amount_paid") or 0) for row in self._rows(result)]

    def recent_students(self, limit: int = 5) -> list[RecentStudent]:
        result = (
            self._db.table("profiles")
            .select("id, first_name, last_name, email, created_at")
            .eq("role", "student")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [RecentStudent(**row) for row in self._rows(result)]

    # -------------------------------------------------------------------------
    # Student
    # -------------------------------------------------------------------------

    def attendance_statuses(self, student_id: str) -> list[str]:
        result = (
            self._db.table("attendance")
            .select("status")
            .eq("student_id", student_id)
            .execute()
        )
        return [row.get("status") or "" for row in self._rows(result)]

    def cohort_assignment_ids(self, cohort_id: str) -> set[str]:
        result = self._db.table("assignments").select("id").eq("cohort_id", cohort_id).execute()
        return {row["id"] for row in self._rows(result)}

    def submitted_assignment_ids(self, student_id: str) -> set[str]:
        result = (
            self._db.table("assignment_submissions")
            .select("assignment_id")
            .eq("student_id", student_id)
            .execute()
        )
        return {row["assignment_id"] for row in self._rows(result)}

    def fee_statuses(self, student_id: str) -> list[str]:
        result = (
            self._db.table("fees")
            .select("payment_status")
            .eq("student_id", student_id)
            .execute()
        )
        return [row.get("payment_status") or "" for row in self._rows(result)]

    def upcoming_schedule(self, after: date, limit: int = 3) -> list[dict[str, Any]]:
        """Classes strictly after ``after``, soonest first."""
        result = (
            self._db.table("schedule")
            .select("date, day, start_time, end_time, course_id, courses(title)")
            .gt("date", after.isoformat())
            .order("date")
            .limit(limit)
            .execute()
        )
        return self._rows(result)

    def latest_announcements(self, limit: int = 3) -> list[Announcement]:
        result = (
            self._db.table("announcements")
            .select("title, body, published_at")
            .eq("is_published", True)
            .order("published_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Announcement(**row) for row in self._rows(result)]

    def cohort_timetable(self, cohort_id: str) -> list[dict[str, Any]]:
        result = (
            self._db.table("schedule")
            .select(
                "id, date, day, start_time, end_time, description, "
                "courses!inner(id, title, code, cohort_id)"
            )
            .eq("courses.cohort_id", cohort_id)
            .order("date")
            .order("start_time")
            .execute()
        )
        return self._rows(result)
