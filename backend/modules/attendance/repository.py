"""
Attendance repository for database access.

Encapsulates Supabase queries for the ``attendance`` table and the
``schedule``/``students`` lookups check-in and the admin views need.
"""

from datetime import date, datetime
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, UNIQUE_VIOLATION

from .models import AttendanceRecord
from .exceptions import AlreadyCheckedInError

_STUDENT_LABEL_COLUMNS = "id, profiles(first_name, last_name), cohorts(name)"


class AttendanceRepository(BaseRepository[AttendanceRecord]):
    """
    Repository for attendance data access.

    Note: This repository does NOT perform authorization checks.
    """

    # -------------------------------------------------------------------------
    # Student side
    # -------------------------------------------------------------------------

    def list_for_student(self, student_id: str) -> list[AttendanceRecord]:
        """A student's attendance history, newest first."""
        result = (
            self._db.table("attendance")
            .select("id, marked_at, status, is_verified, schedule_id")
            .eq("student_id", student_id)
            .order("marked_at", desc=True)
            .execute()
        )
        return [AttendanceRecord(**row) for row in self._rows(result)]

    def find_schedule_id(self, cohort_id: str, day: date) -> Optional[str]:
        """Id of a class scheduled for ``cohort_id`` on ``day``, if any."""
        result = (
            self._db.table("schedule")
            .select("id, date, courses!inner(cohort_id)")
            .eq("date", day.isoformat())
            .eq("courses.cohort_id", cohort_id)
            .limit(1)
            .execute()
        )
        row = self._first(result)
        return row["id"] if row else None

    def insert_check_in(self, data: dict[str, Any]) -> AttendanceRecord:
        """
        Insert a check-in row.

        Raises:
            AlreadyCheckedInError: If the unique (student, schedule) index rejects it
        """
        try:
            result = self._db.table("attendance").insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise AlreadyCheckedInError(data["student_id"])
            raise
        return AttendanceRecord(**result.data[0])

    # -------------------------------------------------------------------------
    # Admin side
    # -------------------------------------------------------------------------

    def count_unverified(self) -> int:
        result = (
            self._db.table("attendance")
            .select("id", count="exact")
            .eq("is_verified", False)
            .execute()
        )
        return result.count or 0

    def count_marked_between(self, start: datetime, end: datetime) -> int:
        result = (
            self._db.table("attendance")
            .select("id", count="exact")
            .gte("marked_at", start.isoformat())
            .lt("marked_at", end.isoformat())
            .execute()
        )
        return result.count or 0

    def list_unverified(self) -> list[AttendanceRecord]:
        result = (
            self._db.table("attendance")
            .select("id, marked_at, student_id, is_verified")
            .eq("is_verified", False)
            .order("marked_at", desc=True)
            .execute()
        )
        return [AttendanceRecord(**row) for row in self._rows(result)]

    def list_all(self) -> list[AttendanceRecord]:
        result = self._db.table("attendance").select("id, student_id, status").execute()
        return [AttendanceRecord(**row) for row in self._rows(result)]

    def student_labels(self, student_ids: list[str]) -> list[dict[str, Any]]:
        """Name and cohort rows for the given students."""
        if not student_ids:
            return []
        result = (
            self._db.table("students")
            .select(_STUDENT_LABEL_COLUMNS)
            .in_("id", student_ids)
            .execute()
        )
        return self._rows(result)

    def enrolled_student_labels(self) -> list[dict[str, Any]]:
        """Name and cohort rows for every student assigned to a cohort."""
        result = (
            self._db.table("students")
            .select(_STUDENT_LABEL_COLUMNS)
            .not_.is_("cohort_id", "null")
            .execute()
        )
        return self._rows(result)

    def mark_verified(self, attendance_ids: list[str]) -> int:
        """Verify the given rows; returns how many were updated."""
        if not attendance_ids:
            return 0
        result = (
            self._db.table("attendance")
            .update({"is_verified": True})
            .in_("id", attendance_ids)
            .execute()
        )
        return len(self._rows(result))

    def delete(self, attendance_id: str) -> bool:
        result = self._db.table("attendance").delete().eq("id", attendance_id).execute()
        return bool(result.data)
