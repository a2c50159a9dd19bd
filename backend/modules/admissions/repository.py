"""
Admissions repository for database access.

Reads and updates the ``students`` table joined with ``profiles``.
"""

from typing import Optional

from shared.models import AdmissionStatus
from shared.repository import BaseRepository

from .models import Application

_APPLICATION_COLUMNS = (
    "id, admission_status, created_at, learning_mode, is_born_again, "
    "has_discovered_ministry, profile:profiles(first_name, last_name, email, phone)"
)


class AdmissionsRepository(BaseRepository[Application]):
    """
    Repository for student admission records.

    Note: This repository does NOT perform authorization checks; row
    level security on the caller's session does.
    """

    def list_applications(self) -> list[Application]:
        """All student records, most recent first."""
        result = (
            self._db.table("students")
            .select(_APPLICATION_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [Application(**row) for row in self._rows(result)]

    def get_application(self, student_id: str) -> Optional[Application]:
        result = (
            self._db.table("students")
            .select(_APPLICATION_COLUMNS)
            .eq("id", student_id)
            .limit(1)
            .execute()
        )
        row = self._first(result)
        return Application(**row) if row else None

    def update_status(self, student_id: str, status: AdmissionStatus) -> bool:
        """
        Write the canonical status value.

        Returns:
            False if no row matched ``student_id``.
        """
        result = (
            self._db.table("students")
            .update({"admission_status": status.value})
            .eq("id", student_id)
            .execute()
        )
        return bool(result.data)
