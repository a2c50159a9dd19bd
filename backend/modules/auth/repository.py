"""
Profile lookups for the Session Store.

Reads the ``profiles`` and ``students`` rows of the signed-in identity.
"""

from typing import Optional

from shared.models import Profile, StudentRecord
from shared.repository import BaseRepository

from .interfaces import IProfileSource


class ProfileRepository(BaseRepository[Profile], IProfileSource):
    """Read-only access to a user's profile and student record."""

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        result = (
            self._db.table("profiles")
            .select("*")
            .eq("id", profile_id)
            .limit(1)
            .execute()
        )
        row = self._first(result)
        return Profile(**row) if row else None

    def get_student_for_profile(self, profile_id: str) -> Optional[StudentRecord]:
        result = (
            self._db.table("students")
            .select("*")
            .eq("profile_id", profile_id)
            .limit(1)
            .execute()
        )
        row = self._first(result)
        return StudentRecord(**row) if row else None
