"""
Shared data models used across modules.

These mirror the two durable tables every feature touches (profiles and
students) plus the enums stored on them. Module-specific models stay in
their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    """Coarse authorization category stored on a profile."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        """Return the matching role, or None for empty/unknown values."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def resolve_role(
    profile_role: Optional[str],
    metadata_role: Optional[str] = None,
) -> Role:
    """
    Resolve the effective role used for authorization.

    The persisted profile role wins; the role carried in identity metadata
    (written at sign-up) is the fallback; "student" is the default.
    """
    return Role.parse(profile_role) or Role.parse(metadata_role) or Role.STUDENT


class AdmissionStatus(str, Enum):
    """
    Canonical admission status of a student record.

    Older rows were written as "Pending"/"Approved"/"Rejected" and some as
    "PENDING"/"ADMITTED"/"REJECTED". Reads accept all of them; writes only
    use these values (see migrations/001_normalize_admission_status.sql).
    """

    PENDING = "PENDING"
    ADMITTED = "ADMITTED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AdmissionStatus":
        if not value:
            return cls.PENDING
        return _LEGACY_ADMISSION_STATUS.get(value.strip().upper(), cls.PENDING)

    def stored_values(self) -> list[str]:
        """Every spelling of this status that may exist in unmigrated rows."""
        spellings = set()
        for key, status in _LEGACY_ADMISSION_STATUS.items():
            if status is self:
                spellings.update({key, key.capitalize(), key.lower()})
        return sorted(spellings)


_LEGACY_ADMISSION_STATUS = {
    "PENDING": AdmissionStatus.PENDING,
    "ADMITTED": AdmissionStatus.ADMITTED,
    "APPROVED": AdmissionStatus.ADMITTED,
    "REJECTED": AdmissionStatus.REJECTED,
}


class Profile(BaseModel):
    """
    Durable display/contact/role data, one-to-one with an identity.

    Created by a database trigger when an identity first authenticates.
    """

    model_config = {"extra": "ignore"}

    id: str = Field(..., description="Profile ID (same UUID as the auth user)")
    email: Optional[str] = None
    first_name: str = "Student"
    last_name: str = "User"
    middle_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    avatar_url: Optional[str] = None

    # Social links
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    youtube: Optional[str] = None

    # Audit
    promoted_at: Optional[datetime] = None
    promoted_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("first_name", mode="before")
    @classmethod
    def _default_first_name(cls, value: Optional[str]) -> str:
        return value or "Student"

    @field_validator("last_name", mode="before")
    @classmethod
    def _default_last_name(cls, value: Optional[str]) -> str:
        return value or "User"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class StudentRecord(BaseModel):
    """Academic and admission attributes, zero-or-one per profile."""

    model_config = {"extra": "ignore"}

    id: str
    profile_id: str
    cohort_id: Optional[str] = None
    admission_status: AdmissionStatus = AdmissionStatus.PENDING
    student_code: Optional[str] = None
    learning_mode: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    marital_status: Optional[str] = None
    address: Optional[str] = None
    educational_background: Optional[str] = None
    preferred_language: Optional[str] = None
    is_born_again: Optional[bool] = None
    has_discovered_ministry: Optional[bool] = None
    ministry_description: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("admission_status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        if isinstance(value, AdmissionStatus):
            return value
        return AdmissionStatus.parse(value)
