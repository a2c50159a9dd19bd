"""
Admissions module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.models import AdmissionStatus


class ApplicantProfile(BaseModel):
    """Contact details joined from the applicant's profile."""

    model_config = {"extra": "ignore"}

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Application(BaseModel):
    """A student record as shown in the admissions and students lists."""

    model_config = {"extra": "ignore"}

    id: str
    admission_status: AdmissionStatus = AdmissionStatus.PENDING
    created_at: Optional[datetime] = None
    learning_mode: Optional[str] = None
    is_born_again: Optional[bool] = None
    has_discovered_ministry: Optional[bool] = None
    profile: Optional[ApplicantProfile] = None

    @field_validator("admission_status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        if isinstance(value, AdmissionStatus):
            return value
        return AdmissionStatus.parse(value)

    def matches(self, search: str) -> bool:
        """Case-insensitive match on name or email."""
        needle = search.strip().lower()
        if not needle:
            return True
        if self.profile is None:
            return False
        haystack = f"{self.profile.full_name} {self.profile.email or ''}".lower()
        return needle in haystack


class ApplicationListResponse(BaseModel):
    items: list[Application]
    total: int


class StatusUpdateRequest(BaseModel):
    """Admin-chosen admission status; legacy spellings are accepted."""

    status: AdmissionStatus = Field(..., description="PENDING, ADMITTED or REJECTED")

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        if isinstance(value, AdmissionStatus):
            return value
        if isinstance(value, str) and value.strip().upper() in {"PENDING", "ADMITTED", "APPROVED", "REJECTED"}:
            return AdmissionStatus.parse(value)
        raise ValueError(f"Unknown admission status: {value!r}")
