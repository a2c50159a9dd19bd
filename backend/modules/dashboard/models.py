"""
Dashboard module data models.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AdmissionStatus


class FeeStatus(str, Enum):
    """Aggregate payment state over a student's fee rows."""

    PAID = "Paid"
    PARTIAL = "Partial"
    UNPAID = "Unpaid"
    NOT_APPLICABLE = "N/A"


class RecentStudent(BaseModel):
    model_config = {"extra": "ignore"}

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None


class AdminDashboard(BaseModel):
    total_students: int = 0
    new_applications: int = Field(default=0, description="Students awaiting admission")
    active_courses: int = 0
    revenue: float = Field(default=0.0, description="Sum of amount_paid over paid fees")
    recent_students: list[RecentStudent] = Field(default_factory=list)


class UpcomingClass(BaseModel):
    date: date
    day: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    title: str


class Announcement(BaseModel):
    model_config = {"extra": "ignore"}

    title: str
    body: str
    published_at: Optional[datetime] = None


class StudentDashboard(BaseModel):
    """
    Student home page figures.

    While admission is pending, attendance and assignments are locked:
    ``attendance_rate`` is None and ``pending_assignments`` is 0.
    """

    first_name: str
    admission_status: AdmissionStatus
    materials_locked: bool
    attendance_rate: Optional[int] = None
    total_courses: int = 0
    pending_assignments: int = 0
    fee_status: FeeStatus = FeeStatus.NOT_APPLICABLE
    upcoming_classes: list[UpcomingClass] = Field(default_factory=list)
    announcements: list[Announcement] = Field(default_factory=list)


class TimetableEntry(BaseModel):
    id: str
    date: date
    day_name: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    title: str
    lecturer: Optional[str] = None
    is_completed: bool = False


class TimetableDay(BaseModel):
    day: str
    entries: list[TimetableEntry]


class TimetableResponse(BaseModel):
    days: list[TimetableDay]
