"""
Attendance module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

PLACEHOLDER = "—"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"


class AttendanceRecord(BaseModel):
    """One check-in row."""

    model_config = {"extra": "ignore"}

    id: str
    marked_at: Optional[datetime] = None
    status: Optional[str] = None
    is_verified: bool = False
    student_id: Optional[str] = None
    schedule_id: Optional[str] = None

    @property
    def is_present(self) -> bool:
        return (self.status or "").upper() == AttendanceStatus.PRESENT.value


class StudentAttendanceOverview(BaseModel):
    """What the student attendance page shows."""

    history: list[AttendanceRecord]
    total: int = 0
    attended: int = 0
    rate: int = Field(default=0, description="Percentage of PRESENT records, rounded")
    today_schedule_id: Optional[str] = None
    checked_in_today: bool = False
    pending_today: bool = False


class AttendanceSummary(BaseModel):
    pending: int = Field(..., description="Unverified check-ins")
    today: int = Field(..., description="Check-ins recorded today")


class PendingAttendance(BaseModel):
    """Unverified check-in enriched for the verification queue."""

    id: str
    marked_at: Optional[datetime] = None
    student_id: str
    student_name: str = PLACEHOLDER
    cohort_name: str = PLACEHOLDER
    is_verified: bool = False


class StudentAttendanceStats(BaseModel):
    student_id: str
    name: str = PLACEHOLDER
    cohort_name: str = PLACEHOLDER
    total_classes: int = 0
    verified_present: int = 0
    attendance_pct: int = 0


class AttendanceStatsResponse(BaseModel):
    students: list[StudentAttendanceStats]
    low_attendance: int = Field(..., description="Students below the attendance threshold")
    threshold: int


class BulkVerifyResult(BaseModel):
    verified: int
