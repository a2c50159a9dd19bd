"""
Dashboard module.

Read models for the admin and student dashboards and the student
course timetable.
"""

from .interfaces import IDashboardService
from .models import (
    AdminDashboard,
    FeeStatus,
    StudentDashboard,
    TimetableDay,
    TimetableEntry,
    TimetableResponse,
)

__all__ = [
    "IDashboardService",
    "AdminDashboard",
    "FeeStatus",
    "StudentDashboard",
    "TimetableDay",
    "TimetableEntry",
    "TimetableResponse",
]
