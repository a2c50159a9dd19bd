"""
Admissions module.

Handles the back-office review of student applications and the
student list.

Public API:
- IAdmissionsService: Interface for admissions operations
- Application, StatusUpdateRequest: Data models
- StudentNotFoundError, StudentRecordNotFoundError: Exceptions
"""

from .interfaces import IAdmissionsService
from .models import Application, ApplicationListResponse, ApplicantProfile, StatusUpdateRequest
from .exceptions import StudentNotFoundError, StudentRecordNotFoundError

__all__ = [
    "IAdmissionsService",
    "Application",
    "ApplicationListResponse",
    "ApplicantProfile",
    "StatusUpdateRequest",
    "StudentNotFoundError",
    "StudentRecordNotFoundError",
]
