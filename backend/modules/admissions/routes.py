"""
Admissions API endpoints.

Back-office review of applications and the student list. Every route
requires admin capability.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import get_admissions_service
from api.middleware.session import RequireAdmin
from modules.auth.registry import PortalSession
from shared.exceptions import ValidationError

from .interfaces import IAdmissionsService
from .models import Application, ApplicationListResponse, StatusUpdateRequest

router = APIRouter()


@router.get("/admissions", response_model=ApplicationListResponse)
async def list_applications(
    session: PortalSession = RequireAdmin,
    service: IAdmissionsService = Depends(get_admissions_service),
) -> ApplicationListResponse:
    """List all applications, most recent first."""
    return await service.list_applications()


@router.post("/admissions/{student_id}/approve", response_model=Application)
async def approve_application(
    student_id: str,
    session: PortalSession = RequireAdmin,
    service: IAdmissionsService = Depends(get_admissions_service),
) -> Application:
    return await service.approve(student_id)


@router.post("/admissions/{student_id}/reject", response_model=Application)
async def reject_application(
    student_id: str,
    session: PortalSession = RequireAdmin,
    service: IAdmissionsService = Depends(get_admissions_service),
) -> Application:
    return await service.reject(student_id)


@router.get("/students", response_model=ApplicationListResponse)
async def list_students(
    search: Optional[str] = Query(default=None, description="Name or email substring"),
    status: Optional[str] = Query(default=None, description="Admission status filter"),
    session: PortalSession = RequireAdmin,
    service: IAdmissionsService = Depends(get_admissions_service),
) -> ApplicationListResponse:
    """
    List students, optionally filtered.

    ``status`` accepts canonical and legacy spellings; "all" or empty
    means no filter.
    """
    status_filter = None
    if status and status.lower() != "all":
        try:
            status_filter = StatusUpdateRequest(status=status).status
        except PydanticValidationError:
            raise ValidationError(f"Unknown admission status: {status}", code="INVALID_STATUS")
    return await service.list_students(search, status_filter)


@router.patch("/students/{student_id}/status", response_model=Application)
async def update_student_status(
    student_id: str,
    request: StatusUpdateRequest,
    session: PortalSession = RequireAdmin,
    service: IAdmissionsService = Depends(get_admissions_service),
) -> Application:
    return await service.set_status(student_id, request.status)
