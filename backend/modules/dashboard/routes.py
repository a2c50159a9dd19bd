"""
Dashboard API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_dashboard_service
from api.middleware.session import CurrentStudent, RequireAdmin, RequireSession
from modules.auth.registry import PortalSession
from shared.models import StudentRecord

from .interfaces import IDashboardService
from .models import AdminDashboard, StudentDashboard, TimetableResponse

router = APIRouter()


@router.get("/admin/dashboard", response_model=AdminDashboard)
async def get_admin_dashboard(
    session: PortalSession = RequireAdmin,
    service: IDashboardService = Depends(get_dashboard_service),
) -> AdminDashboard:
    return await service.admin_dashboard()


@router.get("/student/dashboard", response_model=StudentDashboard)
async def get_student_dashboard(
    session: PortalSession = RequireSession,
    service: IDashboardService = Depends(get_dashboard_service),
) -> StudentDashboard:
    state = session.store.state
    return await service.student_dashboard(state.profile, state.student)


@router.get("/student/courses", response_model=TimetableResponse)
async def get_student_courses(
    student: StudentRecord = CurrentStudent,
    service: IDashboardService = Depends(get_dashboard_service),
) -> TimetableResponse:
    """Timetable of the student's cohort."""
    return await service.student_timetable(student)
