"""
Attendance API endpoints.

``student_router`` serves the signed-in student's own attendance;
``admin_router`` the verification back office.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_attendance_service
from api.middleware.session import CurrentStudent, RequireAdmin
from modules.auth.registry import PortalSession
from shared.models import StudentRecord

from .interfaces import IAttendanceService
from .models import (
    AttendanceRecord,
    AttendanceStatsResponse,
    AttendanceSummary,
    BulkVerifyResult,
    PendingAttendance,
    StudentAttendanceOverview,
)

student_router = APIRouter()
admin_router = APIRouter()


@student_router.get("", response_model=StudentAttendanceOverview)
async def get_my_attendance(
    student: StudentRecord = CurrentStudent,
    service: IAttendanceService = Depends(get_attendance_service),
) -> StudentAttendanceOverview:
    return await service.student_overview(student)


@student_router.post("/check-in", response_model=AttendanceRecord, status_code=201)
async def check_in(
    student: StudentRecord = CurrentStudent,
    service: IAttendanceService = Depends(get_attendance_service),
) -> AttendanceRecord:
    """
    Check in for today's class.

    The record stays pending until an admin verifies it.
    """
    return await service.check_in(student)


@admin_router.get("/summary", response_model=AttendanceSummary)
async def get_summary(
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> AttendanceSummary:
    return await service.summary()


@admin_router.get("/pending", response_model=list[PendingAttendance])
async def get_pending(
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> list[PendingAttendance]:
    return await service.pending_queue()


@admin_router.get("/stats", response_model=AttendanceStatsResponse)
async def get_stats(
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> AttendanceStatsResponse:
    return await service.student_stats()


@admin_router.post("/verify-all", response_model=BulkVerifyResult)
async def verify_all(
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> BulkVerifyResult:
    return await service.verify_all_pending()


@admin_router.post("/{attendance_id}/verify", status_code=204)
async def verify_attendance(
    attendance_id: str,
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> None:
    await service.verify(attendance_id)


@admin_router.delete("/{attendance_id}", status_code=204)
async def decline_attendance(
    attendance_id: str,
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> None:
    """Decline a check-in by deleting it."""
    await service.decline(attendance_id)


@admin_router.get("/students/{student_id}/history", response_model=list[AttendanceRecord])
async def get_student_history(
    student_id: str,
    session: PortalSession = RequireAdmin,
    service: IAttendanceService = Depends(get_attendance_service),
) -> list[AttendanceRecord]:
    return await service.history_for(student_id)
