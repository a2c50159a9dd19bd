"""
Attendance service implementation.

Student self check-in and the admin verification workflow.
"""

import asyncio
import logging
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Optional

from shared.models import StudentRecord

from .interfaces import IAttendanceService
from .models import (
    PLACEHOLDER,
    AttendanceRecord,
    AttendanceStatsResponse,
    AttendanceStatus,
    AttendanceSummary,
    BulkVerifyResult,
    PendingAttendance,
    StudentAttendanceOverview,
    StudentAttendanceStats,
)
from .exceptions import AlreadyCheckedInError, AttendanceNotFoundError, NoClassTodayError
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def _utc_date(value: Optional[datetime]) -> Optional[date]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def _student_label(row: dict[str, Any]) -> tuple[str, str]:
    """(name, cohort name) from a students row joined with profiles and cohorts."""
    profile = row.get("profiles") or {}
    cohort = row.get("cohorts") or {}
    name = f"{profile.get('first_name') or ''} {profile.get('last_name') or ''}".strip()
    return name or PLACEHOLDER, cohort.get("name") or PLACEHOLDER


class AttendanceService(IAttendanceService):
    """
    Implementation of the attendance service.

    Days are UTC calendar days, matching how ``marked_at`` is stored.
    Repository calls run in a worker thread.
    """

    def __init__(
        self,
        repository: AttendanceRepository,
        low_attendance_threshold: int = 75,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._repository = repository
        self._threshold = low_attendance_threshold
        self._clock = clock

    # -------------------------------------------------------------------------
    # Student
    # -------------------------------------------------------------------------

    async def student_overview(self, student: StudentRecord) -> StudentAttendanceOverview:
        history = await asyncio.to_thread(self._repository.list_for_student, student.id)
        today = self._clock().date()
        today_records = [r for r in history if _utc_date(r.marked_at) == today]
        attended = sum(1 for r in history if r.is_present)

        return StudentAttendanceOverview(
            history=history,
            total=len(history),
            attended=attended,
            rate=percent(attended, len(history)),
            today_schedule_id=await self._today_schedule_id(student, today),
            checked_in_today=bool(today_records),
            pending_today=any(not r.is_verified for r in today_records),
        )

    async def check_in(self, student: StudentRecord) -> AttendanceRecord:
        now = self._clock()
        schedule_id = await self._today_schedule_id(student, now.date())
        if schedule_id is None:
            raise NoClassTodayError()

        history = await asyncio.to_thread(self._repository.list_for_student, student.id)
        already = any(_utc_date(r.marked_at) == now.date() for r in history)
        if already:
            raise AlreadyCheckedInError(student.id)

        record = await asyncio.to_thread(
            self._repository.insert_check_in,
            {
                "student_id": student.id,
                "schedule_id": schedule_id,
                "status": AttendanceStatus.PRESENT.value,
                "marked_at": now.isoformat(),
                "is_verified": False,
            },
        )
        logger.info(f"Student {student.id} checked in for schedule {schedule_id}")
        return record

    async def _today_schedule_id(self, student: StudentRecord, today: date) -> Optional[str]:
        if not student.cohort_id:
            return None
        return await asyncio.to_thread(self._repository.find_schedule_id, student.cohort_id, today)

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    async def summary(self) -> AttendanceSummary:
        start = datetime.combine(self._clock().date(), time.min, tzinfo=timezone.utc)
        return AttendanceSummary(
            pending=await asyncio.to_thread(self._repository.count_unverified),
            today=await asyncio.to_thread(
                self._repository.count_marked_between, start, start + timedelta(days=1)
            ),
        )

    async def pending_queue(self) -> list[PendingAttendance]:
        records = await asyncio.to_thread(self._repository.list_unverified)
        student_ids = sorted({r.student_id for r in records if r.student_id})
        rows = await asyncio.to_thread(self._repository.student_labels, student_ids)
        labels = {row["id"]: _student_label(row) for row in rows}

        queue = []
        for record in records:
            name, cohort = labels.get(record.student_id, (PLACEHOLDER, PLACEHOLDER))
            queue.append(
                PendingAttendance(
                    id=record.id,
                    marked_at=record.marked_at,
                    student_id=record.student_id or "",
                    student_name=name,
                    cohort_name=cohort,
                    is_verified=record.is_verified,
                )
            )
        return queue

    async def student_stats(self) -> AttendanceStatsResponse:
        totals: dict[str, int] = {}
        present: dict[str, int] = {}
        for record in await asyncio.to_thread(self._repository.list_all):
            if not record.student_id:
                continue
            totals[record.student_id] = totals.get(record.student_id, 0) + 1
            if record.is_present:
                present[record.student_id] = present.get(record.student_id, 0) + 1

        stats = []
        for row in await asyncio.to_thread(self._repository.enrolled_student_labels):
            name, cohort = _student_label(row)
            total = totals.get(row["id"], 0)
            attended = present.get(row["id"], 0)
            stats.append(
                StudentAttendanceStats(
                    student_id=row["id"],
                    name=name,
                    cohort_name=cohort,
                    total_classes=total,
                    verified_present=attended,
                    attendance_pct=percent(attended, total),
                )
            )

        return AttendanceStatsResponse(
            students=stats,
            low_attendance=sum(1 for s in stats if s.attendance_pct < self._threshold),
            threshold=self._threshold,
        )

    async def verify(self, attendance_id: str) -> None:
        if await asyncio.to_thread(self._repository.mark_verified, [attendance_id]) == 0:
            raise AttendanceNotFoundError(attendance_id)
        logger.info(f"Attendance {attendance_id} verified")

    async def decline(self, attendance_id: str) -> None:
        if not await asyncio.to_thread(self._repository.delete, attendance_id):
            raise AttendanceNotFoundError(attendance_id)
        logger.info(f"Attendance {attendance_id} declined")

    async def verify_all_pending(self) -> BulkVerifyResult:
        pending = await asyncio.to_thread(self._repository.list_unverified)
        verified = await asyncio.to_thread(self._repository.mark_verified, [r.id for r in pending])
        logger.info(f"Verified {verified} pending attendance record(s)")
        return BulkVerifyResult(verified=verified)

    async def history_for(self, student_id: str) -> list[AttendanceRecord]:
        return await asyncio.to_thread(self._repository.list_for_student, student_id)
