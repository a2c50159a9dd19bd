"""Tests for the attendance service."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from modules.attendance.exceptions import (
    AlreadyCheckedInError,
    AttendanceNotFoundError,
    NoClassTodayError,
)
from modules.attendance.models import PLACEHOLDER, AttendanceRecord
from modules.attendance.service import AttendanceService, percent

from tests.factories import make_student

NOW = datetime(2024, 3, 14, 9, 30, tzinfo=timezone.utc)


def record(record_id, marked_at=None, status="PRESENT", verified=False, student_id="student-1"):
    return AttendanceRecord(
        id=record_id,
        marked_at=marked_at,
        status=status,
        is_verified=verified,
        student_id=student_id,
    )


def label(student_id, first, last, cohort):
    return {
        "id": student_id,
        "profiles": {"first_name": first, "last_name": last},
        "cohorts": {"name": cohort} if cohort else None,
    }


@pytest.fixture
def repository():
    repo = MagicMock()
    repo.list_for_student.return_value = []
    repo.find_schedule_id.return_value = "sched-1"
    return repo


@pytest.fixture
def service(repository):
    return AttendanceService(repository, low_attendance_threshold=75, clock=lambda: NOW)


@pytest.mark.parametrize(
    "part,whole,expected",
    [(0, 0, 0), (3, 4, 75), (2, 3, 67), (1, 3, 33), (1, 8, 13), (5, 5, 100)],
)
def test_percent_rounds_half_up(part, whole, expected):
    assert percent(part, whole) == expected


class TestStudentOverview:
    @pytest.mark.asyncio
    async def test_rate_and_today_flags(self, service, repository):
        repository.list_for_student.return_value = [
            record("a-3", datetime(2024, 3, 14, 8, 0, tzinfo=timezone.utc), verified=False),
            record("a-2", datetime(2024, 3, 7, 8, 0, tzinfo=timezone.utc), status="ABSENT"),
            record("a-1", datetime(2024, 2, 29, 8, 0, tzinfo=timezone.utc), verified=True),
        ]

        overview = await service.student_overview(make_student())

        assert overview.total == 3
        assert overview.attended == 2
        assert overview.rate == 67
        assert overview.today_schedule_id == "sched-1"
        assert overview.checked_in_today is True
        assert overview.pending_today is True
        repository.find_schedule_id.assert_called_once_with("cohort-1", date(2024, 3, 14))

    @pytest.mark.asyncio
    async def test_empty_history(self, service):
        overview = await service.student_overview(make_student())
        assert overview.rate == 0
        assert overview.checked_in_today is False

    @pytest.mark.asyncio
    async def test_student_without_cohort_has_no_class(self, service, repository):
        overview = await service.student_overview(make_student(cohort_id=None))

        assert overview.today_schedule_id is None
        repository.find_schedule_id.assert_not_called()


class TestCheckIn:
    @pytest.mark.asyncio
    async def test_inserts_pending_present_record(self, service, repository):
        repository.insert_check_in.return_value = record("a-9", NOW)

        result = await service.check_in(make_student())

        repository.insert_check_in.assert_called_once_with(
            {
                "student_id": "student-1",
                "schedule_id": "sched-1",
                "status": "PRESENT",
                "marked_at": NOW.isoformat(),
                "is_verified": False,
            }
        )
        assert result.id == "a-9"

    @pytest.mark.asyncio
    async def test_no_class_today(self, service, repository):
        repository.find_schedule_id.return_value = None

        with pytest.raises(NoClassTodayError):
            await service.check_in(make_student())

        repository.insert_check_in.assert_not_called()

    @pytest.mark.asyncio
    async def test_second_check_in_same_day(self, service, repository):
        repository.list_for_student.return_value = [
            record("a-1", datetime(2024, 3, 14, 7, 0, tzinfo=timezone.utc)),
        ]

        with pytest.raises(AlreadyCheckedInError):
            await service.check_in(make_student())

        repository.insert_check_in.assert_not_called()

    @pytest.mark.asyncio
    async def test_yesterday_does_not_block(self, service, repository):
        repository.list_for_student.return_value = [
            record("a-1", datetime(2024, 3, 13, 23, 59, tzinfo=timezone.utc)),
        ]
        repository.insert_check_in.return_value = record("a-2", NOW)

        await service.check_in(make_student())

        repository.insert_check_in.assert_called_once()


class TestAdminViews:
    @pytest.mark.asyncio
    async def test_summary_counts_today_in_utc(self, service, repository):
        repository.count_unverified.return_value = 4
        repository.count_marked_between.return_value = 2

        summary = await service.summary()

        assert summary.pending == 4
        assert summary.today == 2
        start, end = repository.count_marked_between.call_args.args
        assert start == datetime(2024, 3, 14, tzinfo=timezone.utc)
        assert end == datetime(2024, 3, 15, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_pending_queue_labels(self, service, repository):
        repository.list_unverified.return_value = [
            record("a-1", NOW, student_id="s-1"),
            record("a-2", NOW, student_id="s-2"),
            record("a-3", NOW, student_id="s-1"),
        ]
        repository.student_labels.return_value = [label("s-1", "Grace", "Hopper", "Cohort A")]

        queue = await service.pending_queue()

        repository.student_labels.assert_called_once_with(["s-1", "s-2"])
        assert [q.student_name for q in queue] == ["Grace Hopper", PLACEHOLDER, "Grace Hopper"]
        assert queue[0].cohort_name == "Cohort A"
        assert queue[1].cohort_name == PLACEHOLDER

    @pytest.mark.asyncio
    async def test_student_stats(self, service, repository):
        repository.list_all.return_value = [
            record("a-1", student_id="s-1"),
            record("a-2", student_id="s-1"),
            record("a-3", student_id="s-1", status="ABSENT"),
            record("a-4", student_id="s-1"),
            record("a-5", student_id="s-2", status="ABSENT"),
            record("a-6", student_id=None),
        ]
        repository.enrolled_student_labels.return_value = [
            label("s-1", "Grace", "Hopper", "Cohort A"),
            label("s-2", "Ada", "Lovelace", None),
            label("s-3", None, None, "Cohort B"),
        ]

        response = await service.student_stats()

        by_id = {s.student_id: s for s in response.students}
        assert by_id["s-1"].total_classes == 4
        assert by_id["s-1"].verified_present == 3
        assert by_id["s-1"].attendance_pct == 75
        assert by_id["s-2"].attendance_pct == 0
        assert by_id["s-2"].cohort_name == PLACEHOLDER
        assert by_id["s-3"].name == PLACEHOLDER
        assert by_id["s-3"].total_classes == 0
        # s-1 sits exactly on the threshold and is not counted as low
        assert response.low_attendance == 2
        assert response.threshold == 75

    @pytest.mark.asyncio
    async def test_verify(self, service, repository):
        repository.mark_verified.return_value = 1

        await service.verify("a-1")

        repository.mark_verified.assert_called_once_with(["a-1"])

    @pytest.mark.asyncio
    async def test_verify_unknown(self, service, repository):
        repository.mark_verified.return_value = 0

        with pytest.raises(AttendanceNotFoundError):
            await service.verify("a-404")

    @pytest.mark.asyncio
    async def test_decline_unknown(self, service, repository):
        repository.delete.return_value = False

        with pytest.raises(AttendanceNotFoundError):
            await service.decline("a-404")

    @pytest.mark.asyncio
    async def test_verify_all_pending(self, service, repository):
        repository.list_unverified.return_value = [record("a-1"), record("a-2")]
        repository.mark_verified.return_value = 2

        result = await service.verify_all_pending()

        repository.mark_verified.assert_called_once_with(["a-1", "a-2"])
        assert result.verified == 2
