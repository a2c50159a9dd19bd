"""Tests for the attendance repository."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from modules.attendance.exceptions import AlreadyCheckedInError
from modules.attendance.repository import AttendanceRepository


@pytest.fixture
def db():
    return MagicMock()


@pytest.fixture
def repo(db):
    return AttendanceRepository(db)


class TestAttendanceRepository:
    def test_find_schedule_id_filters_by_cohort_and_day(self, db, repo):
        select = db.table.return_value.select
        first_eq = select.return_value.eq
        second_eq = first_eq.return_value.eq
        second_eq.return_value.limit.return_value.execute.return_value = MagicMock(data=[{"id": "sched-1"}])

        assert repo.find_schedule_id("cohort-1", date(2024, 3, 14)) == "sched-1"
        db.table.assert_called_with("schedule")
        first_eq.assert_called_once_with("date", "2024-03-14")
        second_eq.assert_called_once_with("courses.cohort_id", "cohort-1")

    def test_find_schedule_id_none(self, db, repo):
        chain = db.table.return_value.select.return_value.eq.return_value.eq.return_value
        chain.limit.return_value.execute.return_value = MagicMock(data=[])

        assert repo.find_schedule_id("cohort-1", date(2024, 3, 14)) is None

    def test_insert_duplicate_maps_to_conflict(self, db, repo):
        db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value violates unique constraint"}
        )

        with pytest.raises(AlreadyCheckedInError):
            repo.insert_check_in({"student_id": "s-1", "schedule_id": "sched-1"})

    def test_insert_other_errors_propagate(self, db, repo):
        db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "42501", "message": "permission denied"}
        )

        with pytest.raises(APIError):
            repo.insert_check_in({"student_id": "s-1", "schedule_id": "sched-1"})

    def test_count_unverified_uses_exact_count(self, db, repo):
        select = db.table.return_value.select
        select.return_value.eq.return_value.execute.return_value = MagicMock(count=3, data=[])

        assert repo.count_unverified() == 3
        select.assert_called_once_with("id", count="exact")

    def test_count_defaults_to_zero(self, db, repo):
        select = db.table.return_value.select
        select.return_value.eq.return_value.execute.return_value = MagicMock(count=None, data=[])

        assert repo.count_unverified() == 0

    def test_mark_verified_empty_is_noop(self, db, repo):
        assert repo.mark_verified([]) == 0
        db.table.assert_not_called()

    def test_mark_verified_counts_rows(self, db, repo):
        update = db.table.return_value.update
        update.return_value.in_.return_value.execute.return_value = MagicMock(data=[{"id": "a"}, {"id": "b"}])

        assert repo.mark_verified(["a", "b"]) == 2
        update.assert_called_once_with({"is_verified": True})
        update.return_value.in_.assert_called_once_with("id", ["a", "b"])

    def test_student_labels_skips_query_for_no_ids(self, db, repo):
        assert repo.student_labels([]) == []
        db.table.assert_not_called()

    def test_enrolled_students_exclude_missing_cohort(self, db, repo):
        select = db.table.return_value.select
        select.return_value.not_.is_.return_value.execute.return_value = MagicMock(data=[{"id": "s-1"}])

        assert repo.enrolled_student_labels() == [{"id": "s-1"}]
        select.return_value.not_.is_.assert_called_once_with("cohort_id", "null")

    def test_delete(self, db, repo):
        db.table.return_value.delete.return_value.eq.return_value.execute.return_value = MagicMock(data=[])
        assert repo.delete("a-404") is False
