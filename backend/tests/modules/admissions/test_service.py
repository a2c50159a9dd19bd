"""Tests for the admissions service."""

import threading
from unittest.mock import MagicMock

import pytest

from modules.admissions.exceptions import StudentNotFoundError
from modules.admissions.models import Application
from modules.admissions.service import AdmissionsService
from shared.models import AdmissionStatus


def applications():
    return [
        Application(
            id="s-1",
            admission_status="PENDING",
            profile={"first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com"},
        ),
        Application(
            id="s-2",
            admission_status="Approved",
            profile={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        ),
        Application(id="s-3", admission_status="rejected"),
    ]


@pytest.fixture
def repository():
    repo = MagicMock()
    repo.list_applications.return_value = applications()
    return repo


@pytest.fixture
def service(repository):
    return AdmissionsService(repository)


class TestListing:
    @pytest.mark.asyncio
    async def test_list_applications(self, service):
        response = await service.list_applications()
        assert response.total == 3

    @pytest.mark.asyncio
    async def test_filter_by_status_includes_legacy_rows(self, service):
        response = await service.list_students(status=AdmissionStatus.ADMITTED)
        assert [item.id for item in response.items] == ["s-2"]

    @pytest.mark.asyncio
    async def test_search_and_status_combine(self, service):
        response = await service.list_students(search="grace", status=AdmissionStatus.PENDING)
        assert [item.id for item in response.items] == ["s-1"]

        response = await service.list_students(search="grace", status=AdmissionStatus.REJECTED)
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_no_filters(self, service):
        response = await service.list_students()
        assert response.total == 3


class TestStatusChanges:
    @pytest.mark.asyncio
    async def test_approve_writes_admitted(self, service, repository):
        repository.update_status.return_value = True
        repository.get_application.return_value = Application(id="s-1", admission_status="ADMITTED")

        result = await service.approve("s-1")

        repository.update_status.assert_called_once_with("s-1", AdmissionStatus.ADMITTED)
        assert result.admission_status is AdmissionStatus.ADMITTED

    @pytest.mark.asyncio
    async def test_reject_writes_rejected(self, service, repository):
        repository.update_status.return_value = True
        repository.get_application.return_value = Application(id="s-1", admission_status="REJECTED")

        await service.reject("s-1")

        repository.update_status.assert_called_once_with("s-1", AdmissionStatus.REJECTED)

    @pytest.mark.asyncio
    async def test_unknown_student(self, service, repository):
        repository.update_status.return_value = False

        with pytest.raises(StudentNotFoundError):
            await service.set_status("s-404", AdmissionStatus.PENDING)

        repository.get_application.assert_not_called()

    @pytest.mark.asyncio
    async def test_row_hidden_after_update(self, service, repository):
        repository.update_status.return_value = True
        repository.get_application.return_value = None

        with pytest.raises(StudentNotFoundError):
            await service.set_status("s-1", AdmissionStatus.PENDING)


@pytest.mark.asyncio
async def test_queries_run_off_the_event_loop_thread(repository):
    threads = []

    def list_applications():
        threads.append(threading.get_ident())
        return applications()

    repository.list_applications.side_effect = list_applications

    await AdmissionsService(repository).list_applications()

    assert threads and threads[0] != threading.get_ident()
