"""Tests for the dashboard endpoints."""

from unittest.mock import AsyncMock

import pytest

from api.dependencies import get_dashboard_service
from modules.dashboard.models import AdminDashboard, StudentDashboard, TimetableResponse
from shared.models import AdmissionStatus

from tests.factories import make_portal_session


@pytest.fixture
def service(app):
    mock = AsyncMock()
    app.dependency_overrides[get_dashboard_service] = lambda: mock
    return mock


def test_admin_dashboard(client_for, admin_session, service):
    service.admin_dashboard.return_value = AdminDashboard(total_students=12, revenue=99.5)

    response = client_for(admin_session).get("/api/admin/dashboard")

    assert response.status_code == 200
    assert response.json()["total_students"] == 12


def test_admin_dashboard_redirects_signed_out_users(client_for, service):
    response = client_for(make_portal_session(signed_in=False)).get("/api/admin/dashboard")

    assert response.status_code == 401
    assert response.headers["location"] == "/login"


def test_student_dashboard_uses_session_records(client_for, student_session, service):
    service.student_dashboard.return_value = StudentDashboard(
        first_name="Grace",
        admission_status=AdmissionStatus.ADMITTED,
        materials_locked=False,
    )

    response = client_for(student_session).get("/api/student/dashboard")

    assert response.status_code == 200
    state = student_session.store.state
    service.student_dashboard.assert_awaited_once_with(state.profile, state.student)


def test_student_dashboard_while_loading(client_for, service):
    session = make_portal_session(loading=True)

    response = client_for(session).get("/api/student/dashboard")

    assert response.status_code == 202
    assert response.json()["status"] == "loading"
    assert response.headers["retry-after"] == "1"
    service.student_dashboard.assert_not_called()


def test_student_courses(client_for, student_session, service):
    service.student_timetable.return_value = TimetableResponse(days=[])

    response = client_for(student_session).get("/api/student/courses")

    assert response.json() == {"days": []}
