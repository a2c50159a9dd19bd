"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import reset_container
from api.middleware.session import get_portal_session
from shared.config import get_settings

from tests.factories import (
    FakeAuthGateway,
    FakeProfileSource,
    make_identity,
    make_portal_session,
    make_profile,
    make_student,
)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Fresh settings and service container for every test."""
    get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def identity():
    return make_identity()


@pytest.fixture
def profile():
    return make_profile()


@pytest.fixture
def student():
    return make_student()


@pytest.fixture
def auth_gateway() -> FakeAuthGateway:
    return FakeAuthGateway()


@pytest.fixture
def profile_source() -> FakeProfileSource:
    return FakeProfileSource()


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    return create_app()


@pytest.fixture
def client_for(app):
    """
    Build a TestClient whose requests all resolve to ``portal_session``.

    Usage:
        client = client_for(make_portal_session(role=Role.ADMIN))
    """

    def build(portal_session) -> TestClient:
        app.dependency_overrides[get_portal_session] = lambda: portal_session
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


@pytest.fixture
def student_session(profile, student):
    """Signed-in, admitted student."""
    return make_portal_session(profile=profile, student=student)


@pytest.fixture
def admin_session():
    """Signed-in admin without a student record."""
    from shared.models import Role

    admin = make_profile(profile_id="admin-1", role="admin", first_name="Ada")
    return make_portal_session(
        identity=make_identity(user_id="admin-1", email="admin@example.com"),
        profile=admin,
        role=Role.ADMIN,
    )
