"""Tests for the account service."""

import pytest

from modules.auth.exceptions import (
    ApprovalTokenMissingError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)
from modules.auth.models import RegisterRequest
from modules.auth.service import APPROVAL_RPC, AuthService
from shared.models import Role

from tests.factories import FakeAuthGateway, FakeProfileSource, make_identity, make_profile, make_store


@pytest.fixture
def auth():
    return FakeAuthGateway()


def service_for(auth, profiles=None, **kwargs):
    store = make_store(auth, profiles or FakeProfileSource(), **kwargs)
    return AuthService(store, auth), store


class TestLogin:
    @pytest.mark.asyncio
    async def test_admin_lands_on_admin_dashboard(self, auth):
        auth.sign_in_result = make_identity()
        service, _ = service_for(auth, FakeProfileSource(profiles=[make_profile(role="admin")]))

        response = await service.login("admin@example.com", "secret")

        assert response.role is Role.ADMIN
        assert response.redirect_to == "/admin/dashboard"

    @pytest.mark.asyncio
    async def test_teacher_lands_on_admin_dashboard(self, auth):
        auth.sign_in_result = make_identity()
        service, _ = service_for(auth, FakeProfileSource(profiles=[make_profile(role="teacher")]))

        response = await service.login("teacher@example.com", "secret")

        assert response.redirect_to == "/admin/dashboard"

    @pytest.mark.asyncio
    async def test_student_without_profile_lands_on_student_dashboard(self, auth):
        auth.sign_in_result = make_identity()
        service, _ = service_for(auth)

        response = await service.login("student@example.com", "secret")

        assert response.role is Role.STUDENT
        assert response.redirect_to == "/student/dashboard"
        assert response.is_new_user is True

    @pytest.mark.asyncio
    async def test_invalid_credentials_propagate(self, auth):
        auth.sign_in_error = InvalidCredentialsError()
        service, _ = service_for(auth)

        with pytest.raises(InvalidCredentialsError):
            await service.login("student@example.com", "wrong")


class TestRegister:
    @pytest.mark.asyncio
    async def test_registers_student_with_metadata(self, auth):
        auth.sign_up_result = make_identity(user_id="new-1", email="new@example.com")
        service, store = service_for(auth)

        response = await service.register(
            RegisterRequest(
                email="new@example.com",
                password="secret1",
                first_name="Ada",
                last_name="Lovelace",
            )
        )

        email, metadata = auth.sign_up_calls[0]
        assert email == "new@example.com"
        assert metadata == {"first_name": "Ada", "last_name": "Lovelace", "role": "student"}
        assert response.id == "new-1"
        assert response.redirect_to == "/student/dashboard"
        assert store.state.identity.id == "new-1"

    @pytest.mark.asyncio
    async def test_pending_confirmation_goes_to_login(self, auth):
        service, store = service_for(auth)

        response = await service.register(
            RegisterRequest(
                email="new@example.com",
                password="secret1",
                first_name="Ada",
                last_name="Lovelace",
            )
        )

        assert response.id is None
        assert response.redirect_to == "/login"
        assert store.state.identity is None


class TestLogoutAndPassword:
    @pytest.mark.asyncio
    async def test_logout_clears_store(self, auth):
        auth.session = make_identity()
        service, store = service_for(auth, FakeProfileSource(profiles=[make_profile()]))
        await store.bootstrap()

        await service.logout()

        assert store.state.identity is None
        assert auth.sign_out_calls == 1

    @pytest.mark.asyncio
    async def test_change_password(self, auth):
        auth.session = make_identity()
        service, store = service_for(auth, FakeProfileSource(profiles=[make_profile()]))
        await store.bootstrap()

        await service.change_password("new-secret")

        assert auth.update_user_calls == [{"password": "new-secret"}]

    @pytest.mark.asyncio
    async def test_change_password_requires_identity(self, auth):
        service, store = service_for(auth)
        await store.bootstrap()

        with pytest.raises(NotAuthenticatedError):
            await service.change_password("new-secret")


class TestApproveStudent:
    @pytest.mark.asyncio
    async def test_missing_token(self, auth):
        service, _ = service_for(auth)

        with pytest.raises(ApprovalTokenMissingError):
            await service.approve_student("   ")

        assert auth.rpc_calls == []

    @pytest.mark.asyncio
    async def test_successful_approval(self, auth):
        auth.rpc_result = {"success": True, "message": "Student approved"}
        service, _ = service_for(auth)

        result = await service.approve_student(" tok-1 ")

        assert auth.rpc_calls == [(APPROVAL_RPC, {"token": "tok-1"})]
        assert result.success is True
        assert result.message == "Student approved"

    @pytest.mark.asyncio
    async def test_list_payload_is_unwrapped(self, auth):
        auth.rpc_result = [{"success": False, "message": "Token already used"}]
        service, _ = service_for(auth)

        result = await service.approve_student("tok-1")

        assert result.success is False
        assert result.message == "Token already used"

    @pytest.mark.asyncio
    async def test_empty_payload_is_failure(self, auth):
        auth.rpc_result = None
        service, _ = service_for(auth)

        result = await service.approve_student("tok-1")

        assert result.success is False
        assert result.message == "Approval failed"
