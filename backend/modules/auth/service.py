"""
Authentication service implementation.

Account operations of one portal session, layered over its Session Store
and auth gateway.
"""

import logging
from typing import Any

from shared.models import Role

from .interfaces import IAuthGateway, IAuthService
from .models import (
    ApprovalResult,
    AuthEvent,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from .exceptions import ApprovalTokenMissingError, NotAuthenticatedError
from .roles import STUDENT_HOME_PATH, home_path_for
from .session_store import SessionStore

logger = logging.getLogger(__name__)

APPROVAL_RPC = "approve_student_by_token"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Sign-in goes through the Session Store so the profile is resolved
    (with retries and metadata fallback) before the landing page is chosen.
    """

    def __init__(self, store: SessionStore, auth: IAuthGateway):
        self._store = store
        self._auth = auth

    async def login(self, email: str, password: str) -> LoginResponse:
        state = await self._store.sign_in(email, password)
        role = state.role or Role.STUDENT
        logger.info(f"User {state.identity.id if state.identity else '?'} signed in as {role.value}")
        return LoginResponse(
            role=role,
            redirect_to=home_path_for(role),
            is_new_user=state.is_new_user,
        )

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        identity = await self._auth.sign_up(
            request.email,
            request.password,
            {
                "first_name": request.first_name,
                "last_name": request.last_name,
                "role": Role.STUDENT.value,
            },
        )

        if identity is None:
            logger.info("Registration accepted, email confirmation pending")
            return RegisterResponse(email=request.email, redirect_to="/login")

        await self._store.handle_auth_event(AuthEvent.SIGNED_IN, identity)
        return RegisterResponse(
            id=identity.id,
            email=identity.email or request.email,
            redirect_to=STUDENT_HOME_PATH,
        )

    async def logout(self) -> None:
        await self._store.sign_out()

    async def change_password(self, password: str) -> None:
        if self._store.state.identity is None:
            raise NotAuthenticatedError()
        await self._auth.update_user({"password": password})

    async def approve_student(self, token: str) -> ApprovalResult:
        token = (token or "").strip()
        if not token:
            raise ApprovalTokenMissingError()

        payload = _single(await self._auth.invoke_rpc(APPROVAL_RPC, {"token": token}))
        if payload.get("success"):
            return ApprovalResult(success=True, message=payload.get("message"))
        return ApprovalResult(success=False, message=payload.get("message") or "Approval failed")


def _single(data: Any) -> dict[str, Any]:
    """RPC payloads arrive either as an object or as a one-row list."""
    if isinstance(data, list):
        data = data[0] if data else {}
    return data if isinstance(data, dict) else {}
