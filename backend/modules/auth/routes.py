"""
Account API endpoints.

Login, registration, logout, password change and the admission
approval link.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.session import RequireSession

from .interfaces import IAuthService
from .models import (
    ApprovalRequest,
    ApprovalResult,
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    RegisterRequest,
    RegisterResponse,
)
from .registry import PortalSession

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Sign in with email and password.

    ``redirect_to`` is the admin dashboard for admin and teacher roles,
    the student dashboard otherwise.
    """
    return await service.login(request.email, request.password)


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> RegisterResponse:
    return await service.register(request)


@router.post("/logout", status_code=204)
async def logout(service: IAuthService = Depends(get_auth_service)) -> None:
    await service.logout()


@router.post("/password", status_code=204)
async def change_password(
    request: PasswordChangeRequest,
    session: PortalSession = RequireSession,
    service: IAuthService = Depends(get_auth_service),
) -> None:
    await service.change_password(request.password)


@router.post("/approve", response_model=ApprovalResult)
async def approve_student(
    request: ApprovalRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApprovalResult:
    """Approve an admission through the one-time token from the email link."""
    return await service.approve_student(request.token)
