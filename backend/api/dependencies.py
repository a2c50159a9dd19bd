"""
Dependency injection setup for FastAPI.

This module provides the "container" that owns the process-wide pieces
(settings and the portal session registry) and the per-request service
factories. Services are bound to the caller's portal session, so every
query they issue runs with that user's Supabase session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from .middleware.session import get_portal_session

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.config import Settings
    from modules.auth.interfaces import IAuthService
    from modules.auth.registry import PortalSession, SessionRegistry
    from modules.admissions.interfaces import IAdmissionsService
    from modules.attendance.interfaces import IAttendanceService
    from modules.dashboard.interfaces import IDashboardService
    from modules.profiles.interfaces import IProfileService


class ServiceContainer:
    """
    Container for process-wide instances.

    The session registry is created lazily on first access.
    Use reset() to drop it (closing every live session) in tests.
    """

    def __init__(self, settings: "Settings | None" = None) -> None:
        self._settings = settings
        self._sessions: "SessionRegistry | None" = None

    @property
    def settings(self) -> "Settings":
        if self._settings is None:
            from shared.config import get_settings
            self._settings = get_settings()
        return self._settings

    @property
    def sessions(self) -> "SessionRegistry":
        """Get the portal session registry."""
        if self._sessions is None:
            from modules.auth.registry import SessionRegistry
            self._sessions = SessionRegistry(self.settings)
        return self._sessions

    def reset(self) -> None:
        """Close all live sessions and forget the registry."""
        if self._sessions is not None:
            self._sessions.close_all()
        self._sessions = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    Primarily used for testing.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service(session: "PortalSession" = Depends(get_portal_session)) -> "IAuthService":
    """FastAPI dependency for the auth service of the caller's session."""
    from modules.auth.service import AuthService
    return AuthService(session.store, session.auth)


def get_admissions_service(
    session: "PortalSession" = Depends(get_portal_session),
) -> "IAdmissionsService":
    """FastAPI dependency for the admissions service."""
    from modules.admissions.repository import AdmissionsRepository
    from modules.admissions.service import AdmissionsService
    return AdmissionsService(AdmissionsRepository(session.client))


def get_attendance_service(
    session: "PortalSession" = Depends(get_portal_session),
) -> "IAttendanceService":
    """FastAPI dependency for the attendance service."""
    from modules.attendance.repository import AttendanceRepository
    from modules.attendance.service import AttendanceService
    return AttendanceService(
        AttendanceRepository(session.client),
        low_attendance_threshold=get_container().settings.low_attendance_threshold,
    )


def get_dashboard_service(
    session: "PortalSession" = Depends(get_portal_session),
) -> "IDashboardService":
    """FastAPI dependency for the dashboard service."""
    from modules.dashboard.repository import DashboardRepository
    from modules.dashboard.service import DashboardService
    return DashboardService(DashboardRepository(session.client))


def get_profile_service(
    session: "PortalSession" = Depends(get_portal_session),
) -> "IProfileService":
    """FastAPI dependency for the profile service."""
    from modules.profiles.repository import ProfileUpdateRepository
    from modules.profiles.service import ProfileService
    return ProfileService(ProfileUpdateRepository(session.client), session.store)
