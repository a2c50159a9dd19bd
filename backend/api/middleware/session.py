"""
Portal session middleware and guard dependencies.

Resolves the signed session cookie to a live PortalSession and gates
protected endpoints through the route guard.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from starlette.responses import Response

from shared.config import get_settings
from shared.models import Role, StudentRecord
from modules.auth.cookies import SessionCookie, encode_session_cookie, read_session_cookie
from modules.auth.exceptions import InvalidSessionCookieError, RouteRedirect, SessionLoading
from modules.auth.registry import PortalSession, SessionRegistry
from modules.auth.roles import LOGIN_PATH
from modules.auth.route_guard import RouteOutcome, evaluate_route
from modules.admissions.exceptions import StudentRecordNotFoundError

logger = logging.getLogger(__name__)


def get_session_registry() -> SessionRegistry:
    """FastAPI dependency for the process-wide session registry."""
    from ..dependencies import get_container
    return get_container().sessions


async def session_cookie_middleware(request: Request, call_next) -> Response:
    """
    Write or clear the session cookie after the endpoint has run.

    Done here rather than in a dependency so the cookie also reaches the
    client on error and redirect responses.
    """
    response = await call_next(request)
    settings = get_settings()

    if getattr(request.state, "clear_session_cookie", False):
        response.delete_cookie(settings.session_cookie_name, path="/")
    elif getattr(request.state, "session_cookie", None):
        response.set_cookie(
            settings.session_cookie_name,
            request.state.session_cookie,
            max_age=settings.session_idle_ttl,
            path="/",
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )
    return response


def _read_cookie(request: Request) -> Optional[SessionCookie]:
    settings = get_settings()
    raw = request.cookies.get(settings.session_cookie_name)
    if not raw:
        return None
    try:
        return read_session_cookie(raw, settings.session_secret)
    except InvalidSessionCookieError as e:
        logger.info(f"Ignoring session cookie: {e.message}")
        return None


async def get_portal_session(
    request: Request,
    registry: SessionRegistry = Depends(get_session_registry),
) -> PortalSession:
    """
    Dependency resolving the caller's portal session.

    A missing, invalid or expired cookie starts a new (bootstrapped)
    session and schedules a fresh cookie. A valid cookie past half its
    lifetime is re-issued so an active browser keeps its session.
    """
    settings = get_settings()
    cookie = _read_cookie(request)
    session, created = await registry.get_or_create(cookie.session_id if cookie else None)
    if created or cookie.needs_renewal(settings.session_idle_ttl):
        request.state.session_cookie = encode_session_cookie(
            session.id,
            settings.session_secret,
            settings.session_idle_ttl,
        )
    request.state.portal_session = session
    return session


def require_route(required_role: Optional[Role] = None) -> Callable:
    """
    Build a dependency that runs the route guard.

    Usage:
        @router.get("/admissions")
        async def admissions(session: PortalSession = RequireAdmin):
            ...
    """

    async def guard(session: PortalSession = Depends(get_portal_session)) -> PortalSession:
        decision = evaluate_route(session.store.state, required_role)

        if decision.outcome is RouteOutcome.LOADING:
            raise SessionLoading()

        if decision.outcome is RouteOutcome.REDIRECT:
            status_code = 401 if decision.redirect_to == LOGIN_PATH else 403
            raise RouteRedirect(decision.redirect_to, status_code, decision.reason or "Redirect")

        return session

    return guard


require_session = require_route()
require_admin = require_route(Role.ADMIN)


async def get_current_student(
    session: PortalSession = Depends(require_session),
) -> StudentRecord:
    """The signed-in user's student record; absent for users mid-onboarding."""
    student = session.store.state.student
    if student is None:
        raise StudentRecordNotFoundError(
            session.store.state.identity.id if session.store.state.identity else ""
        )
    return student


# Type aliases for cleaner route definitions
RequireSession = Depends(require_session)
RequireAdmin = Depends(require_admin)
CurrentStudent = Depends(get_current_student)
