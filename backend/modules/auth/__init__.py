"""
Authentication module.

Owns the per-browser Session Store, the route guard that reads it, and
the account operations (login, registration, password, admission approval).

Public API:
- SessionStore: auth/profile/role state of one portal session
- evaluate_route / RouteDecision: protected-page decision
- ROLE_CAPABILITIES: what each role may reach
- SessionRegistry / PortalSession: cookie-keyed live sessions
- IAuthGateway, IProfileSource, IAuthService: module interfaces
- Auth exceptions: InvalidCredentialsError, RouteRedirect, etc.
"""

from .interfaces import IAuthGateway, IAuthService, IProfileSource
from .models import AuthEvent, Identity, SessionState
from .roles import ROLE_CAPABILITIES, RoleCapabilities, capabilities_for, home_path_for
from .route_guard import RouteDecision, RouteOutcome, evaluate_route
from .session_store import SessionStore
from .registry import PortalSession, SessionRegistry
from .exceptions import (
    AccountUpdateError,
    ApprovalTokenMissingError,
    AuthServiceError,
    InvalidCredentialsError,
    InvalidSessionCookieError,
    NotAuthenticatedError,
    RegistrationError,
    RouteRedirect,
    SessionLoading,
)

__all__ = [
    # Interfaces
    "IAuthGateway",
    "IAuthService",
    "IProfileSource",
    # Models
    "AuthEvent",
    "Identity",
    "SessionState",
    # Roles and guard
    "ROLE_CAPABILITIES",
    "RoleCapabilities",
    "capabilities_for",
    "home_path_for",
    "RouteDecision",
    "RouteOutcome",
    "evaluate_route",
    # Session
    "SessionStore",
    "PortalSession",
    "SessionRegistry",
    # Exceptions
    "AccountUpdateError",
    "ApprovalTokenMissingError",
    "AuthServiceError",
    "InvalidCredentialsError",
    "InvalidSessionCookieError",
    "NotAuthenticatedError",
    "RegistrationError",
    "RouteRedirect",
    "SessionLoading",
]
