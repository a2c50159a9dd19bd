"""
Shared infrastructure for the portal backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: per-session Supabase client factory
- exceptions: Base exception classes
- models: Profile / student record models and their enums
- retry: Bounded retry combinator

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import create_session_client
from .exceptions import (
    PortalError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import AdmissionStatus, Profile, Role, StudentRecord, resolve_role
from .retry import RetryOutcome, fixed_delay, retry

__all__ = [
    "Settings",
    "get_settings",
    "create_session_client",
    "PortalError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "AdmissionStatus",
    "Profile",
    "Role",
    "StudentRecord",
    "resolve_role",
    "RetryOutcome",
    "fixed_delay",
    "retry",
]
