"""
Base exception classes for the portal backend.

Each module should define its own exceptions that inherit from these bases.
The API layer renders any of them as::

    {"error": <code>, "message": <text>, "details": {...}, "retryable": bool}

with the HTTP status taken from the class. ``details`` keys used across
modules: ``service`` (failing upstream), ``redirect_to`` (guard target
path), ``original_error`` (upstream message, for logs and support).
"""

from typing import Optional, Any


class PortalError(Exception):
    """
    Base exception for all portal errors.

    All custom exceptions should inherit from this class. Subclasses set
    ``status_code`` and, when repeating the same request can succeed,
    ``retryable``; the client shows a "Retry" action for those.
    """

    status_code: int = 500
    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }


class NotFoundError(PortalError):
    """Resource not found."""

    status_code = 404


class ValidationError(PortalError):
    """Input validation failed."""

    status_code = 422


class ConflictError(PortalError):
    """Request conflicts with the current state of a resource (e.g. a duplicate)."""

    status_code = 409


class AuthenticationError(PortalError):
    """No usable portal session: missing or rejected credentials, bad cookie."""

    status_code = 401


class AuthorizationError(PortalError):
    """Signed in, but the effective role may not do this."""

    status_code = 403


class ExternalServiceError(PortalError):
    """Supabase (auth, database or RPC) failed or could not be reached."""

    status_code = 502
    retryable = True

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
