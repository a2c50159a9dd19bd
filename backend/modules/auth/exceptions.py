"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password sign-in is rejected."""

    def __init__(self, message: str = "Invalid login credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation needs a signed-in portal session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class InvalidSessionCookieError(AuthenticationError):
    """Raised when a portal session cookie is malformed, forged or expired."""

    def __init__(self, message: str = "Invalid session cookie"):
        super().__init__(message, code="INVALID_SESSION_COOKIE")


class RegistrationError(ValidationError):
    """Raised when the auth service refuses a sign-up."""

    def __init__(self, message: str = "Registration failed"):
        super().__init__(message, code="REGISTRATION_FAILED")


class AccountUpdateError(ValidationError):
    """Raised when the auth service refuses a user attribute update."""

    def __init__(self, message: str = "Account update failed"):
        super().__init__(message, code="ACCOUNT_UPDATE_FAILED")


class ApprovalTokenMissingError(ValidationError):
    """Raised when the approval landing page is hit without a token."""

    def __init__(self):
        super().__init__("No approval token provided", code="APPROVAL_TOKEN_MISSING")


class AuthServiceError(ExternalServiceError):
    """Raised when the hosted auth service fails unexpectedly."""

    def __init__(self, message: str, original_error: Optional[str] = None):
        super().__init__(
            message,
            service="supabase-auth",
            code="AUTH_SERVICE_ERROR",
            details={"original_error": original_error},
        )


class RouteRedirect(AuthorizationError):
    """
    Raised by the route guard when navigation must be redirected.

    ``status_code`` is 401 for the login redirect and 403 for a role
    redirect to the user's home page.
    """

    def __init__(self, location: str, status_code: int, reason: str):
        super().__init__(
            reason,
            code="REDIRECT",
            details={"redirect_to": location},
        )
        self.location = location
        self.status_code = status_code


class SessionLoading(AuthorizationError):
    """Raised by the route guard while the session is still bootstrapping."""

    def __init__(self):
        super().__init__("Loading your session...", code="SESSION_LOADING")
