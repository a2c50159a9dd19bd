"""
Authentication module interfaces.

The Session Store depends on these protocols, not on the Supabase SDK,
so tests can drive it with mocks and the SDK can be swapped out.
"""

from typing import Any, Awaitable, Callable, Optional, Protocol, runtime_checkable

from shared.models import Profile, StudentRecord

from .models import (
    ApprovalResult,
    AuthEvent,
    Identity,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

AuthEventCallback = Callable[[AuthEvent, Optional[Identity]], Awaitable[None]]


@runtime_checkable
class IAuthGateway(Protocol):
    """
    Interface to the hosted authentication service of one portal session.

    All calls are coroutines; implementations must not block the loop.
    """

    async def get_session(self) -> Optional[Identity]:
        """
        Return the persisted session's identity, or None.

        Raises:
            AuthServiceError: If the auth service cannot be reached
        """
        ...

    def on_auth_state_change(self, callback: AuthEventCallback) -> Callable[[], None]:
        """
        Subscribe to auth-state transitions.

        Args:
            callback: Coroutine function run on the event loop for each event

        Returns:
            A callable that cancels the subscription
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            AuthServiceError: On any other failure
        """
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
    ) -> Optional[Identity]:
        """
        Create an account carrying ``metadata`` as user metadata.

        Returns:
            The new identity, or None when email confirmation is pending
        """
        ...

    async def sign_out(self) -> None:
        """End the session with the auth service."""
        ...

    async def update_user(self, attributes: dict[str, Any]) -> None:
        """Update the signed-in user's attributes (e.g. password)."""
        ...

    async def invoke_rpc(self, name: str, params: dict[str, Any]) -> Any:
        """Call a remote database function and return its payload."""
        ...


@runtime_checkable
class IProfileSource(Protocol):
    """
    Read access to the two records the Session Store resolves.

    Methods are synchronous (the repository style); the store runs them
    off the event loop.
    """

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Return the profile for an identity id, or None if absent."""
        ...

    def get_student_for_profile(self, profile_id: str) -> Optional[StudentRecord]:
        """Return the student record keyed by profile id, or None."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for the account operations behind the login, registration,
    profile and approval pages.
    """

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Sign in and resolve where the user lands.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
        """
        ...

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        """
        Create a student account.

        Raises:
            RegistrationError: If the auth service refuses the sign-up
        """
        ...

    async def logout(self) -> None:
        """Sign out; never fails."""
        ...

    async def change_password(self, password: str) -> None:
        """Set a new password for the signed-in user."""
        ...

    async def approve_student(self, token: str) -> ApprovalResult:
        """
        Approve an admission through the emailed one-time token.

        Raises:
            ApprovalTokenMissingError: If no token was supplied
        """
        ...
