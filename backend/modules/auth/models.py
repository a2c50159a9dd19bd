"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import Profile, Role, StudentRecord

from .roles import capabilities_for


class AuthEvent(str, Enum):
    """Auth-state transitions reported by the hosted auth service."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class Identity(BaseModel):
    """
    The authenticated principal of a portal session.

    Built from a Supabase auth session; the tokens stay server-side.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="User's email address")
    access_token: str = Field(default="", repr=False)
    refresh_token: str = Field(default="", repr=False)
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}  # Make immutable for safety

    @property
    def metadata_role(self) -> Optional[str]:
        """Role written into identity metadata at sign-up, if any."""
        role = self.user_metadata.get("role")
        return role if isinstance(role, str) else None

    @classmethod
    def from_supabase_session(cls, session: Any) -> Optional["Identity"]:
        """Map a Supabase ``Session`` (or None) to an Identity."""
        if session is None or getattr(session, "user", None) is None:
            return None
        user = session.user
        return cls(
            id=str(user.id),
            email=user.email or "",
            access_token=session.access_token or "",
            refresh_token=session.refresh_token or "",
            user_metadata=dict(user.user_metadata or {}),
        )


class SessionState(BaseModel):
    """
    Consistent snapshot of a Session Store.

    A new instance is produced by every transition; readers never see a
    half-applied update.
    """

    identity: Optional[Identity] = None
    profile: Optional[Profile] = None
    student: Optional[StudentRecord] = None
    role: Optional[Role] = None
    loading: bool = True
    is_new_user: bool = False
    error: Optional[str] = None
    timed_out: bool = False

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Credentials for password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Outcome of a successful sign-in."""

    role: Role
    redirect_to: str
    is_new_user: bool = False


class RegisterRequest(BaseModel):
    """Account details collected by the registration form."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class RegisterResponse(BaseModel):
    id: Optional[str] = None
    email: str
    redirect_to: str = "/student/dashboard"


class PasswordChangeRequest(BaseModel):
    password: str = Field(..., min_length=6, description="New password")


class ApprovalRequest(BaseModel):
    """Opaque approval token from the admissions email."""

    token: str = ""


class ApprovalResult(BaseModel):
    success: bool
    message: Optional[str] = None


class SessionStateResponse(BaseModel):
    """Public view of a session snapshot (no tokens)."""

    authenticated: bool
    loading: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    is_new_user: bool = False
    profile: Optional[Profile] = None
    student: Optional[StudentRecord] = None
    error: Optional[str] = None
    retryable: bool = False
    can_access_admin: bool = False

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionStateResponse":
        return cls(
            authenticated=state.is_authenticated,
            loading=state.loading,
            user_id=state.identity.id if state.identity else None,
            email=state.identity.email if state.identity else None,
            role=state.role,
            is_new_user=state.is_new_user,
            profile=state.profile,
            student=state.student,
            error=state.error,
            retryable=state.error is not None or state.timed_out,
            can_access_admin=state.is_authenticated and capabilities_for(state.role).can_access_admin,
        )
