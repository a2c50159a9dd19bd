"""
Portal session cookie codec.

The cookie carries only an opaque session id; it is signed (HS256) so a
client cannot forge or extend someone else's session. Session data stays
server-side in the registry. Its expiry slides: a cookie past half its
lifetime is re-issued on the next request, so only a browser idle for the
whole TTL loses its session.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from .exceptions import InvalidSessionCookieError

_ALGORITHM = "HS256"
_AUDIENCE = "portal-session"


@dataclass(frozen=True)
class SessionCookie:
    """A verified cookie: the session it names and when it stops verifying."""

    session_id: str
    expires_at: datetime

    def needs_renewal(self, ttl_seconds: int, now: Optional[datetime] = None) -> bool:
        """True once less than half of a ``ttl_seconds`` lifetime remains."""
        now = now or datetime.now(timezone.utc)
        return self.expires_at - now < timedelta(seconds=ttl_seconds / 2)


def new_session_id() -> str:
    return secrets.token_urlsafe(24)


def encode_session_cookie(session_id: str, secret: str, ttl_seconds: int) -> str:
    """Sign ``session_id`` into a cookie value valid for ``ttl_seconds``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sid": session_id,
        "aud": _AUDIENCE,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)


def read_session_cookie(value: str, secret: str) -> SessionCookie:
    """
    Verify a cookie value.

    Raises:
        InvalidSessionCookieError: If the value is missing, forged or expired
    """
    if not value:
        raise InvalidSessionCookieError("Missing session cookie")

    try:
        payload = jwt.decode(value, secret, algorithms=[_ALGORITHM], audience=_AUDIENCE)
    except jwt.ExpiredSignatureError:
        raise InvalidSessionCookieError("Session cookie has expired")
    except jwt.InvalidTokenError as e:
        raise InvalidSessionCookieError(f"Invalid session cookie: {e}")

    session_id = payload.get("sid")
    if not isinstance(session_id, str) or not session_id:
        raise InvalidSessionCookieError("Session cookie has no session id")
    return SessionCookie(
        session_id=session_id,
        expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
    )


def decode_session_cookie(value: str, secret: str) -> str:
    """Verify a cookie value and return its session id."""
    return read_session_cookie(value, secret).session_id
