"""
Supabase implementation of the auth gateway.

Wraps the synchronous Supabase client of one portal session. Blocking SDK
calls run in a worker thread; auth-state callbacks fired from that thread
are handed back to the event loop.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from postgrest.exceptions import APIError
from supabase import AuthApiError, AuthError, Client

from .interfaces import AuthEventCallback, IAuthGateway
from .models import AuthEvent, Identity
from .exceptions import (
    AccountUpdateError,
    AuthServiceError,
    InvalidCredentialsError,
    RegistrationError,
)

logger = logging.getLogger(__name__)

# Status codes gotrue uses for rejected credentials
_CREDENTIAL_STATUSES = {400, 401}


class SupabaseAuthGateway(IAuthGateway):
    """Auth gateway backed by ``client.auth`` and ``client.rpc``."""

    def __init__(self, client: Client):
        self._client = client

    async def get_session(self) -> Optional[Identity]:
        try:
            session = await asyncio.to_thread(self._client.auth.get_session)
        except AuthError as e:
            raise AuthServiceError("Failed to read persisted session", str(e))
        return Identity.from_supabase_session(session)

    def on_auth_state_change(self, callback: AuthEventCallback) -> Callable[[], None]:
        loop = asyncio.get_running_loop()

        def dispatch(event: Any, session: Any) -> None:
            raw = getattr(event, "value", event)
            try:
                auth_event = AuthEvent(raw)
            except ValueError:
                logger.debug(f"Ignoring unsupported auth event: {raw}")
                return

            coro = callback(auth_event, Identity.from_supabase_session(session))
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None

            if running is loop:
                loop.create_task(coro)
            else:
                asyncio.run_coroutine_threadsafe(coro, loop)

        subscription = self._client.auth.on_auth_state_change(dispatch)
        return subscription.unsubscribe

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        try:
            response = await asyncio.to_thread(
                self._client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except AuthApiError as e:
            if e.status in _CREDENTIAL_STATUSES:
                raise InvalidCredentialsError(e.message or "Invalid login credentials")
            raise AuthServiceError("Sign-in failed", str(e))
        except AuthError as e:
            raise AuthServiceError("Sign-in failed", str(e))

        identity = Identity.from_supabase_session(response.session)
        if identity is None:
            raise InvalidCredentialsError("Sign-in did not return a session")
        return identity

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
    ) -> Optional[Identity]:
        try:
            response = await asyncio.to_thread(
                self._client.auth.sign_up,
                {"email": email, "password": password, "options": {"data": metadata}},
            )
        except AuthApiError as e:
            raise RegistrationError(e.message or "Registration failed")
        except AuthError as e:
            raise AuthServiceError("Registration failed", str(e))

        if response.user is None:
            raise RegistrationError()
        if response.session is None:
            # Email confirmation pending: the account exists but no session yet
            return None
        return Identity.from_supabase_session(response.session)

    async def sign_out(self) -> None:
        try:
            await asyncio.to_thread(self._client.auth.sign_out)
        except AuthError as e:
            raise AuthServiceError("Sign-out failed", str(e))

    async def update_user(self, attributes: dict[str, Any]) -> None:
        try:
            await asyncio.to_thread(self._client.auth.update_user, attributes)
        except AuthApiError as e:
            raise AccountUpdateError(e.message or "Account update failed")
        except AuthError as e:
            raise AuthServiceError("User update failed", str(e))

    async def invoke_rpc(self, name: str, params: dict[str, Any]) -> Any:
        try:
            result = await asyncio.to_thread(lambda: self._client.rpc(name, params).execute())
        except APIError as e:
            raise AuthServiceError(e.message or f"Remote call {name} failed", str(e))
        return result.data
