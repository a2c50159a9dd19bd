"""
Session Store.

Holds the identity, profile, student record and effective role of one
portal session and keeps them current as the auth state changes.

Concurrency model:
    Every mutation goes through ``_transition``, which swaps in a new frozen
    snapshot in one step. Load sequences (bootstrap, sign-in, refresh) are
    serialized by a lock and each runs as a numbered episode. Sign-out and
    the timeout guard bump the episode number, so writes from a superseded
    sequence are dropped instead of landing on top of newer state.

    The body of an episode runs as its own task, raced against the load
    timeout. When the timeout wins the task is cancelled, the lock is
    released and the caller gets the timed-out snapshot immediately.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Coroutine, Literal, Optional

from shared.config import Settings
from shared.models import Profile, StudentRecord, resolve_role
from shared.retry import fixed_delay, retry

from .interfaces import IAuthGateway, IProfileSource
from .models import AuthEvent, Identity, SessionState

logger = logging.getLogger(__name__)

FallbackPolicy = Literal["degrade", "reauthenticate"]
SessionListener = Callable[[SessionState], None]
EpisodeBody = Callable[[int], Coroutine[Any, Any, None]]

RESTORE_FAILED_MESSAGE = "We couldn't restore your session. Please retry."
TIMEOUT_MESSAGE = "Loading your session is taking too long. Please retry."
INTERRUPTED_MESSAGE = "Loading your session was interrupted. Please retry."
REAUTHENTICATE_MESSAGE = "Your profile could not be loaded. Please sign in again."

_SIGNED_OUT = {
    "identity": None,
    "profile": None,
    "student": None,
    "role": None,
    "is_new_user": False,
    "loading": False,
    "error": None,
    "timed_out": False,
}


class SessionStore:
    """
    Auth/profile/role state of one portal session.

    No exception escapes the store except from ``sign_in``, whose failure
    the caller reports to the user. Everything else degrades into the
    snapshot's ``error`` field.
    """

    def __init__(
        self,
        auth: IAuthGateway,
        profiles: IProfileSource,
        *,
        load_timeout: float = 15.0,
        profile_max_attempts: int = 3,
        profile_retry_delay: float = 1.0,
        fallback_policy: FallbackPolicy = "degrade",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._auth = auth
        self._profiles = profiles
        self._load_timeout = load_timeout
        self._profile_max_attempts = profile_max_attempts
        self._profile_retry_delay = profile_retry_delay
        self._fallback_policy = fallback_policy
        self._sleep = sleep

        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self._lock = asyncio.Lock()
        self._episode = 0
        self._loaded_token: Optional[str] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @classmethod
    def from_settings(
        cls,
        auth: IAuthGateway,
        profiles: IProfileSource,
        settings: Settings,
    ) -> "SessionStore":
        return cls(
            auth,
            profiles,
            load_timeout=settings.session_load_timeout,
            profile_max_attempts=settings.profile_max_attempts,
            profile_retry_delay=settings.profile_retry_delay,
            fallback_policy=settings.profile_fallback_policy,
        )

    # -------------------------------------------------------------------------
    # Read / subscribe
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener for new snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def bootstrap(self) -> SessionState:
        """
        Restore the persisted session and resolve profile and role.

        Subscribes to auth-state changes on first use. Returns within the
        load timeout even when the auth service never answers.
        """
        self._attach()

        async with self._lock:
            await self._run_episode(self._restore)

        return self._state

    async def refresh(self) -> SessionState:
        """Re-run the bootstrap (the "Retry" action after an error)."""
        return await self.bootstrap()

    async def load_profile(
        self,
        identity_id: str,
        metadata_fallback: Optional[dict[str, Any]] = None,
    ) -> SessionState:
        """Resolve profile, student record and role for ``identity_id``."""
        fallback = metadata_fallback or {}
        async with self._lock:
            await self._run_episode(
                lambda episode: self._load_profile(episode, identity_id, fallback)
            )
        return self._state

    async def handle_auth_event(
        self,
        event: AuthEvent,
        identity: Optional[Identity],
    ) -> None:
        """
        React to an auth-state transition.

        SIGNED_IN reloads everything (a repeated delivery for the same
        access token is ignored); SIGNED_OUT clears; TOKEN_REFRESHED with a
        loaded profile only swaps the identity.
        """
        if event is AuthEvent.SIGNED_OUT or identity is None:
            self._clear()
            return

        if event is AuthEvent.SIGNED_IN:
            await self._reload_for(identity)
            return

        if self._state.profile is not None:
            self._loaded_token = identity.access_token
            self._transition(identity=identity)
            return

        await self._reload_for(identity)

    async def sign_in(self, email: str, password: str) -> SessionState:
        """
        Sign in with email and password, then load the session.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            AuthServiceError: If the auth service fails
        """
        self._attach()
        identity = await self._auth.sign_in_with_password(email, password)
        await self.handle_auth_event(AuthEvent.SIGNED_IN, identity)
        return self._state

    async def sign_out(self) -> None:
        """Sign out remotely if possible; local state is cleared regardless."""
        try:
            await self._auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign-out failed, clearing local session anyway: {e}")
        finally:
            self._clear()

    def replace_profile(self, profile: Profile) -> None:
        """Swap in an edited profile without refetching."""
        if self._state.identity is not None and self._state.identity.id == profile.id:
            self._transition(profile=profile)

    def close(self) -> None:
        """Drop the auth subscription and all listeners."""
        if self._unsubscribe is not None:
            try:
                self._unsubscribe()
            except Exception as e:
                logger.debug(f"Auth unsubscribe failed: {e}")
            self._unsubscribe = None
        self._listeners.clear()

    # -------------------------------------------------------------------------
    # Load sequence
    # -------------------------------------------------------------------------

    async def _reload_for(self, identity: Identity) -> None:
        async with self._lock:
            current = self._state.identity
            if (
                identity.access_token
                and identity.access_token == self._loaded_token
                and current is not None
                and current.id == identity.id
            ):
                logger.debug(f"Session for {identity.id} already loaded, skipping reload")
                return

            await self._run_episode(lambda episode: self._load_identity(episode, identity))

    async def _restore(self, episode: int) -> None:
        try:
            identity = await self._auth.get_session()
        except Exception as e:
            logger.error(f"Failed to read persisted session: {e}")
            self._transition(episode, loading=False, error=RESTORE_FAILED_MESSAGE)
            return

        if identity is None:
            self._transition(episode, **_SIGNED_OUT)
            return

        await self._load_identity(episode, identity)

    async def _load_identity(self, episode: int, identity: Identity) -> None:
        self._loaded_token = identity.access_token
        self._transition(episode, identity=identity)
        await self._load_profile(episode, identity.id, identity.user_metadata)

    async def _load_profile(
        self,
        episode: int,
        identity_id: str,
        metadata_fallback: dict[str, Any],
    ) -> None:
        metadata_role = metadata_fallback.get("role")

        try:
            outcome = await retry(
                lambda: asyncio.to_thread(self._profiles.get_profile, identity_id),
                self._profile_max_attempts,
                fixed_delay(self._profile_retry_delay),
                label=f"Profile fetch for {identity_id}",
                sleep=self._sleep,
            )

            if outcome.value is not None:
                profile: Profile = outcome.value
                student, is_new_user = await self._fetch_student(identity_id)
                self._transition(
                    episode,
                    profile=profile,
                    role=resolve_role(profile.role, metadata_role),
                    student=student,
                    is_new_user=is_new_user,
                    loading=False,
                    error=None,
                )
                return

            if self._fallback_policy == "reauthenticate":
                logger.warning(
                    f"Profile for {identity_id} unavailable after {outcome.attempts} attempts; "
                    "forcing re-authentication"
                )
                if self._transition(episode, **{**_SIGNED_OUT, "error": REAUTHENTICATE_MESSAGE}):
                    self._loaded_token = None
                    try:
                        await self._auth.sign_out()
                    except Exception as e:
                        logger.warning(f"Sign-out after missing profile failed: {e}")
                return

            role = resolve_role(None, metadata_role)
            logger.warning(
                f"Profile for {identity_id} unavailable after {outcome.attempts} attempts; "
                f"continuing with metadata role '{role.value}'"
            )
            self._transition(
                episode,
                profile=None,
                student=None,
                role=role,
                is_new_user=True,
                loading=False,
            )
        except Exception as e:
            logger.exception(f"Session load failed for {identity_id}: {e}")
            self._transition(
                episode,
                profile=None,
                student=None,
                role=None,
                is_new_user=False,
                loading=False,
                error=RESTORE_FAILED_MESSAGE,
            )

    async def _fetch_student(self, profile_id: str) -> tuple[Optional[StudentRecord], bool]:
        """Best-effort student record lookup; absence marks a new user."""
        try:
            student = await asyncio.to_thread(self._profiles.get_student_for_profile, profile_id)
        except Exception as e:
            logger.warning(f"Student record fetch failed for {profile_id}: {e}")
            return None, False
        return student, student is None

    # -------------------------------------------------------------------------
    # Transitions and the timeout guard
    # -------------------------------------------------------------------------

    def _transition(self, episode: Optional[int] = None, **changes: Any) -> bool:
        """
        Apply ``changes`` as one new snapshot.

        Writes tagged with a superseded episode are dropped. Returns whether
        the change was applied.
        """
        if episode is not None and episode != self._episode:
            logger.debug(f"Dropping stale session update from episode {episode}")
            return False

        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Session listener failed")
        return True

    def _clear(self) -> None:
        self._episode += 1
        self._loaded_token = None
        self._transition(**_SIGNED_OUT)

    async def _run_episode(self, body: EpisodeBody) -> None:
        """
        Run ``body`` as one loading episode, bounded by the load timeout.

        Must be called with the lock held. The body task is cancelled on
        timeout and when the caller itself is cancelled.
        """
        async with self._loading_episode() as episode:
            task = asyncio.ensure_future(body(episode))
            try:
                done, _ = await asyncio.wait({task}, timeout=self._load_timeout)
            finally:
                if not task.done():
                    task.cancel()

            if task not in done:
                self._on_timeout(episode)
            elif not task.cancelled():
                task.result()

    @asynccontextmanager
    async def _loading_episode(self) -> AsyncIterator[int]:
        """
        Start a loading episode.

        An episode that ends without reaching a terminal state is marked
        interrupted.
        """
        self._episode += 1
        episode = self._episode
        self._transition(loading=True, error=None, timed_out=False)
        try:
            yield episode
        finally:
            if episode == self._episode and self._state.loading:
                self._transition(episode, loading=False, error=INTERRUPTED_MESSAGE)

    def _on_timeout(self, episode: int) -> None:
        if episode != self._episode or not self._state.loading:
            return

        logger.warning(f"Session load exceeded {self._load_timeout}s; giving up on this attempt")
        self._episode += 1
        self._loaded_token = None
        self._transition(loading=False, timed_out=True, error=TIMEOUT_MESSAGE)

    def _attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.on_auth_state_change(self.handle_auth_event)
