"""
Registry of live portal sessions.

One entry per browser: its own Supabase client, auth gateway and Session
Store. Entries idle for longer than ``session_idle_ttl`` are evicted, and
the map never holds more than ``max_sessions`` entries: when it is full,
the least recently used signed-out session makes room first, then the
least recently used signed-in one.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from supabase import Client

from shared.config import Settings
from shared.database import create_session_client

from .gateway import SupabaseAuthGateway
from .interfaces import IAuthGateway
from .repository import ProfileRepository
from .session_store import SessionStore
from .cookies import new_session_id

logger = logging.getLogger(__name__)


@dataclass
class PortalSession:
    """Everything bound to one browser session."""

    id: str
    client: Client
    auth: IAuthGateway
    store: SessionStore
    last_seen: float = field(default_factory=time.monotonic)

    def touch(self, now: Optional[float] = None) -> None:
        self.last_seen = now if now is not None else time.monotonic()

    def close(self) -> None:
        self.store.close()


SessionFactory = Callable[[str], PortalSession]


def build_portal_session(session_id: str, settings: Settings) -> PortalSession:
    """Wire a fresh Supabase client into a gateway and Session Store."""
    client = create_session_client()
    auth = SupabaseAuthGateway(client)
    store = SessionStore.from_settings(auth, ProfileRepository(client), settings)
    return PortalSession(id=session_id, client=client, auth=auth, store=store)


class SessionRegistry:
    """In-memory map of session id to PortalSession."""

    def __init__(
        self,
        settings: Settings,
        session_factory: Optional[SessionFactory] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._factory = session_factory or (lambda sid: build_portal_session(sid, settings))
        self._clock = clock
        self._sessions: dict[str, PortalSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[PortalSession]:
        """Return a live session and mark it used, or None."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_idle(session):
            self.discard(session_id)
            return None
        session.touch(self._clock())
        return session

    async def create(self) -> PortalSession:
        """Create, register and bootstrap a new session."""
        self.evict_idle()
        self._make_room()
        session = self._factory(new_session_id())
        session.touch(self._clock())
        self._sessions[session.id] = session
        await session.store.bootstrap()
        logger.debug(f"Created portal session ({len(self._sessions)} live)")
        return session

    async def get_or_create(self, session_id: Optional[str]) -> tuple[PortalSession, bool]:
        """Return ``(session, created)``."""
        session = self.get(session_id)
        if session is not None:
            return session, False
        return await self.create(), True

    def discard(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def evict_idle(self) -> int:
        """Drop sessions idle for longer than the configured TTL."""
        idle = [sid for sid, s in self._sessions.items() if self._is_idle(s)]
        for sid in idle:
            self.discard(sid)
        if idle:
            logger.info(f"Evicted {len(idle)} idle portal session(s)")
        return len(idle)

    def close_all(self) -> None:
        for sid in list(self._sessions):
            self.discard(sid)

    def _make_room(self) -> None:
        excess = len(self._sessions) - self._settings.max_sessions + 1
        if excess <= 0:
            return

        by_priority = sorted(
            self._sessions.values(),
            key=lambda s: (s.store.state.identity is not None, s.last_seen),
        )
        for session in by_priority[:excess]:
            self.discard(session.id)
        logger.warning(
            f"Session registry full ({self._settings.max_sessions}); evicted {excess} session(s)"
        )

    def _is_idle(self, session: PortalSession) -> bool:
        return self._clock() - session.last_seen > self._settings.session_idle_ttl
