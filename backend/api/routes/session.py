"""
Session endpoints.

Expose the caller's Session Store snapshot and its recovery actions.
These are not guarded: they are what the client polls while a session
is loading or after it failed.
"""

import logging

from fastapi import APIRouter, Depends, Request

from modules.auth.models import SessionStateResponse
from modules.auth.registry import PortalSession, SessionRegistry

from ..middleware.session import get_portal_session, get_session_registry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SessionStateResponse)
async def get_session(
    session: PortalSession = Depends(get_portal_session),
) -> SessionStateResponse:
    """Current snapshot: identity, profile, role, loading and error."""
    return SessionStateResponse.from_state(session.store.state)


@router.post("/retry", response_model=SessionStateResponse)
async def retry_session(
    session: PortalSession = Depends(get_portal_session),
) -> SessionStateResponse:
    """Re-run the bootstrap after an error or timeout."""
    state = await session.store.refresh()
    return SessionStateResponse.from_state(state)


@router.post("/reset", status_code=204)
async def reset_session(
    request: Request,
    session: PortalSession = Depends(get_portal_session),
    registry: SessionRegistry = Depends(get_session_registry),
) -> None:
    """Sign out, forget this session and drop its cookie."""
    await session.store.sign_out()
    registry.discard(session.id)
    request.state.clear_session_cookie = True
    logger.info("Portal session reset by client")
