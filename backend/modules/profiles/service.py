"""
Profile service implementation.
"""

import asyncio
import logging
import time
from pathlib import PurePosixPath
from typing import Any, Callable

from modules.auth.exceptions import NotAuthenticatedError
from modules.auth.session_store import SessionStore
from shared.models import Profile

from .interfaces import IProfileService
from .models import AvatarUploadResponse, PersonalDetailsUpdate, ProfileView, SocialLinksUpdate
from .exceptions import InvalidAvatarError, ProfileNotFoundError
from .repository import AVATAR_BUCKET, ProfileUpdateRepository

logger = logging.getLogger(__name__)


def avatar_path(user_id: str, filename: str, timestamp_ms: int) -> str:
    """Object key for an avatar: ``avatars/<uid>/<ms>_<name>``."""
    name = PurePosixPath(filename.replace("\\", "/")).name or "avatar"
    return f"{AVATAR_BUCKET}/{user_id}/{timestamp_ms}_{name}"


class ProfileService(IProfileService):
    """
    Edits to the profile of the session's signed-in user.

    Storage calls run in a worker thread; the Session Store is only touched
    from the event loop.
    """

    def __init__(
        self,
        repository: ProfileUpdateRepository,
        store: SessionStore,
        clock_ms: Callable[[], int] = lambda: int(time.time() * 1000),
    ):
        self._repository = repository
        self._store = store
        self._clock_ms = clock_ms

    def _user_id(self) -> str:
        identity = self._store.state.identity
        if identity is None:
            raise NotAuthenticatedError()
        return identity.id

    def _view(self) -> ProfileView:
        state = self._store.state
        if state.profile is None:
            raise ProfileNotFoundError(self._user_id())
        return ProfileView(profile=state.profile, student=state.student, role=state.role)

    async def _apply(self, data: dict[str, Any]) -> Profile:
        user_id = self._user_id()
        profile = await asyncio.to_thread(self._repository.update, user_id, data)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        self._store.replace_profile(profile)
        return profile

    async def get_profile(self) -> ProfileView:
        return self._view()

    async def update_personal(self, update: PersonalDetailsUpdate) -> ProfileView:
        await self._apply(update.model_dump())
        logger.info(f"Profile {self._user_id()} updated personal details")
        return self._view()

    async def update_social(self, links: SocialLinksUpdate) -> ProfileView:
        await self._apply(links.model_dump())
        return self._view()

    async def upload_avatar(
        self,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> AvatarUploadResponse:
        if not content:
            raise InvalidAvatarError("Avatar file is empty")
        if not (content_type or "").startswith("image/"):
            raise InvalidAvatarError("Avatar must be an image")

        user_id = self._user_id()
        path = avatar_path(user_id, filename, self._clock_ms())
        public_url = await asyncio.to_thread(
            self._repository.upload_avatar, path, content, content_type
        )
        profile = await self._apply({"avatar_url": public_url})
        logger.info(f"Profile {user_id} uploaded avatar {path}")
        return AvatarUploadResponse(avatar_url=public_url, profile=profile)
