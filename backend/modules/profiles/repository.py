"""
Profile write access.

Updates ``profiles`` rows and stores avatars in the ``avatars`` bucket.
"""

import logging
from typing import Any, Optional

from shared.models import Profile
from shared.repository import BaseRepository

from .exceptions import AvatarUploadError

logger = logging.getLogger(__name__)

AVATAR_BUCKET = "avatars"


class ProfileUpdateRepository(BaseRepository[Profile]):
    """Repository for profile edits made by the profile's owner."""

    def update(self, profile_id: str, data: dict[str, Any]) -> Optional[Profile]:
        """
        Update a profile row.

        Returns:
            The updated profile, or None if no row matched.
        """
        result = self._db.table("profiles").update(data).eq("id", profile_id).execute()
        row = self._first(result)
        return Profile(**row) if row else None

    def upload_avatar(self, path: str, content: bytes, content_type: str) -> str:
        """
        Upload (or overwrite) an avatar object and return its public URL.

        Raises:
            AvatarUploadError: If the storage service rejects the upload
        """
        bucket = self._db.storage.from_(AVATAR_BUCKET)
        try:
            bucket.upload(path, content, {"content-type": content_type, "upsert": "true"})
        except Exception as e:
            logger.error(f"Avatar upload to {path} failed: {e}")
            raise AvatarUploadError("Failed to upload avatar", original_error=str(e)) from e
        return bucket.get_public_url(path)
