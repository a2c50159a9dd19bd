"""
Profiles module interface.
"""

from typing import Protocol, runtime_checkable

from .models import AvatarUploadResponse, PersonalDetailsUpdate, ProfileView, SocialLinksUpdate


@runtime_checkable
class IProfileService(Protocol):
    """
    Interface for the signed-in user's own profile.

    Every successful edit is pushed into the caller's Session Store so
    later reads see it without a refetch.
    """

    async def get_profile(self) -> ProfileView:
        """
        Raises:
            ProfileNotFoundError: If the session has no loaded profile
        """
        ...

    async def update_personal(self, update: PersonalDetailsUpdate) -> ProfileView:
        ...

    async def update_social(self, links: SocialLinksUpdate) -> ProfileView:
        ...

    async def upload_avatar(
        self,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> AvatarUploadResponse:
        """
        Raises:
            InvalidAvatarError: If the file is empty or not an image
            AvatarUploadError: If storage rejects the upload
        """
        ...
