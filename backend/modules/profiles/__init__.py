"""
Profiles module.

The signed-in user's own profile: personal details, social links and
avatar.
"""

from .interfaces import IProfileService
from .models import (
    AvatarUploadResponse,
    PersonalDetailsUpdate,
    ProfileView,
    SocialLinksUpdate,
    normalize_url,
)
from .exceptions import AvatarUploadError, InvalidAvatarError, ProfileNotFoundError

__all__ = [
    "IProfileService",
    "AvatarUploadResponse",
    "PersonalDetailsUpdate",
    "ProfileView",
    "SocialLinksUpdate",
    "normalize_url",
    "AvatarUploadError",
    "InvalidAvatarError",
    "ProfileNotFoundError",
]
