"""
Profiles module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    """Raised when the signed-in user's profile row cannot be found."""

    def __init__(self, profile_id: str):
        super().__init__(
            f"Profile not found: {profile_id}",
            code="PROFILE_NOT_FOUND",
            details={"profile_id": profile_id},
        )


class InvalidAvatarError(ValidationError):
    """Raised when an uploaded avatar is empty or not an image."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_AVATAR")


class AvatarUploadError(ExternalServiceError):
    """Raised when the storage bucket rejects an avatar upload."""

    def __init__(self, message: str, original_error: Optional[str] = None):
        super().__init__(
            message,
            service="supabase-storage",
            code="AVATAR_UPLOAD_FAILED",
            details={"original_error": original_error},
        )
