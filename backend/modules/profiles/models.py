"""
Profiles module data models.
"""

from typing import Optional
from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from shared.models import Profile, Role, StudentRecord

SOCIAL_FIELDS = ("facebook", "instagram", "twitter", "linkedin", "youtube")

_http_url = TypeAdapter(AnyHttpUrl)


def normalize_url(value: Optional[str]) -> Optional[str]:
    """
    Accept a URL as typed, or with ``https://`` prepended to a bare host.

    Empty values clear the link.

    Raises:
        ValueError: If neither form is a valid http(s) URL
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    for candidate in (value, f"https://{value}"):
        try:
            _http_url.validate_python(candidate)
            return candidate
        except PydanticValidationError:
            continue
    raise ValueError(f"Invalid URL: {value}")


class ProfileView(BaseModel):
    """The signed-in user's profile page."""

    profile: Profile
    student: Optional[StudentRecord] = None
    role: Optional[Role] = None


class PersonalDetailsUpdate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    middle_name: Optional[str] = None
    phone: Optional[str] = None


class SocialLinksUpdate(BaseModel):
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    youtube: Optional[str] = None

    @field_validator(*SOCIAL_FIELDS, mode="before")
    @classmethod
    def _normalize(cls, value: Optional[str]) -> Optional[str]:
        return normalize_url(value)


class AvatarUploadResponse(BaseModel):
    avatar_url: str
    profile: Profile
