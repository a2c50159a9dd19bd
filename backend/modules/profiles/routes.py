"""
Profile API endpoints.

Students and admins each have their own profile page; the admin page
additionally manages social links and the avatar.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import get_profile_service
from api.middleware.session import RequireAdmin, RequireSession
from modules.auth.registry import PortalSession

from .interfaces import IProfileService
from .models import AvatarUploadResponse, PersonalDetailsUpdate, ProfileView, SocialLinksUpdate

router = APIRouter()


@router.get("/student/profile", response_model=ProfileView)
async def get_student_profile(
    session: PortalSession = RequireSession,
    service: IProfileService = Depends(get_profile_service),
) -> ProfileView:
    return await service.get_profile()


@router.patch("/student/profile", response_model=ProfileView)
async def update_student_profile(
    update: PersonalDetailsUpdate,
    session: PortalSession = RequireSession,
    service: IProfileService = Depends(get_profile_service),
) -> ProfileView:
    return await service.update_personal(update)


@router.get("/admin/profile", response_model=ProfileView)
async def get_admin_profile(
    session: PortalSession = RequireAdmin,
    service: IProfileService = Depends(get_profile_service),
) -> ProfileView:
    return await service.get_profile()


@router.patch("/admin/profile", response_model=ProfileView)
async def update_admin_profile(
    update: PersonalDetailsUpdate,
    session: PortalSession = RequireAdmin,
    service: IProfileService = Depends(get_profile_service),
) -> ProfileView:
    return await service.update_personal(update)


@router.put("/admin/profile/social", response_model=ProfileView)
async def update_social_links(
    links: SocialLinksUpdate,
    session: PortalSession = RequireAdmin,
    service: IProfileService = Depends(get_profile_service),
) -> ProfileView:
    """
    Replace all social links.

    Bare hosts such as ``facebook.com/me`` are stored with ``https://``.
    """
    return await service.update_social(links)


@router.post("/admin/profile/avatar", response_model=AvatarUploadResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    session: PortalSession = RequireAdmin,
    service: IProfileService = Depends(get_profile_service),
) -> AvatarUploadResponse:
    content = await file.read()
    return await service.upload_avatar(
        file.filename or "avatar",
        content,
        file.content_type or "",
    )
