"""Tests for the profile service."""

from unittest.mock import MagicMock

import pytest

from modules.auth.exceptions import NotAuthenticatedError
from modules.profiles.exceptions import InvalidAvatarError, ProfileNotFoundError
from modules.profiles.models import PersonalDetailsUpdate, SocialLinksUpdate
from modules.profiles.service import ProfileService, avatar_path
from shared.models import Role

from tests.factories import make_portal_session, make_profile


@pytest.fixture
def repository():
    return MagicMock()


@pytest.fixture
def session():
    return make_portal_session(profile=make_profile())


@pytest.fixture
def service(repository, session):
    return ProfileService(repository, session.store, clock_ms=lambda: 1700000000000)


def test_avatar_path_keeps_only_basename():
    assert avatar_path("u-1", "C:\\photos\\me.png", 42) == "avatars/u-1/42_me.png"
    assert avatar_path("u-1", "../../etc/me.png", 42) == "avatars/u-1/42_me.png"
    assert avatar_path("u-1", "", 42) == "avatars/u-1/42_avatar"


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_returns_session_records(self, service):
        view = await service.get_profile()

        assert view.profile.first_name == "Grace"
        assert view.role is Role.STUDENT

    @pytest.mark.asyncio
    async def test_missing_profile(self, repository):
        session = make_portal_session(profile=None)
        service = ProfileService(repository, session.store)

        with pytest.raises(ProfileNotFoundError):
            await service.get_profile()


class TestUpdates:
    @pytest.mark.asyncio
    async def test_personal_update_refreshes_session(self, service, repository, session):
        repository.update.return_value = make_profile(first_name="Ada", last_name="Lovelace")

        view = await service.update_personal(
            PersonalDetailsUpdate(first_name="Ada", last_name="Lovelace", phone="555")
        )

        repository.update.assert_called_once_with(
            "user-123",
            {"first_name": "Ada", "last_name": "Lovelace", "middle_name": None, "phone": "555"},
        )
        assert view.profile.first_name == "Ada"
        assert session.store.state.profile.first_name == "Ada"

    @pytest.mark.asyncio
    async def test_update_without_row(self, service, repository):
        repository.update.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.update_personal(PersonalDetailsUpdate(first_name="Ada", last_name="L"))

    @pytest.mark.asyncio
    async def test_social_links_written_normalized(self, service, repository):
        repository.update.return_value = make_profile()

        await service.update_social(SocialLinksUpdate(facebook="facebook.com/grace"))

        data = repository.update.call_args.args[1]
        assert data["facebook"] == "https://facebook.com/grace"
        assert data["instagram"] is None

    @pytest.mark.asyncio
    async def test_signed_out(self, repository):
        session = make_portal_session(signed_in=False)
        service = ProfileService(repository, session.store)

        with pytest.raises(NotAuthenticatedError):
            await service.update_personal(PersonalDetailsUpdate(first_name="Ada", last_name="L"))


class TestAvatar:
    @pytest.mark.asyncio
    async def test_upload(self, service, repository, session):
        repository.upload_avatar.return_value = "https://cdn.example.com/avatars/user-123/1700000000000_me.png"
        repository.update.return_value = make_profile().model_copy(
            update={"avatar_url": "https://cdn.example.com/avatars/user-123/1700000000000_me.png"}
        )

        result = await service.upload_avatar("me.png", b"\x89PNG", "image/png")

        repository.upload_avatar.assert_called_once_with(
            "avatars/user-123/1700000000000_me.png", b"\x89PNG", "image/png"
        )
        repository.update.assert_called_once_with("user-123", {"avatar_url": result.avatar_url})
        assert session.store.state.profile.avatar_url == result.avatar_url

    @pytest.mark.asyncio
    async def test_empty_file(self, service, repository):
        with pytest.raises(InvalidAvatarError):
            await service.upload_avatar("me.png", b"", "image/png")
        repository.upload_avatar.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_an_image(self, service, repository):
        with pytest.raises(InvalidAvatarError):
            await service.upload_avatar("cv.pdf", b"%PDF", "application/pdf")
        repository.upload_avatar.assert_not_called()
