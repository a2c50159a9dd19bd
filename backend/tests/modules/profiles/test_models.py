"""Tests for profile edit models."""

import pytest
from pydantic import ValidationError

from modules.profiles.models import PersonalDetailsUpdate, SocialLinksUpdate, normalize_url


class TestNormalizeUrl:
    def test_full_url_kept(self):
        assert normalize_url("https://facebook.com/grace") == "https://facebook.com/grace"

    def test_bare_host_gets_https(self):
        assert normalize_url(" instagram.com/grace ") == "https://instagram.com/grace"

    def test_blank_clears(self):
        assert normalize_url("   ") is None
        assert normalize_url(None) is None

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            normalize_url("not a url")


class TestSocialLinksUpdate:
    def test_normalizes_every_field(self):
        links = SocialLinksUpdate(facebook="facebook.com/grace", youtube="", linkedin=None)

        assert links.facebook == "https://facebook.com/grace"
        assert links.youtube is None
        assert links.model_dump()["twitter"] is None

    def test_invalid_link_is_validation_error(self):
        with pytest.raises(ValidationError):
            SocialLinksUpdate(twitter="not a url")


def test_personal_details_require_names():
    with pytest.raises(ValidationError):
        PersonalDetailsUpdate(first_name="", last_name="Hopper")
