"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import create_session_client


class TestSessionClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_creates_client_with_anon_key(self, mock_settings, mock_create):
        """Should create client with the anon key."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "anon-key"
        mock_create.return_value = MagicMock()

        client = create_session_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "anon-key")
        assert client is mock_create.return_value

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_each_call_creates_a_new_client(self, mock_settings, mock_create):
        """Portal sessions never share a client."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "anon-key"
        mock_create.side_effect = [MagicMock(), MagicMock()]

        assert create_session_client() is not create_session_client()
        assert mock_create.call_count == 2

    @patch("shared.database.get_settings")
    def test_raises_without_config(self, mock_settings):
        """Should raise if configuration is missing."""
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_anon_key = ""

        with pytest.raises(RuntimeError, match="Supabase configuration missing"):
            create_session_client()
