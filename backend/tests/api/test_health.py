"""Tests for health check endpoints."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.app import create_app


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        client = TestClient(create_app())
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_readiness_without_supabase(self):
        """Readiness reports degraded when Supabase is not configured."""
        with patch.dict(os.environ, {"SUPABASE_URL": "", "SUPABASE_ANON_KEY": ""}):
            client = TestClient(create_app())
            response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["supabase"] == "missing"
        assert data["sessions"] == 0

    def test_readiness_with_supabase(self):
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "anon",
        }):
            client = TestClient(create_app())
            response = client.get("/api/ready")
        assert response.json()["status"] == "ready"
        assert response.json()["supabase"] == "configured"

    def test_docs_hidden_outside_debug(self):
        client = TestClient(create_app())
        assert client.get("/api/docs").status_code == 404


class TestStartup:
    def test_refuses_to_start_with_placeholder_secret(self):
        app = create_app()
        with pytest.raises(RuntimeError, match="SESSION_SECRET"):
            with TestClient(app):
                pass

    def test_starts_with_configured_secret(self):
        with patch.dict(os.environ, {"SESSION_SECRET": "a-real-secret"}):
            with TestClient(create_app()) as client:
                assert client.get("/api/health").status_code == 200

    def test_starts_in_debug_with_placeholder_secret(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            with TestClient(create_app()) as client:
                assert client.get("/api/health").status_code == 200
