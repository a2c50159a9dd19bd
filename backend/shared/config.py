"""
Centralized configuration for the portal backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, SESSION_*).
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Spirit Life Portal API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8080"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URI, migrations only

    # Portal sessions
    session_secret: str = DEFAULT_SESSION_SECRET
    session_cookie_name: str = "portal_session"
    session_cookie_secure: Optional[bool] = None  # unset: secure unless debug
    session_idle_ttl: int = 60 * 60 * 8  # seconds
    max_sessions: int = 5000

    # Session store bootstrap
    session_load_timeout: float = 15.0  # seconds
    profile_max_attempts: int = 3
    profile_retry_delay: float = 1.0  # seconds
    profile_fallback_policy: Literal["degrade", "reauthenticate"] = "degrade"

    # Attendance
    low_attendance_threshold: int = 75  # percent

    @model_validator(mode="after")
    def _default_cookie_security(self) -> "Settings":
        if self.session_cookie_secure is None:
            self.session_cookie_secure = not self.debug
        return self

    def check_session_secret(self) -> None:
        """
        Refuse to serve with the placeholder cookie secret outside debug.

        Raises:
            RuntimeError: If SESSION_SECRET was never set
        """
        if self.session_secret == DEFAULT_SESSION_SECRET and not self.debug:
            raise RuntimeError(
                "SESSION_SECRET must be set outside debug mode; "
                "session cookies would be signed with a public placeholder"
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
