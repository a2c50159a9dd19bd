"""
Database client factory for Supabase.

Every portal session owns its own anon-key client, so queries carry that
user's JWT and Row Level Security applies.
"""

from supabase import create_client, Client

from .config import get_settings


def create_session_client() -> Client:
    """
    Create a fresh Supabase client for one portal session.

    The client holds the auth state (persisted session, token refresh,
    auth-state callbacks) of a single browser, so it is never shared.

    Returns:
        Supabase client configured with the anon key

    Raises:
        RuntimeError: If the Supabase URL or anon key is not configured
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )
