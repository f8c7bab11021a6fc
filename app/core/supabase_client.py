"""Supabase client for authentication operations."""
from functools import lru_cache

from app.core.config import settings


@lru_cache
def get_supabase_admin_client():
    """
    Get Supabase client with service role key.

    Used server-side to validate bearer tokens issued to the front-end.
    """
    from supabase import create_client

    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise ValueError("SUPABASE_SERVICE_ROLE_KEY not configured")

    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY
    )
