"""
Database client factory for Supabase.

Provides the service-role client (for backend operations bypassing RLS),
anon-key clients (for auth flows that must not share a session), and the
async client used for Realtime subscriptions.
"""

from typing import Optional
from supabase import create_client, acreate_client, Client, AsyncClient

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None
_async_client: Optional[AsyncClient] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as reading profiles of other users for the directory.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_anon_client() -> Client:
    """
    Get a fresh Supabase client with the anon key.

    Sign-in and sign-up store a session on the client they run on, so each
    auth flow gets its own client instead of the shared service client.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )
    return create_client(settings.supabase_url, settings.supabase_anon_key)


async def get_async_supabase_client() -> AsyncClient:
    """
    Get the async Supabase client with service role.

    Realtime (postgres changes) is only available on the async client,
    so the chat module uses this one for both queries and subscriptions.
    """
    global _async_client

    if _async_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _async_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _async_client


def reset_client_cache() -> None:
    """
    Reset the cached database clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _async_client
    _service_client = None
    _async_client = None
