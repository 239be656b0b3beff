"""
Supabase client access.

One shared client for table queries and token checks; a fresh client
for every call that signs a user in or out.
"""

from supabase import create_client, Client, ClientOptions
from functools import lru_cache
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class SupabaseConnectionError(Exception):
    """Supabase client could not be created."""


@lru_cache()
def get_supabase_client() -> Client:
    """
    Process-wide Supabase client for table and auth calls.

    Created lazily; get_supabase_client.cache_clear() forces a new one.

    Returns:
        Client: Supabase client

    Raises:
        SupabaseConnectionError: If the client cannot be created
    """
    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )

        client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )

        logger.info("supabase_connected", status="success")

        return client

    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise SupabaseConnectionError(f"Failed to connect to Supabase: {e}") from e


def create_auth_client() -> Client:
    """
    New Supabase client for a single auth call.

    Signing in or out changes the session of the client that made the call,
    and a client with a session sends that user's JWT on every table query.
    Sign-in, sign-up, OAuth and sign-out therefore never run on the shared
    client. The session is neither stored nor refreshed; callers keep the
    tokens they get back.

    Raises:
        SupabaseConnectionError: If the client cannot be created
    """
    try:
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(
                auto_refresh_token=False,
                persist_session=False,
                flow_type="implicit",
            ),
        )
    except Exception as e:
        logger.error(
            "supabase_auth_client_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise SupabaseConnectionError(f"Failed to connect to Supabase: {e}") from e


# ===================
# HELPER FUNCTIONS
# ===================

def check_connection() -> dict:
    """
    Count campaigns to prove the database answers.

    Returns:
        dict: {"status": "healthy", "campaigns_count": n} or the error
    """
    try:
        client = get_supabase_client()

        campaigns = client.table("campaigns").select("id", count="exact").limit(1).execute()

        return {
            "status": "healthy",
            "campaigns_count": campaigns.count,
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }

