"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Cached settings accessor (for dependency injection)
    get_supabase_client: Shared Supabase client for table queries and token checks
    create_auth_client: Throwaway client for sign-in, sign-up and sign-out
    check_connection: Health check function
"""

from config.settings import settings, get_settings, Settings
from config.database import get_supabase_client, create_auth_client, check_connection

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "get_supabase_client",
    "create_auth_client",
    "check_connection",
]
