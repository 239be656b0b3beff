"""
AdmitConnect settings.

Read once from the environment (or a .env file) and validated by
pydantic-settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    Missing Supabase credentials fail at import time; everything else
    has a development default.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )
    oauth_redirect_url: Optional[str] = Field(
        None,
        description="Where the auth provider sends users after Google sign-in"
    )

    # ===================
    # HOSTED INFERENCE
    # ===================
    huggingface_api_token: Optional[str] = Field(
        None,
        description="Hugging Face Inference API token"
    )
    huggingface_api_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        description="Base URL of the inference API"
    )
    huggingface_model: str = Field(
        default="mistralai/Mistral-7B-Instruct-v0.1",
        description="Instruction-tuned model used for scripts and chat"
    )
    inference_timeout_seconds: int = Field(
        default=60,
        ge=1,
        le=300,
        description="Timeout for a single inference call"
    )

    # ===================
    # CANDIDATE UPLOADS
    # ===================
    preview_row_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Rows shown in an upload preview"
    )
    preview_ttl_minutes: int = Field(
        default=30,
        ge=1,
        le=240,
        description="How long an unconfirmed upload preview is kept"
    )
    csv_strict_columns: bool = Field(
        default=False,
        description="Reject rows whose cell count differs from the header"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:8080",
        ],
        description="Origins allowed to call the API"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def inference_configured(self) -> bool:
        """Check if the inference API token is set."""
        return bool(self.huggingface_api_token)


@lru_cache()
def get_settings() -> Settings:
    """
    Settings instance, built on first call.

    Tests that change the environment call get_settings.cache_clear().

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# Shared instance: from config import settings
settings = get_settings()
