"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SUPABASE_URL, SUPABASE_KEY,
SUPABASE_JWT_SECRET) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (supabase_url, supabase_key, supabase_jwt_secret).
    """

    # App
    app_name: str = "lendcrm"
    app_version: str = "1.0.0"
    debug: bool = False

    # Managed backend (PostgREST data API + auth provider)
    supabase_url: str = ""
    # Service key used for the data API; rows are scoped per user by the services.
    supabase_key: SecretStr = SecretStr("")
    supabase_jwt_secret: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"
    http_timeout_seconds: float = 30.0

    # Tables
    borrowers_table: str = "borrowers"
    tenants_table: str = "tenants"
    user_tenants_table: str = "users_tenants"

    # Record store accessor tuning
    record_store_max_retries: int = 3
    record_store_retry_delay_ms: int = 1000
    record_store_cache_ttl_seconds: float = 300.0
    # True restores retrying every failure (including 4xx) the configured number of times.
    record_store_retry_all_errors: bool = False
    record_store_single_flight: bool = False

    # Borrowers
    borrowers_export_page_size: int = 500

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate backend connection settings and record store tuning."""
        if not self.supabase_url:
            raise ValueError(
                "SUPABASE_URL is required (e.g. https://<project>.supabase.co). "
                "Set in environment or .env file."
            )
        if not self.supabase_key.get_secret_value():
            raise ValueError(
                "SUPABASE_KEY is required. Use the project's service role key "
                "from the dashboard API settings."
            )
        if not self.supabase_jwt_secret.get_secret_value():
            raise ValueError(
                "SUPABASE_JWT_SECRET is required to verify access tokens issued "
                "by the auth provider."
            )
        if self.record_store_max_retries < 1:
            raise ValueError("RECORD_STORE_MAX_RETRIES must be at least 1")
        if self.record_store_retry_delay_ms < 0:
            raise ValueError("RECORD_STORE_RETRY_DELAY_MS must not be negative")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
