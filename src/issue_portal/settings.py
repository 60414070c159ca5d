"""
issue_portal.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide the platform service credential from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration shared by the API, the CLI and the console clients.
    """

    model_config = SettingsConfigDict(env_prefix="PORTAL_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "issue-portal"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Hosted auth/data/storage platform
    platform_url: str = "http://localhost:54321"
    platform_anon_key: str = ""
    platform_service_role_key: str = Field(default="", repr=False)
    platform_timeout_seconds: float = 10.0

    # Admin management
    admin_role: str = "admin"
    min_password_length: int = 6

    # Storage buckets used by the intake form and the branding editor
    reports_bucket: str = "reports"
    assets_bucket: str = "site-assets"
    max_upload_bytes: int = 5 * 1024 * 1024

    cors_allow_origin: str = "*"
    cors_allow_headers: str = "authorization, x-client-info, apikey, content-type"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The service role key is only ever read by `platform_clients` when building
# elevated request headers; nothing else should touch it.
