"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Every field has a default so the service can start
(and report itself not ready) before the catalog database is configured.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "hubsearch"
    app_version: str = "1.0.0"
    debug: bool = False

    # Catalog database (read-only source of the search index)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    # Search index
    search_index_ttl_seconds: float = 300.0  # 5 minutes
    search_default_limit: int = 20
    search_max_limit: int = 50
    suggest_default_limit: int = 8
    suggest_max_limit: int = 20
    search_fuzzy_threshold: float = 0.4  # lower = stricter
    search_min_match_chars: int = 2
    search_max_query_length: int = 200
    # Shared secret for POST /search/invalidate (called by write paths in other processes).
    search_invalidate_secret: SecretStr | None = None

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_settings(self) -> "Settings":
        """Reject search settings that would break paging or matching."""
        if self.search_index_ttl_seconds <= 0:
            raise ValueError("SEARCH_INDEX_TTL_SECONDS must be greater than 0.")
        if not 1 <= self.search_default_limit <= self.search_max_limit:
            raise ValueError(
                "SEARCH_DEFAULT_LIMIT must be between 1 and SEARCH_MAX_LIMIT "
                f"({self.search_max_limit}), got: {self.search_default_limit}"
            )
        if not 1 <= self.suggest_default_limit <= self.suggest_max_limit:
            raise ValueError(
                "SUGGEST_DEFAULT_LIMIT must be between 1 and SUGGEST_MAX_LIMIT "
                f"({self.suggest_max_limit}), got: {self.suggest_default_limit}"
            )
        if not 0.0 <= self.search_fuzzy_threshold <= 1.0:
            raise ValueError(
                f"SEARCH_FUZZY_THRESHOLD must be within [0, 1], got: {self.search_fuzzy_threshold}"
            )
        if self.search_min_match_chars < 1:
            raise ValueError("SEARCH_MIN_MATCH_CHARS must be at least 1.")
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
