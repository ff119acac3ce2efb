"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (e.g. S3_BUCKET) and
timeouts are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_BACKENDS = ("memory", "local", "s3")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; the in-memory blob store and the
    unconfigured validation service are used when nothing is set.
    """

    # App
    app_name: str = "clinidocs"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_backend: str = "memory"
    storage_root: str = "/var/clinidocs/storage"
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_upload_size: int = 50 * 1024 * 1024  # 50MB

    # AI validation service. Empty URL means every check fails as unavailable.
    validation_service_url: str = ""
    validation_service_api_key: SecretStr | None = None
    validation_timeout_seconds: float = 30.0

    # Background validation tasks still running at shutdown get this long to finish.
    shutdown_drain_seconds: float = 10.0

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def cors_origins(self) -> list[str]:
        """allowed_origins split on commas, blanks dropped."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @model_validator(mode="after")
    def validate_storage_and_timeouts(self) -> "Settings":
        """Validate storage backend and positive limits."""
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'memory', 'local', 's3'"
            )
        if self.storage_backend == "s3" and not self.s3_bucket:
            raise ValueError(
                "s3_bucket is required when storage_backend is 's3'. "
                "Set S3_BUCKET environment variable or update .env file."
            )
        if self.validation_timeout_seconds <= 0:
            raise ValueError("validation_timeout_seconds must be positive")
        if self.shutdown_drain_seconds <= 0:
            raise ValueError("shutdown_drain_seconds must be positive")
        if self.max_upload_size <= 0:
            raise ValueError("max_upload_size must be positive")
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
