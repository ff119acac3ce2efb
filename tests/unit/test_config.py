"""Settings: defaults, environment overrides and load-time validation."""

import pytest
from pydantic import ValidationError

from clinidocs.core.config import Settings, get_settings


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    monkeypatch.delenv("VALIDATION_SERVICE_URL", raising=False)
    s = Settings(_env_file=None)
    assert s.storage_backend == "memory"
    assert s.validation_service_url == ""
    assert s.validation_timeout_seconds == 30.0
    assert s.max_upload_size == 50 * 1024 * 1024
    assert s.request_id_header == "X-Request-ID"


def test_cors_origins_split() -> None:
    s = Settings(_env_file=None, allowed_origins=" https://a.example , ,https://b.example")
    assert s.cors_origins == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"storage_backend": "ftp"},
        {"storage_backend": "s3", "s3_bucket": None},
        {"validation_timeout_seconds": 0},
        {"shutdown_drain_seconds": -1},
        {"max_upload_size": 0},
    ],
)
def test_invalid_settings_fail_at_load(overrides) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_environment_overrides_are_picked_up_after_cache_clear(monkeypatch) -> None:
    monkeypatch.setenv("VALIDATION_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    get_settings.cache_clear()
    s = get_settings()
    assert s.validation_timeout_seconds == 2.5
    assert s.storage_backend == "local"
    assert get_settings() is s


def test_secret_is_masked() -> None:
    s = Settings(_env_file=None, validation_service_api_key="sk-live")
    assert "sk-live" not in repr(s)
    assert s.validation_service_api_key.get_secret_value() == "sk-live"
