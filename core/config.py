"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings. Every field maps to a PUBLISHER_* env var.

    Credentials for the publishing platforms are NOT settings: they belong to
    the stored integration records and are passed to get_adapter() per call.
    """

    model_config = SettingsConfigDict(
        env_prefix="PUBLISHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Logging ===
    log_level: str = "INFO"
    log_json: bool = True

    # === HTTP client ===
    http_timeout: float = 30.0
    http_connect_timeout: float = 5.0
    http_max_connections: int = 20

    # === Platform defaults ===
    shopify_api_version: str = "2024-07"

    # === Scripts ===
    integrations_file: Path = Path("integrations.json")

    @field_validator("log_level")
    @classmethod
    def _log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"PUBLISHER_LOG_LEVEL must be a standard level name, got {v!r}"
            raise ValueError(msg)
        return level

    @field_validator("http_timeout", "http_connect_timeout")
    @classmethod
    def _timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            msg = "HTTP timeouts must be positive"
            raise ValueError(msg)
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance (cached after first call)."""
    return Settings()
