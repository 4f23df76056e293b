"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# The bootstrap account is permanently protected from deletion, so its name is fixed.
BOOTSTRAP_ADMIN_USERNAME = "admin"
DEFAULT_BOOTSTRAP_ADMIN_PASSWORD = "admin123"

MAX_UPLOAD_BYTES_LIMIT = 64 * 1024**3  # 64 GiB


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Sessions: opaque bearer tokens held in memory for the life of the process
    SESSION_TTL_HOURS: int = 24
    # Background purge of expired sessions; 0 disables it (lookups still evict lazily)
    SESSION_SWEEP_INTERVAL_SEC: int = 300

    # Password hashing cost
    BCRYPT_ROUNDS: int = 12

    # First-run provisioning of the admin account; rotate the password after first login
    BOOTSTRAP_ADMIN_EMAIL: str = "admin@nas-os.local"
    BOOTSTRAP_ADMIN_PASSWORD: SecretStr = SecretStr(DEFAULT_BOOTSTRAP_ADMIN_PASSWORD)

    # Every file and share path is confined to this directory
    STORAGE_ROOT: Path = Path("/srv/nas")
    MAX_UPLOAD_BYTES: int = 1024**3

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def uses_default_admin_password(self) -> bool:
        return (
            self.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value()
            == DEFAULT_BOOTSTRAP_ADMIN_PASSWORD
        )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @field_validator("API_V1_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("/") or (len(v) > 1 and v.endswith("/")):
            raise ValueError("API_V1_PREFIX must start with '/' and not end with '/'")
        return v

    @field_validator("SESSION_TTL_HOURS")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        if v < 1 or v > 168:
            raise ValueError("SESSION_TTL_HOURS must be between 1 and 168 (1 week)")
        return v

    @field_validator("SESSION_SWEEP_INTERVAL_SEC")
    @classmethod
    def validate_sweep_interval(cls, v: int) -> int:
        if v != 0 and (v < 10 or v > 86400):
            raise ValueError(
                "SESSION_SWEEP_INTERVAL_SEC must be 0 (disabled) or between 10 and 86400"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("BOOTSTRAP_ADMIN_EMAIL")
    @classmethod
    def validate_bootstrap_email(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("BOOTSTRAP_ADMIN_EMAIL must be set and non-empty")
        return v.strip()

    @field_validator("BOOTSTRAP_ADMIN_PASSWORD")
    @classmethod
    def validate_bootstrap_password(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("BOOTSTRAP_ADMIN_PASSWORD must be set and non-empty")
        return v

    @field_validator("MAX_UPLOAD_BYTES")
    @classmethod
    def validate_max_upload_bytes(cls, v: int) -> int:
        if v < 1 or v > MAX_UPLOAD_BYTES_LIMIT:
            raise ValueError("MAX_UPLOAD_BYTES must be between 1 and 68719476736 (64 GiB)")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
