"""Application settings using Pydantic BaseSettings."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_default_db_url() -> str:
    """SQLite file under the working directory's data/ folder."""
    db_path = os.path.abspath(os.path.join("data", "loginguard.db"))
    return f"sqlite:///{db_path}"


class Settings(BaseSettings):
    """Configuration loaded from ``LOGINGUARD_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LOGINGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Runtime
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    # Credential store
    store_backend: str = Field(default="sql")
    database_url: str = Field(default_factory=_get_default_db_url)

    # Authenticator
    authenticator_backend: str = Field(default="demo")
    auth_base_url: str = Field(default="")
    auth_login_path: str = Field(default="/auth/login")
    auth_token_field: str = Field(default="token")
    auth_timeout_seconds: Optional[float] = Field(default=30.0)
    auth_max_retries: int = Field(default=1, ge=0)

    # Lockout policy
    failure_threshold: int = Field(default=3, ge=1)
    lockout_duration_seconds: int = Field(default=300, ge=1)
    lockout_tick_seconds: float = Field(default=1.0, gt=0)
    clear_all_errors_on_reconnect: bool = Field(default=True)

    # Connectivity
    connectivity_probe_enabled: bool = Field(default=False)
    connectivity_probe_url: str = Field(default="https://clients3.google.com/generate_204")
    connectivity_probe_interval_seconds: float = Field(default=5.0, gt=0)
    connectivity_probe_timeout_seconds: float = Field(default=3.0, gt=0)
    connectivity_default_online: bool = Field(default=True)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def lockout_duration_ms(self) -> int:
        return self.lockout_duration_seconds * 1000

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        vv = (v or "").strip().lower()
        if vv not in {"sql", "memory"}:
            raise ValueError("STORE_BACKEND must be one of: sql, memory")
        return vv

    @field_validator("authenticator_backend")
    @classmethod
    def validate_authenticator_backend(cls, v: str) -> str:
        vv = (v or "").strip().lower()
        if vv not in {"demo", "http"}:
            raise ValueError("AUTHENTICATOR_BACKEND must be one of: demo, http")
        return vv

    @field_validator("auth_timeout_seconds")
    @classmethod
    def validate_auth_timeout(cls, v: Optional[float]) -> Optional[float]:
        # Zero or negative disables the controller-side timeout.
        if v is not None and v <= 0:
            return None
        return v

    @model_validator(mode="after")
    def validate_cross_field_constraints(self) -> "Settings":
        if self.authenticator_backend == "http" and not self.auth_base_url:
            raise ValueError("AUTH_BASE_URL is required when AUTHENTICATOR_BACKEND=http")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
