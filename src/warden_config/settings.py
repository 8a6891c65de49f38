"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. WARDEN_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent
        if parent == Path("/app"):
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. WARDEN_ENV_FILE env var (full path or relative to project root)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("WARDEN_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security
    # When unset, an ephemeral key is generated per process and every
    # previously issued access token dies with the process.
    jwt_secret_key: SecretStr | None = None

    # Shared with the OAuth2 callback that posts completed federated logins.
    # When unset, the federated login endpoint is disabled.
    federation_callback_secret: SecretStr | None = None

    # Application
    app_name: str = "Warden"

    # Database (any SQLAlchemy async URL)
    database_url: str = "sqlite+aiosqlite:///./data/warden.db"

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    # Tokens
    jwt_access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Identity
    password_hash_rounds: int = 12
    default_role: str = "USER"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("jwt_secret_key", "federation_callback_secret", mode="before")
    @classmethod
    def _empty_secret_is_unset(cls, v: object) -> object:
        """Treat an empty secret as not configured."""
        if v == "":
            return None
        return v

    @field_validator("jwt_access_token_expire_minutes", "refresh_token_expire_days")
    @classmethod
    def _validate_positive_lifetime(cls, v: int) -> int:
        """Token lifetimes must be strictly positive."""
        if v <= 0:
            msg = "Token lifetimes must be positive"
            raise ValueError(msg)
        return v

    @property
    def database_type(self) -> str:
        """Database backend derived from the URL (e.g. "postgresql", "sqlite")."""
        return self.database_url.split(":", 1)[0].split("+", 1)[0]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
