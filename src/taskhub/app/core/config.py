"""Application settings powered by ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal, Sequence

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ... import __version__ as package_version

# src/taskhub/app/core/config.py -> repository root
REPOSITORY_ROOT = Path(__file__).resolve().parents[4]

EnvironmentName = Literal["development", "test", "ci", "production"]

_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "local": "development",
    "test": "test",
    "testing": "test",
    "ci": "ci",
    "production": "production",
    "prod": "production",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "reload": True,
        "cookie_secure": False,
        "expose_error_details": True,
    },
    "test": {
        "log_level": "WARNING",
        "reload": False,
        "cookie_secure": False,
        "expose_error_details": True,
    },
    "ci": {
        "log_level": "INFO",
        "reload": False,
        "cookie_secure": False,
        "expose_error_details": True,
    },
    "production": {
        "log_level": "INFO",
        "reload": False,
        "cookie_secure": True,
        "expose_error_details": False,
    },
}


class Settings(BaseSettings):
    """Runtime configuration for the TaskHub API."""

    model_config = SettingsConfigDict(
        env_prefix="TASKHUB_",
        env_file=(REPOSITORY_ROOT / ".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "TaskHub"
    environment: EnvironmentName = Field(default="development")
    api_prefix: str = Field(default="/api")
    version: str = Field(default=package_version)

    mongo_url: str = Field(default="mongodb://localhost:27017")
    mongo_database: str = Field(default="taskhub")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=5000)
    log_level: str = Field(default="INFO")
    reload: bool = Field(default=True)
    expose_error_details: bool = Field(default=True)

    jwt_secret_key: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = 60 * 24 * 7

    auth_cookie_name: str = Field(default="token")
    cookie_secure: bool = Field(default=False)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        if isinstance(value, str):
            normalized = value.strip().lower()
        else:
            normalized = ""
        return _ENVIRONMENT_ALIASES.get(normalized or "development", "development")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _coerce_comma_separated(cls, value: object) -> list[str]:
        """Allow comma separated strings for CORS configuration."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return [str(item) for item in value if str(item).strip()]
        return []

    @field_validator("access_token_expire_minutes", mode="before")
    @classmethod
    def _ensure_positive_lifetime(cls, value: object) -> int:
        try:
            minutes = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 60 * 24 * 7
        return max(minutes, 1)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(getattr(self, "model_fields_set", set()))
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def router_prefix(self) -> str:
        """Return ``api_prefix`` normalised to ``/segment`` form (or empty)."""

        prefix = self.api_prefix.strip()
        if prefix and not prefix.startswith("/"):
            prefix = f"/{prefix}"
        prefix = prefix.rstrip("/")
        return "" if prefix == "/" else prefix


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()
