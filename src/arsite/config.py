"""Application configuration using Pydantic Settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, HttpUrl, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arsite.shared.exceptions import ConfigurationError

DEFAULT_API_PREFIX = "/api"

SECRET_FILE_ENV_VARS = ("STRAPI_API_TOKEN",)


def _read_secret_files() -> dict[str, str]:
    """Resolve *_FILE env vars (Docker secrets) into settings values."""
    values: dict[str, str] = {}
    for env_var in SECRET_FILE_ENV_VARS:
        file_var = f"{env_var}_FILE"
        file_path = os.getenv(file_var)
        if not file_path:
            continue
        try:
            value = Path(file_path).read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigurationError(
                f"Failed to read {file_var} at {file_path}",
                details={"variable": file_var, "path": file_path},
            ) from exc
        if not value:
            raise ConfigurationError(f"{file_var} is empty", details={"variable": file_var})
        values[env_var] = value
    return values


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # ----- Application -----
    app_env: Literal["development", "test", "production"] = Field(
        default="development",
        validation_alias="NODE_ENV",
    )
    app_debug: bool = False

    # ----- Strapi content backend -----
    strapi_url: HttpUrl = Field(
        ...,  # Required - the site cannot render without its content backend
        validation_alias="NEXT_PUBLIC_STRAPI_URL",
        description="Base URL of the Strapi instance, e.g. http://localhost:1337",
    )
    strapi_api_token: str | None = Field(
        default=None,
        min_length=1,
        validation_alias="STRAPI_API_TOKEN",
    )
    strapi_api_prefix: str = DEFAULT_API_PREFIX
    strapi_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("strapi_api_token", mode="before")
    @classmethod
    def blank_token_is_unset(cls, v: Any) -> Any:
        # docker-compose passes unset variables through as ""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("strapi_api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("STRAPI_API_PREFIX must start with '/'")
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def api_base_url(self) -> str:
        """Base URL plus API namespace, without a trailing slash."""
        return f"{str(self.strapi_url).rstrip('/')}{self.strapi_api_prefix}"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure secure settings in production environment."""
        if self.is_production and self.app_debug:
            raise ValueError("APP_DEBUG must be false in production!")
        return self


def _describe_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "variable": ".".join(str(part) for part in error["loc"]) or "<settings>",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


def load_configuration(**overrides: Any) -> Settings:
    """Read and validate the process environment.

    Raises:
        ConfigurationError: If a required variable is missing or malformed.
            Callers must let this abort startup.
    """
    values: dict[str, Any] = {**_read_secret_files(), **overrides}
    try:
        return Settings(**values)
    except ValidationError as exc:
        problems = _describe_errors(exc)
        names = ", ".join(problem["variable"] for problem in problems)
        raise ConfigurationError(
            f"Invalid configuration: {names}",
            details={"errors": problems},
        ) from exc


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_configuration()
