"""Process settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Any, Literal, Optional

import structlog
from pydantic import (
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """
    Configuration for the stock dashboard.

    Every field maps to the upper-cased environment variable of the same name
    (QUOTE_SOURCE, LOG_LEVEL, ...) and may also come from a local .env file.
    Every setting is optional: a bad value logs a warning and falls back to its
    default instead of stopping the server.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Quote sources
    polygon_api_key: Optional[str] = None
    quote_source: Literal["auto", "polygon", "yfinance", "simulation"] = "auto"
    quote_request_delay_seconds: float = Field(default=2.0, ge=0, allow_inf_nan=False)
    quote_http_timeout_seconds: float = Field(default=10.0, ge=0, allow_inf_nan=False)

    # Refresh
    refresh_on_startup: bool = True
    simulation_seed: Optional[int] = None

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("polygon_api_key", mode="before")
    @classmethod
    def _blank_key_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("quote_source", "log_format", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator(
        "quote_source",
        "quote_request_delay_seconds",
        "quote_http_timeout_seconds",
        "refresh_on_startup",
        "simulation_seed",
        "log_level",
        "log_format",
        mode="wrap",
    )
    @classmethod
    def _default_on_invalid(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        default = cls.model_fields[info.field_name].default
        if isinstance(value, str) and not value.strip():
            return default
        try:
            return handler(value)
        except ValidationError as exc:
            logger.warning(
                "invalid_setting",
                key=info.field_name.upper(),
                value=value,
                default=default,
                error=exc.errors()[0]["type"],
            )
            return default

    @property
    def resolved_quote_source(self) -> str:
        """The concrete source for QUOTE_SOURCE=auto: Polygon with a key, else simulation."""
        if self.quote_source != "auto":
            return self.quote_source
        return "polygon" if self.polygon_api_key else "simulation"


@lru_cache
def get_settings() -> Settings:
    """
    Get the process-wide settings instance.

    Uses lru_cache so the environment and .env file are read only once.
    """
    return Settings()
