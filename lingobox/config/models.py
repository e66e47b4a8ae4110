"""User configuration models."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from lingobox.i18n.models import MissingTranslationPolicy
from lingobox.models.base import LingoboxBaseModel


class LocaleConfig(LingoboxBaseModel):
    """Configuration of a single target locale."""

    translation: Path | None = Field(
        default=None, description="JSON translation file for this locale"
    )
    subpath: str | None = Field(
        default=None,
        description="Output directory below the output root (defaults to the locale code)",
    )


class UserConfigData(BaseSettings):
    """User configuration data model with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables (highest)
    2. Constructor arguments (file data)
    3. .env file
    4. Default values (lowest)
    """

    model_config = SettingsConfigDict(
        env_prefix="LINGOBOX_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override configuration file values."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    log_level: str = "WARNING"

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound on inline worker threads (defaults to CPU count - 1)",
    )

    missing_translation: MissingTranslationPolicy = Field(
        default=MissingTranslationPolicy.WARNING,
        description="Policy for messages without a translation: error, warning or ignore",
    )

    es5: bool = Field(default=False, description="Render legacy (ES5) syntax")

    source_locale: str = Field(
        default="en-US", description="Locale the application source is written in"
    )

    flat_output: bool = Field(
        default=False,
        description="Write localized files directly into the output root",
    )

    excluded_entry_points: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Entry point names that are never inlined (e.g. 'scripts')",
    )

    locales: dict[str, LocaleConfig] = Field(
        default_factory=dict, description="Target locales keyed by locale code"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    @field_validator("excluded_entry_points", mode="before")
    @classmethod
    def decode_entry_points(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return [str(name).strip() for name in v if str(name).strip()]
