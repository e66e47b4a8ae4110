"""
User configuration management for Lingobox.

Configuration is read from multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from lingobox.config.models import UserConfigData
from lingobox.core.errors import ConfigError, ManifestError
from lingobox.i18n.manifest import load_translation_file
from lingobox.i18n.models import I18nOptions, LocaleOptions


logger = logging.getLogger(__name__)

ENV_PREFIX = "LINGOBOX_"


class UserConfig:
    """Manages user-specific configuration for Lingobox using Pydantic Settings."""

    def __init__(self, cli_config_path: str | Path | None = None) -> None:
        self._config_paths = self._generate_config_paths(cli_config_path)
        self._cli_config_path = self._config_paths[0] if cli_config_path else None
        self._main_config_path: Path | None = None
        self._load_config()

    @property
    def config(self) -> UserConfigData:
        return self._config

    @property
    def config_path(self) -> Path | None:
        """Config file the values were loaded from, if any."""
        return self._main_config_path

    def _generate_config_paths(self, cli_config_path: str | Path | None) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if cli_config_path:
            config_paths.append(Path(cli_config_path).expanduser().resolve())

        config_paths.extend(
            [Path.cwd() / "lingobox.yaml", Path.cwd() / ".lingobox.yml"]
        )

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        config_root = (
            Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        )
        config_paths.extend(
            [
                config_root / "lingobox" / "config.yaml",
                config_root / "lingobox" / "config.yml",
            ]
        )
        return config_paths

    def _load_config(self) -> None:
        logger.debug("Config search paths: %s", [str(p) for p in self._config_paths])

        if self._cli_config_path is not None and not self._cli_config_path.exists():
            raise ConfigError(f"Configuration file not found: {self._cli_config_path}")

        config_data: dict[str, Any] = {}
        for path in self._config_paths:
            if path.is_file():
                config_data = self._read_yaml(path)
                self._main_config_path = path
                logger.debug("Loaded user configuration from %s", path)
                break
        else:
            logger.debug(
                "No user configuration files found. Using defaults with environment variables."
            )

        try:
            self._config = UserConfigData(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _read_yaml(path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error reading configuration file {path}: {e}") from e

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ConfigError(f"Invalid configuration format in {path}")
        return raw_config

    def get_log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        return int(getattr(logging, self._config.log_level, logging.WARNING))

    def build_i18n_options(self, locales: list[str] | None = None) -> I18nOptions:
        """Resolve locale configuration into executor options.

        Args:
            locales: Locales to inline; defaults to every configured locale

        Raises:
            ConfigError: If a locale is unknown or its translation cannot be loaded
        """
        config = self._config
        inline_locales = list(locales) if locales else list(config.locales)
        if not inline_locales:
            raise ConfigError("No locales configured for inlining")

        base_dir = (
            self._main_config_path.parent if self._main_config_path else Path.cwd()
        )
        locale_options: dict[str, LocaleOptions] = {}
        for locale in inline_locales:
            locale_config = config.locales.get(locale)
            if locale_config is None:
                if locale != config.source_locale:
                    raise ConfigError(f"Locale '{locale}' is not configured")
                locale_options[locale] = LocaleOptions()
                continue

            translation: dict[str, str] = {}
            if locale_config.translation is not None:
                translation_path = locale_config.translation
                if not translation_path.is_absolute():
                    translation_path = base_dir / translation_path
                try:
                    declared, translation = load_translation_file(translation_path)
                except ManifestError as e:
                    raise ConfigError(str(e)) from e
                if declared and declared != locale:
                    logger.warning(
                        "Translation file %s declares locale '%s' but is configured for '%s'",
                        translation_path,
                        declared,
                        locale,
                    )
            elif locale != config.source_locale:
                logger.warning("Locale '%s' has no translation file", locale)

            locale_options[locale] = LocaleOptions(
                translation=translation, subpath=locale_config.subpath
            )

        if config.flat_output and len(inline_locales) > 1:
            raise ConfigError("Flat output is only supported when inlining one locale")

        return I18nOptions(
            source_locale=config.source_locale,
            inline_locales=inline_locales,
            locales=locale_options,
            flat_output=config.flat_output,
        )


def create_user_config(cli_config_path: str | Path | None = None) -> UserConfig:
    """Factory function to create a UserConfig instance."""
    return UserConfig(cli_config_path=cli_config_path)
