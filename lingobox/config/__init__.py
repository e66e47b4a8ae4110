"""Configuration for Lingobox."""

from lingobox.config.models import LocaleConfig, UserConfigData
from lingobox.config.user_config import UserConfig, create_user_config


__all__ = ["LocaleConfig", "UserConfig", "UserConfigData", "create_user_config"]
