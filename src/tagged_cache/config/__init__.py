"""Config – 12-factor settings, loaders, and validation errors."""

from tagged_cache.config.settings import EnvSettingsLoader, Settings, SettingsLoader, TaggedCacheSettings
from tagged_cache.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TaggedCacheSettings",
]
