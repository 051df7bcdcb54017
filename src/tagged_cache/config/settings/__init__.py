"""Config settings – 12-factor env-based configuration."""
from tagged_cache.config.settings.base import Settings
from tagged_cache.config.settings.cache import TaggedCacheSettings
from tagged_cache.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader", "TaggedCacheSettings"]
