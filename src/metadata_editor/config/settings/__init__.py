"""Config settings – 12-factor env-based configuration."""
from metadata_editor.config.settings.base import AppSettings, Settings
from metadata_editor.config.settings.factory import SettingsFactory
from metadata_editor.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "AppSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
