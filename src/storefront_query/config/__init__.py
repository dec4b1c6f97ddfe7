"""Config – 12-factor settings and loaders."""

from storefront_query.config.catalog import CatalogSettings
from storefront_query.config.settings import DotenvSettingsLoader, EnvSettingsLoader, Settings, SettingsLoader
from storefront_query.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "CatalogSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
