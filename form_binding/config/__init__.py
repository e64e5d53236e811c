"""Configuration package for runtime settings and startup validation."""

from .settings import BindingSettings, SettingsLoadError, config_load_settings

__all__ = ["BindingSettings", "SettingsLoadError", "config_load_settings"]
