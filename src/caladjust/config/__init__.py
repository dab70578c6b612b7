"""Configuration loading."""

from __future__ import annotations

from caladjust.config.settings import (
    DefaultsConfig,
    Settings,
    ThresholdsConfig,
    default_config_path,
    get_settings,
    reload_settings,
)

__all__ = [
    "DefaultsConfig",
    "Settings",
    "ThresholdsConfig",
    "default_config_path",
    "get_settings",
    "reload_settings",
]
