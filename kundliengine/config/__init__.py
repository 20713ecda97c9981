"""Configuration models for kundliengine."""

from __future__ import annotations

from .settings import (
    CURRENT_SETTINGS_SCHEMA_VERSION,
    AspectsCfg,
    Settings,
    ShadbalaCfg,
    SynastryCfg,
    ThresholdsCfg,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "AspectsCfg",
    "Settings",
    "ShadbalaCfg",
    "SynastryCfg",
    "ThresholdsCfg",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]
