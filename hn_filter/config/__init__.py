"""Configuration module - settings and environment management."""

from hn_filter.config.settings import (
    ConfigurationError,
    DEFAULT_SHEET_NAME,
    Settings,
    load_settings,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_SHEET_NAME",
    "Settings",
    "load_settings",
]
