"""Configuration management."""

from launch_search.config.loader import get_config, load_config, reload_config, reset_config
from launch_search.config.schema import Category, LaunchSearchConfig, OutputFormat
from launch_search.config.store import SettingsStore

__all__ = [
    "Category",
    "LaunchSearchConfig",
    "OutputFormat",
    "SettingsStore",
    "get_config",
    "load_config",
    "reload_config",
    "reset_config",
]
