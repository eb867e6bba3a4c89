"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from launch_search.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_LOG_LEVEL,
    ENV_MAX_RESULTS,
    ENV_NO_DOCUMENTS,
    get_config_path,
)
from launch_search.config.schema import LaunchSearchConfig
from launch_search.exceptions import ConfigError, ConfigValidationError

# Global config instance (singleton)
_config: LaunchSearchConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> LaunchSearchConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Create default config if file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides(LaunchSearchConfig())
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = LaunchSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: LaunchSearchConfig) -> LaunchSearchConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    max_results = os.environ.get(ENV_MAX_RESULTS)
    if max_results:
        try:
            config.search.max_results = int(max_results)
        except (ValueError, ValidationError) as e:
            raise ConfigValidationError(
                f"{ENV_MAX_RESULTS} must be a positive integer, got {max_results!r}"
            ) from e

    no_documents = os.environ.get(ENV_NO_DOCUMENTS)
    if no_documents and no_documents.lower() in ("1", "true", "yes"):
        config.documents.enabled = False

    return config


def get_config() -> LaunchSearchConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> LaunchSearchConfig:
    """Reload configuration from disk.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Reloaded configuration.
    """
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
