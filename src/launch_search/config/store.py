"""Key-value view over the configuration with per-key change notification.

Keys are dotted ``section.field`` paths into :class:`LaunchSearchConfig`,
for example ``"search.max_results"`` or ``"synonyms.table"``.
"""

from collections.abc import Callable
from itertools import count
from typing import Any

from pydantic import BaseModel, ValidationError

from launch_search.config.schema import LaunchSearchConfig
from launch_search.exceptions import ConfigNotFoundError, ConfigValidationError
from launch_search.utils.logging import get_logger

logger = get_logger(__name__)

ChangeCallback = Callable[[str, Any], None]


class SettingsStore:
    """Typed reads and writes of configuration keys with change listeners."""

    def __init__(self, config: LaunchSearchConfig | None = None) -> None:
        self._config = config or LaunchSearchConfig()
        self._listeners: dict[str, dict[int, ChangeCallback]] = {}
        self._handler_keys: dict[int, str] = {}
        self._ids = count(1)

    @property
    def config(self) -> LaunchSearchConfig:
        """The underlying configuration model."""
        return self._config

    def _resolve(self, key: str) -> tuple[BaseModel, str]:
        section_name, _, field_name = key.partition(".")
        section = getattr(self._config, section_name, None)
        if (
            not field_name
            or not isinstance(section, BaseModel)
            or field_name not in type(section).model_fields
        ):
            raise ConfigNotFoundError(f"Unknown configuration key: {key}")
        return section, field_name

    def get(self, key: str) -> Any:
        """Read a configuration value.

        Raises:
            ConfigNotFoundError: If the key does not exist.
        """
        section, field_name = self._resolve(key)
        return getattr(section, field_name)

    def set(self, key: str, value: Any) -> None:
        """Write a configuration value and notify listeners if it changed.

        Raises:
            ConfigNotFoundError: If the key does not exist.
            ConfigValidationError: If the value has the wrong type.
        """
        section, field_name = self._resolve(key)
        old = getattr(section, field_name)
        try:
            setattr(section, field_name, value)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid value for {key}: {e}") from e

        new = getattr(section, field_name)
        if new != old:
            self._notify(key, new)

    def connect(self, key: str, callback: ChangeCallback) -> int:
        """Register a listener for changes to one key.

        Returns:
            Handler id for :meth:`disconnect`.
        """
        self._resolve(key)
        handler_id = next(self._ids)
        self._listeners.setdefault(key, {})[handler_id] = callback
        self._handler_keys[handler_id] = key
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        """Remove a listener. Unknown ids are ignored."""
        key = self._handler_keys.pop(handler_id, None)
        if key is not None:
            self._listeners.get(key, {}).pop(handler_id, None)

    def _notify(self, key: str, value: Any) -> None:
        for callback in list(self._listeners.get(key, {}).values()):
            try:
                callback(key, value)
            except Exception:
                logger.warning("Change listener for %s failed", key, exc_info=True)
