"""Catalog provider contract and application record."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from itertools import count

from launch_search.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppInfo:
    """An installed application as reported by a catalog provider.

    Attributes:
        app_id: Stable identifier, e.g. "org.mozilla.firefox.desktop".
        name: Display name.
        description: One-line description (may be empty).
        icon: Opaque icon reference (theme icon name or file path).
        visible: Whether the app should be offered in search.
    """

    app_id: str
    name: str
    description: str = ""
    icon: str | None = None
    visible: bool = True


class CatalogProvider(ABC):
    """Abstract base class for application catalogs.

    Providers enumerate installed applications and notify listeners when
    the installed set changes.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, Callable[[], None]] = {}
        self._ids = count(1)

    @abstractmethod
    def list_apps(self) -> list[AppInfo]:
        """Enumerate installed applications.

        Raises:
            CatalogUnavailableError: If the catalog cannot be read.
        """
        pass

    def lookup(self, app_id: str) -> AppInfo | None:
        """Find an application by id."""
        for app in self.list_apps():
            if app.app_id == app_id:
                return app
        return None

    def most_used(self) -> list[AppInfo]:
        """Applications ordered by usage, most used first.

        Providers without usage data return an empty list.
        """
        return []

    def connect_changed(self, callback: Callable[[], None]) -> int:
        """Register a callback for install/uninstall notifications.

        Returns:
            Handler id for :meth:`disconnect`.
        """
        handler_id = next(self._ids)
        self._listeners[handler_id] = callback
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        """Remove a change callback."""
        self._listeners.pop(handler_id, None)

    def emit_changed(self) -> None:
        """Notify listeners that the installed set changed."""
        for callback in list(self._listeners.values()):
            try:
                callback()
            except Exception:
                logger.warning("Catalog change listener failed", exc_info=True)
