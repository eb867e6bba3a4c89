"""In-memory catalog, loadable from a JSON file."""

import json
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from launch_search.catalog.base import AppInfo, CatalogProvider
from launch_search.exceptions import CatalogUnavailableError


class _AppRecord(BaseModel):
    id: str
    name: str
    description: str = ""
    icon: str | None = None
    visible: bool = True


_RECORDS = TypeAdapter(list[_AppRecord])


class StaticCatalog(CatalogProvider):
    """Catalog backed by a fixed list of applications.

    Useful for embedding the engine with a host-supplied app list and
    for deterministic tests.
    """

    def __init__(
        self,
        apps: list[AppInfo] | None = None,
        most_used: list[str] | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            apps: Applications in catalog order.
            most_used: App ids ordered by usage, most used first.
        """
        super().__init__()
        self._apps = list(apps or [])
        self._most_used = list(most_used or [])

    @classmethod
    def from_json(cls, path: Path) -> "StaticCatalog":
        """Load a catalog from a JSON array of app objects.

        Each object has ``id`` and ``name`` and optionally ``description``,
        ``icon`` and ``visible``.

        Raises:
            CatalogUnavailableError: If the file is unreadable or malformed.
        """
        try:
            records = _RECORDS.validate_python(json.loads(path.read_text()))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise CatalogUnavailableError(f"Cannot load catalog {path}: {e}") from e

        return cls(
            [
                AppInfo(
                    app_id=r.id,
                    name=r.name,
                    description=r.description,
                    icon=r.icon,
                    visible=r.visible,
                )
                for r in records
            ]
        )

    def list_apps(self) -> list[AppInfo]:
        return list(self._apps)

    def most_used(self) -> list[AppInfo]:
        by_id = {app.app_id: app for app in self._apps}
        return [by_id[app_id] for app_id in self._most_used if app_id in by_id]

    def set_apps(self, apps: list[AppInfo]) -> None:
        """Replace the application list and notify listeners."""
        self._apps = list(apps)
        self.emit_changed()
