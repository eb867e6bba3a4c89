"""Application catalog built from freedesktop.org ``.desktop`` files."""

import configparser
import os
from pathlib import Path

from launch_search.catalog.base import AppInfo, CatalogProvider
from launch_search.utils.logging import get_logger

logger = get_logger(__name__)

DESKTOP_SECTION = "Desktop Entry"


def default_application_dirs() -> list[Path]:
    """XDG application directories in lookup order (user first)."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"

    dirs = [Path(data_home) / "applications"]
    dirs.extend(Path(d) / "applications" for d in data_dirs.split(":") if d)
    return dirs


def _is_true(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


def parse_desktop_file(path: Path, app_id: str) -> AppInfo | None:
    """Parse one desktop entry.

    Args:
        path: Path to the ``.desktop`` file.
        app_id: Desktop file id to report.

    Returns:
        AppInfo for application entries, or None for other entry types.

    Raises:
        configparser.Error, OSError, UnicodeDecodeError: On unreadable files.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    with open(path, encoding="utf-8") as f:
        parser.read_file(f)

    if not parser.has_section(DESKTOP_SECTION):
        return None

    entry = parser[DESKTOP_SECTION]
    if entry.get("type", "Application") != "Application":
        return None

    name = entry.get("name", "").strip()
    if not name:
        return None

    return AppInfo(
        app_id=app_id,
        name=name,
        description=entry.get("comment", "").strip(),
        icon=entry.get("icon") or None,
        visible=not (_is_true(entry.get("nodisplay")) or _is_true(entry.get("hidden"))),
    )


class DesktopEntryCatalog(CatalogProvider):
    """Catalog scanning XDG ``applications`` directories.

    A desktop file id found in an earlier directory shadows the same id in
    later ones. Call :meth:`poll` periodically to detect installs and
    uninstalls; listeners are notified when the file set changes.
    """

    def __init__(self, directories: list[Path] | None = None) -> None:
        super().__init__()
        self.directories = directories if directories is not None else default_application_dirs()
        self._snapshot: dict[Path, float] | None = None

    def _desktop_files(self) -> dict[str, Path]:
        files: dict[str, Path] = {}
        for directory in self.directories:
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*.desktop")):
                app_id = path.relative_to(directory).as_posix().replace("/", "-")
                files.setdefault(app_id, path)
        return files

    def _take_snapshot(self) -> dict[Path, float]:
        snapshot: dict[Path, float] = {}
        for path in self._desktop_files().values():
            try:
                snapshot[path] = path.stat().st_mtime
            except OSError:
                continue
        return snapshot

    def list_apps(self) -> list[AppInfo]:
        apps: list[AppInfo] = []
        for app_id, path in self._desktop_files().items():
            try:
                app = parse_desktop_file(path, app_id)
            except (configparser.Error, OSError, UnicodeDecodeError) as e:
                logger.debug("Skipping unreadable desktop file %s: %s", path, e)
                continue
            if app is not None and app.visible:
                apps.append(app)

        if self._snapshot is None:
            self._snapshot = self._take_snapshot()
        return apps

    def poll(self) -> bool:
        """Check for installed or removed applications.

        Returns:
            True if the set changed (listeners have been notified).
        """
        snapshot = self._take_snapshot()
        previous, self._snapshot = self._snapshot, snapshot
        if previous is None or previous == snapshot:
            return False
        self.emit_changed()
        return True
