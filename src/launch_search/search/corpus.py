"""Precomputed application corpus.

The corpus is a snapshot of the catalog with lowercase search fields
computed once, so scoring never recomputes them per keystroke. A rebuild
creates a new tuple and swaps it in with a single assignment; readers
holding the old snapshot keep a complete, consistent view.
"""

import re
from dataclasses import dataclass

from launch_search.catalog.base import AppInfo, CatalogProvider
from launch_search.exceptions import CatalogError
from launch_search.utils.logging import get_logger

logger = get_logger(__name__)

_WORD_SPLIT_RE = re.compile(r"[\s\-_.]+")
_DESKTOP_SUFFIX = ".desktop"


@dataclass(frozen=True)
class CorpusEntry:
    """One searchable application with precomputed lowercase fields."""

    app_id: str
    name: str
    description: str
    name_lower: str
    id_lower: str
    description_lower: str
    id_parts: tuple[str, ...]
    words: tuple[str, ...]
    icon: str | None = None

    @classmethod
    def from_app(cls, app: AppInfo) -> "CorpusEntry":
        """Build an entry from a catalog record."""
        name = app.name or ""
        app_id = app.app_id or ""
        description = app.description or ""
        name_lower = name.lower()
        id_lower = app_id.lower()

        return cls(
            app_id=app_id,
            name=name,
            description=description,
            name_lower=name_lower,
            id_lower=id_lower,
            description_lower=description.lower(),
            id_parts=tuple(id_lower.removesuffix(_DESKTOP_SUFFIX).split(".")),
            words=tuple(_WORD_SPLIT_RE.split(name_lower)),
            icon=app.icon,
        )


class CorpusCache:
    """Read-mostly snapshot of the searchable application set."""

    def __init__(self, entries: tuple[CorpusEntry, ...] = ()) -> None:
        self._entries = entries

    @property
    def entries(self) -> tuple[CorpusEntry, ...]:
        """The current snapshot."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def rebuild(self, catalog: CatalogProvider) -> int:
        """Replace the snapshot with the catalog's current visible apps.

        A failing catalog yields an empty corpus; a malformed record is
        skipped without affecting the others.

        Returns:
            Number of entries in the new snapshot.
        """
        try:
            apps = catalog.list_apps()
        except CatalogError as e:
            logger.warning("Catalog unavailable, corpus is empty: %s", e)
            self._entries = ()
            return 0

        entries: list[CorpusEntry] = []
        for app in apps:
            try:
                if not app.visible:
                    continue
                entries.append(CorpusEntry.from_app(app))
            except (AttributeError, TypeError) as e:
                logger.debug("Skipping malformed catalog entry %r: %s", app, e)

        self._entries = tuple(entries)
        logger.debug("Corpus rebuilt with %d entries", len(entries))
        return len(entries)
