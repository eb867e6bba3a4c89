"""Synonym index mapping search terms to application names.

The forward table maps a human search term ("browser") to application
names ("firefox", "chromium"); the reverse table maps each lowercase
application name back to the terms that list it. Both tables are rebuilt
together whenever the forward table is replaced.
"""

import json
from collections.abc import Mapping

from pydantic import TypeAdapter, ValidationError

from launch_search.config.store import SettingsStore
from launch_search.utils.logging import get_logger

logger = get_logger(__name__)

SYNONYMS_KEY = "synonyms.table"

DEFAULT_SEARCH_SYNONYMS: dict[str, list[str]] = {
    "terminal": [
        "console", "konsole", "gnome-terminal", "xterm", "terminator", "alacritty",
        "kitty", "tilix", "guake", "yakuake", "hyper", "wezterm", "foot", "st",
        "urxvt", "rxvt", "xfce4-terminal", "lxterminal", "mate-terminal",
        "terminology", "cool-retro-term", "black box", "ptyxis",
    ],
    "term": ["console", "konsole", "gnome-terminal", "terminal", "xterm", "terminator", "alacritty", "kitty"],
    "konsole": ["console", "terminal", "konsole"],
    "shell": ["console", "konsole", "gnome-terminal", "terminal", "bash", "zsh"],
    "command": ["console", "konsole", "gnome-terminal", "terminal"],
    "cmd": ["console", "konsole", "gnome-terminal", "terminal"],
    "cli": ["console", "konsole", "gnome-terminal", "terminal"],
    "browser": [
        "firefox", "chromium", "chrome", "google-chrome", "brave", "edge",
        "vivaldi", "opera", "epiphany", "web",
    ],
    "internet": ["firefox", "chromium", "chrome", "brave", "edge"],
    "web": ["firefox", "chromium", "chrome", "brave", "edge", "epiphany"],
    "ff": ["firefox"],
    "code": [
        "visual studio code", "code", "vscode", "codium", "vscodium", "atom",
        "sublime", "gedit", "kate", "geany",
    ],
    "editor": [
        "visual studio code", "code", "vscode", "gedit", "kate", "vim", "neovim",
        "emacs", "nano", "sublime", "atom", "geany", "notepad",
    ],
    "ide": [
        "visual studio code", "code", "jetbrains", "intellij", "pycharm", "webstorm",
        "eclipse", "netbeans", "kdevelop", "gnome-builder", "android studio",
    ],
    "vs": ["visual studio code", "vscode"],
    "vsc": ["visual studio code", "vscode"],
    "vis": ["visual studio code", "vscode"],
    "files": ["nautilus", "files", "dolphin", "thunar", "nemo", "pcmanfm", "konqueror", "caja", "spacefm"],
    "file manager": ["nautilus", "files", "dolphin", "thunar", "nemo"],
    "explorer": ["nautilus", "files", "dolphin", "thunar", "nemo"],
    "folder": ["nautilus", "files", "dolphin", "thunar"],
    "datei": ["nautilus", "files", "dolphin", "thunar"],
    "text": ["gedit", "kate", "gnome-text-editor", "mousepad", "pluma", "leafpad", "notepad"],
    "office": ["libreoffice", "openoffice", "calligra", "onlyoffice", "wps"],
    "word": ["libreoffice writer", "writer", "abiword"],
    "excel": ["libreoffice calc", "calc", "gnumeric"],
    "powerpoint": ["libreoffice impress", "impress"],
    "spreadsheet": ["libreoffice calc", "calc", "gnumeric"],
    "document": ["libreoffice writer", "writer", "abiword"],
    "music": [
        "spotify", "rhythmbox", "lollypop", "elisa", "clementine", "amarok",
        "audacious", "deadbeef", "vlc", "mpv",
    ],
    "video": ["vlc", "mpv", "totem", "celluloid", "smplayer", "kaffeine", "parole", "dragon"],
    "player": ["vlc", "mpv", "totem", "spotify", "rhythmbox"],
    "movie": ["vlc", "mpv", "totem", "celluloid"],
    "film": ["vlc", "mpv", "totem", "celluloid"],
    "musik": ["spotify", "rhythmbox", "lollypop", "elisa"],
    "image": ["eog", "image viewer", "gwenview", "feh", "sxiv", "ristretto", "gpicview", "gimp", "krita"],
    "photo": ["eog", "image viewer", "gwenview", "shotwell", "digikam", "darktable", "gimp"],
    "picture": ["eog", "image viewer", "gwenview", "gimp"],
    "bild": ["eog", "image viewer", "gwenview", "gimp"],
    "graphics": ["gimp", "krita", "inkscape", "blender"],
    "paint": ["gimp", "krita", "kolourpaint", "drawing"],
    "draw": ["inkscape", "krita", "gimp", "drawing"],
    "chat": ["telegram", "discord", "signal", "element", "slack", "teams", "whatsapp"],
    "message": ["telegram", "discord", "signal", "element", "slack"],
    "mail": ["thunderbird", "evolution", "geary", "mailspring", "kmail"],
    "email": ["thunderbird", "evolution", "geary", "mailspring", "kmail"],
    "settings": ["gnome-control-center", "settings", "systemsettings", "system settings"],
    "preferences": ["gnome-control-center", "settings", "preferences"],
    "config": ["gnome-control-center", "settings", "dconf", "gconf"],
    "einstellungen": ["gnome-control-center", "settings", "systemsettings"],
    "system": ["gnome-system-monitor", "system monitor", "ksysguard", "htop"],
    "monitor": ["gnome-system-monitor", "system monitor", "ksysguard"],
    "task": ["gnome-system-monitor", "system monitor", "ksysguard", "htop"],
    "process": ["gnome-system-monitor", "system monitor", "ksysguard", "htop"],
    "archive": ["file-roller", "ark", "engrampa", "xarchiver", "peazip"],
    "zip": ["file-roller", "ark", "engrampa", "xarchiver"],
    "extract": ["file-roller", "ark", "engrampa"],
    "compress": ["file-roller", "ark", "engrampa"],
    "calc": ["gnome-calculator", "calculator", "kcalc", "galculator", "speedcrunch", "libreoffice calc"],
    "calculator": ["gnome-calculator", "calculator", "kcalc", "galculator"],
    "rechner": ["gnome-calculator", "calculator", "kcalc"],
    "screenshot": ["gnome-screenshot", "flameshot", "spectacle", "shutter", "scrot"],
    "bildschirmfoto": ["gnome-screenshot", "flameshot", "spectacle"],
    "notes": ["gnome-notes", "tomboy", "gnote", "simplenote", "joplin", "obsidian", "notion"],
    "notizen": ["gnome-notes", "tomboy", "gnote", "simplenote"],
}

_TABLE = TypeAdapter(dict[str, list[str]])


def parse_synonym_table(raw: str) -> dict[str, list[str]]:
    """Parse a serialized synonym table.

    Args:
        raw: JSON object mapping term to a list of application names.

    Returns:
        The parsed table, or the built-in defaults if ``raw`` is empty or
        not a valid table.
    """
    if not raw or not raw.strip():
        return dict(DEFAULT_SEARCH_SYNONYMS)

    try:
        return _TABLE.validate_python(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Invalid synonym table, using defaults: %s", e)
        return dict(DEFAULT_SEARCH_SYNONYMS)


class SynonymIndex:
    """Bidirectional term/application-name lookup."""

    def __init__(self, table: Mapping[str, list[str]] | None = None) -> None:
        self._forward: dict[str, frozenset[str]] = {}
        self._reverse: dict[str, tuple[str, ...]] = {}
        self._handler_id: int | None = None
        self._store: SettingsStore | None = None
        self.replace(DEFAULT_SEARCH_SYNONYMS if table is None else table)

    @property
    def forward(self) -> Mapping[str, frozenset[str]]:
        return self._forward

    @property
    def reverse(self) -> Mapping[str, tuple[str, ...]]:
        return self._reverse

    def replace(self, table: Mapping[str, list[str]]) -> None:
        """Swap in a new forward table and rebuild the reverse table."""
        forward: dict[str, frozenset[str]] = {}
        reverse: dict[str, list[str]] = {}

        for term, apps in table.items():
            term_lower = term.lower().strip()
            names = frozenset(app.lower() for app in apps)
            forward[term_lower] = forward.get(term_lower, frozenset()) | names
            for name in names:
                terms = reverse.setdefault(name, [])
                if term_lower not in terms:
                    terms.append(term_lower)

        self._forward = forward
        self._reverse = {name: tuple(terms) for name, terms in reverse.items()}
        logger.debug("Synonym index rebuilt: %d terms, %d names", len(forward), len(reverse))

    def load(self, raw: str) -> None:
        """Replace the table from its serialized form (see :func:`parse_synonym_table`)."""
        self.replace(parse_synonym_table(raw))

    def matches(self, query: str) -> frozenset[str]:
        """Application names reachable from terms related to ``query``.

        A term is related when it starts with the query or the query
        starts with it, so both "bro" and "browsers" reach "browser".
        """
        normalized = query.lower().strip()
        if not normalized:
            return frozenset()

        found: set[str] = set()
        for term, names in self._forward.items():
            if term.startswith(normalized) or normalized.startswith(term):
                found.update(names)
        return frozenset(found)

    def terms_for(self, name_lower: str) -> tuple[str, ...]:
        """Terms whose expansion lists the given lowercase application name."""
        return self._reverse.get(name_lower, ())

    def expand(self, term: str) -> frozenset[str]:
        """Application names listed for one exact term."""
        return self._forward.get(term.lower().strip(), frozenset())

    def bind(self, store: SettingsStore) -> None:
        """Load the table from ``store`` and follow later changes to it."""
        self.unbind()
        self._store = store
        self.load(store.get(SYNONYMS_KEY))
        self._handler_id = store.connect(SYNONYMS_KEY, self._on_table_changed)

    def unbind(self) -> None:
        if self._store is not None and self._handler_id is not None:
            self._store.disconnect(self._handler_id)
        self._store = None
        self._handler_id = None

    def _on_table_changed(self, key: str, value: str) -> None:
        logger.info("Synonym table changed, reloading")
        self.load(value)
