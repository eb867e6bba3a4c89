"""File name helpers shared by the document search."""

import mimetypes
import re
from pathlib import Path

# Files that may appear as document results
DOCUMENT_EXTENSIONS = frozenset(
    {
        ".pdf",
        ".doc",
        ".docx",
        ".odt",
        ".txt",
        ".rtf",
        ".xls",
        ".xlsx",
        ".ods",
        ".ppt",
        ".pptx",
        ".odp",
        ".md",
        ".csv",
    }
)

# Files whose content may be searched as plain text
TEXT_EXTENSIONS = frozenset(
    {
        ".txt",
        ".md",
        ".csv",
        ".rtf",
        ".json",
        ".xml",
        ".html",
        ".css",
        ".js",
        ".py",
        ".sh",
    }
)

DEFAULT_DOCUMENT_ICON = "text-x-generic-symbolic"

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def is_hidden(name: str) -> bool:
    """Check if a file or directory name is hidden (starts with .)."""
    return name.startswith(".")


def has_extension(name: str, extensions: frozenset[str]) -> bool:
    """Check whether a file name ends with one of the given extensions.

    Args:
        name: File name (any case).
        extensions: Lowercase extensions including the leading dot.

    Returns:
        True if the name matches one of the extensions.
    """
    lower = name.lower()
    return any(lower.endswith(ext) for ext in extensions)


def strip_extension(name: str) -> str:
    """Remove the last extension from a file name ("a.b.txt" -> "a.b")."""
    return _EXTENSION_RE.sub("", name)


def expand_folder(folder: str, home: Path | None = None) -> Path:
    """Expand a configured folder, resolving a leading '~' to the home dir.

    Args:
        folder: Folder as written in configuration.
        home: Home directory override (defaults to the user's home).

    Returns:
        Expanded path.
    """
    home = home or Path.home()
    if folder.startswith("~"):
        return Path(str(home) + folder[1:])
    return Path(folder)


def display_folder(folder: Path, home: Path | None = None) -> str:
    """Render a folder for display, abbreviating the home prefix to '~'."""
    home_str = str(home or Path.home())
    folder_str = str(folder)
    if folder_str.startswith(home_str):
        return "~" + folder_str[len(home_str):]
    return folder_str


def guess_content_type(name: str) -> str | None:
    """Guess a file's content type from its name."""
    content_type, _ = mimetypes.guess_type(name, strict=False)
    return content_type


def icon_for_content_type(content_type: str | None) -> str:
    """Map a content type to a freedesktop icon name.

    Args:
        content_type: MIME type such as "application/pdf", or None.

    Returns:
        Icon name such as "application-pdf", or the generic text icon.
    """
    if not content_type:
        return DEFAULT_DOCUMENT_ICON
    return content_type.replace("/", "-")
