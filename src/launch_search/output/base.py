"""Output formatter protocol and base classes."""

import sys
from abc import ABC, abstractmethod
from typing import Any, TextIO

from launch_search.config.schema import OutputFormat
from launch_search.search.results import (
    AppResult,
    DocumentResult,
    ResultsView,
    ScoredResult,
    SettingResult,
)


def result_to_dict(result: ScoredResult) -> dict[str, Any]:
    """Flatten a result into JSON-compatible fields."""
    data: dict[str, Any] = {
        "kind": result.kind.value,
        "name": result.name,
        "description": result.description,
        "icon": result.icon,
        "score": round(result.score, 2),
    }
    match result:
        case AppResult(app_id=app_id):
            data["app_id"] = app_id
        case SettingResult(panel=panel):
            data["panel"] = panel
        case DocumentResult(path=path, folder=folder):
            data["path"] = str(path)
            data["folder"] = folder
    return data


def result_target(result: ScoredResult) -> str:
    """Short description of what activating a result opens."""
    match result:
        case AppResult(app_id=app_id):
            return app_id
        case SettingResult(panel=panel):
            return f"settings:{panel}"
        case DocumentResult(path=path):
            return str(path)
    return ""


class OutputFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters render result views, tables and errors in different
    formats (plain text, JSON, rich formatted).
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the formatter.

        Args:
            stream: Output stream (defaults to stdout).
            error_stream: Error stream (defaults to stderr).
            verbose: Whether to show scores and targets.
        """
        self._stream = stream or sys.stdout
        self._error_stream = error_stream or sys.stderr
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the format type of this formatter."""
        pass

    @abstractmethod
    def format_view(self, view: ResultsView) -> str:
        """Format a display pass.

        Args:
            view: Ranked (and possibly grouped) results.

        Returns:
            Formatted string representation.
        """
        pass

    @abstractmethod
    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Format data as a table.

        Args:
            rows: List of row dictionaries.
            columns: Column names (inferred from rows if None).
            title: Optional title.

        Returns:
            Formatted string representation.
        """
        pass

    @abstractmethod
    def format_error(self, message: str) -> str:
        pass

    def print_view(self, view: ResultsView) -> None:
        print(self.format_view(view), file=self._stream)

    def print_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> None:
        print(self.format_table(rows, columns, title), file=self._stream)

    def print_error(self, message: str) -> None:
        print(self.format_error(message), file=self._error_stream)

    @staticmethod
    def _columns(rows: list[dict[str, Any]], columns: list[str] | None) -> list[str]:
        if columns:
            return columns
        seen: dict[str, None] = {}
        for row in rows:
            for key in row:
                seen.setdefault(key, None)
        return list(seen)
