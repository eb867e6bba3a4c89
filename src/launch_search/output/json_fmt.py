"""JSON output formatter."""

import json
from typing import Any, TextIO

from launch_search.config.schema import OutputFormat
from launch_search.output.base import OutputFormatter, result_to_dict
from launch_search.search.results import ResultsView


class JSONFormatter(OutputFormatter):
    """JSON output formatter.

    Produces structured JSON output suitable for programmatic
    consumption and integration with other tools.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
        ensure_ascii: bool = False,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to include the generation token.
            indent: JSON indentation (None for compact).
            ensure_ascii: Whether to escape non-ASCII characters.
        """
        super().__init__(stream, error_stream, verbose)
        self._indent = indent
        self._ensure_ascii = ensure_ascii

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    def _to_json(self, data: Any) -> str:
        return json.dumps(
            data,
            indent=self._indent,
            ensure_ascii=self._ensure_ascii,
            default=str,
        )

    def format_view(self, view: ResultsView) -> str:
        output: dict[str, Any] = {
            "query": view.query,
            "category": view.category.value,
            "loading_more": view.loading_more,
            "results": [result_to_dict(r) for r in view.rows],
        }
        if view.best_match is not None:
            output["best_match"] = result_to_dict(view.best_match)
            output["groups"] = [
                {"title": g.title, "results": [result_to_dict(r) for r in g.results]}
                for g in view.groups
            ]
        if self._verbose:
            output["generation"] = view.generation
        return self._to_json(output)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        if columns:
            rows = [{col: row.get(col) for col in columns} for row in rows]
        output: dict[str, Any] = {"rows": rows}
        if title:
            output["title"] = title
        return self._to_json(output)

    def format_error(self, message: str) -> str:
        return self._to_json({"success": False, "error": message})
