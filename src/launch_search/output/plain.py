"""Plain text output formatter."""

from typing import Any

from launch_search.config.schema import OutputFormat
from launch_search.output.base import OutputFormatter, result_target
from launch_search.search.results import ResultsView, ScoredResult


class PlainFormatter(OutputFormatter):
    """Plain text output formatter.

    Produces simple, unformatted text output suitable for
    piping to other commands or basic terminal display.
    """

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def _line(self, index: int, result: ScoredResult) -> str:
        line = f"{index:>2}. {result.name}"
        if result.description:
            line += f" - {result.description}"
        if self._verbose:
            line += f" [{result.kind.value} {result.score:.1f} {result_target(result)}]"
        return line

    def format_view(self, view: ResultsView) -> str:
        if view.is_empty:
            lines = [f'No results for "{view.query}"']
        elif view.best_match is not None:
            lines = ["Best match", self._line(0, view.best_match)]
            index = 1
            for group in view.groups:
                lines.append("")
                lines.append(group.title)
                for result in group.results:
                    lines.append(self._line(index, result))
                    index += 1
        else:
            lines = [self._line(i, r) for i, r in enumerate(view.rows)]

        if view.loading_more:
            lines.append("(searching documents...)")
        return "\n".join(lines)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Format data as a simple text table."""
        lines: list[str] = []
        if title:
            lines.append(title)
            lines.append("-" * len(title))

        if not rows:
            lines.append("(empty)")
            return "\n".join(lines)

        columns = self._columns(rows, columns)
        widths = {
            col: max(len(col), *(len(str(row.get(col, ""))) for row in rows))
            for col in columns
        }
        lines.append("  ".join(col.ljust(widths[col]) for col in columns))
        lines.append("  ".join("-" * widths[col] for col in columns))
        for row in rows:
            lines.append("  ".join(str(row.get(col, "")).ljust(widths[col]) for col in columns))
        return "\n".join(lines)

    def format_error(self, message: str) -> str:
        return f"Error: {message}"
