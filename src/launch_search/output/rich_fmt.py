"""Rich terminal output formatter."""

from io import StringIO
from typing import Any, TextIO

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from launch_search.config.schema import OutputFormat
from launch_search.output.base import OutputFormatter, result_target
from launch_search.search.results import ResultKind, ResultsView, ScoredResult

_KIND_STYLES = {
    ResultKind.APP: "bold cyan",
    ResultKind.SETTING: "bold magenta",
    ResultKind.DOCUMENT: "bold green",
}


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Renders the best match in a panel and the remaining results as
    grouped tables.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        width: int | None = None,
        color: bool = True,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show scores and targets.
            width: Console width (None for auto-detect).
            color: Whether to emit ANSI styles.
        """
        super().__init__(stream, error_stream, verbose)
        self._width = width
        self._color = color

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _render(self, renderable: Any) -> str:
        buffer = StringIO()
        console = Console(
            file=buffer,
            width=self._width,
            force_terminal=self._color,
            no_color=not self._color,
        )
        console.print(renderable)
        return buffer.getvalue().rstrip()

    def _results_table(self, results: tuple[ScoredResult, ...], start: int, title: str | None) -> Table:
        table = Table(title=title, title_justify="left", show_header=False, box=None, padding=(0, 1))
        table.add_column("#", style="dim", justify="right")
        table.add_column("Name")
        table.add_column("Description", style="dim")
        if self._verbose:
            table.add_column("Score", justify="right")
            table.add_column("Target", style="dim")

        for offset, result in enumerate(results):
            row = [
                str(start + offset),
                Text(result.name, style=_KIND_STYLES.get(result.kind, "")),
                result.description,
            ]
            if self._verbose:
                row.extend([f"{result.score:.1f}", result_target(result)])
            table.add_row(*row)
        return table

    def format_view(self, view: ResultsView) -> str:
        parts: list[Any] = []

        if view.is_empty:
            parts.append(Text(f'No results for "{view.query}"', style="yellow"))
        elif view.best_match is not None:
            best = view.best_match
            body = Text(best.name, style=_KIND_STYLES.get(best.kind, "bold"))
            if best.description:
                body.append(f"\n{best.description}", style="dim")
            if self._verbose:
                body.append(f"\n{best.score:.1f}  {result_target(best)}", style="dim")
            parts.append(Panel(body, title="Best match", title_align="left", border_style="cyan"))

            index = 1
            for group in view.groups:
                parts.append(self._results_table(group.results, index, group.title))
                index += len(group.results)
        else:
            parts.append(self._results_table(view.rows, 0, None))

        if view.loading_more:
            parts.append(Text("Searching documents...", style="dim italic"))

        return self._render(Group(*parts))

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Format data as a Rich table."""
        columns = self._columns(rows, columns)
        table = Table(title=title)
        for col in columns:
            table.add_column(col, style="cyan" if col == columns[0] else None)
        for row in rows:
            table.add_row(*(str(row.get(col, "")) for col in columns))
        return self._render(table)

    def format_error(self, message: str) -> str:
        return self._render(Text(f"Error: {message}", style="bold red"))
