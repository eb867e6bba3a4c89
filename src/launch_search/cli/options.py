"""Shared CLI options for launch-search commands."""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from launch_search.config.schema import OutputFormat


class FormatChoice(str, Enum):
    """Output format choices for CLI."""

    PLAIN = "plain"
    JSON = "json"
    RICH = "rich"


class CategoryChoice(str, Enum):
    """Category filter choices for CLI."""

    ALL = "all"
    APPS = "apps"
    DOCUMENTS = "documents"
    SETTINGS = "settings"
    FOLDERS = "folders"


FormatOption = Annotated[
    FormatChoice | None,
    typer.Option(
        "--format",
        "-f",
        help="Output format (plain, json, rich). Defaults to config setting.",
        case_sensitive=False,
    ),
]

CategoryOption = Annotated[
    CategoryChoice,
    typer.Option(
        "--category",
        "-c",
        help="Restrict results to one category.",
        case_sensitive=False,
    ),
]

MaxResultsOption = Annotated[
    int | None,
    typer.Option(
        "--max-results",
        "-n",
        min=1,
        help="Maximum number of results. Defaults to config setting.",
    ),
]

AppsFileOption = Annotated[
    Path | None,
    typer.Option(
        "--apps",
        help="JSON file with the application list (default: installed .desktop files).",
        exists=True,
        dir_okay=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show scores and debug logging.",
    ),
]


def get_output_format(
    format_choice: FormatChoice | None, default: OutputFormat | str = OutputFormat.RICH
) -> OutputFormat:
    """Convert CLI format choice to OutputFormat.

    Args:
        format_choice: CLI format choice or None.
        default: Format used when none was given.

    Returns:
        The selected OutputFormat.
    """
    if format_choice is None:
        return OutputFormat(default)
    return OutputFormat(format_choice.value)
