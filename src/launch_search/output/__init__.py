"""Output formatting (rich, plain, JSON).

Usage:
    from launch_search.output import get_formatter

    formatter = get_formatter("plain", verbose=True)
    formatter.print_view(controller.view)
"""

from typing import Any

from launch_search.config.schema import OutputFormat
from launch_search.output.base import OutputFormatter, result_to_dict
from launch_search.output.json_fmt import JSONFormatter
from launch_search.output.plain import PlainFormatter
from launch_search.output.rich_fmt import RichFormatter

__all__ = [
    "OutputFormatter",
    "OutputFormat",
    "PlainFormatter",
    "JSONFormatter",
    "RichFormatter",
    "get_formatter",
    "result_to_dict",
]


def get_formatter(
    format_type: OutputFormat | str,
    verbose: bool = False,
    **kwargs: Any,
) -> OutputFormatter:
    """Get a formatter instance by format type.

    Args:
        format_type: The output format to use.
        verbose: Whether to enable verbose output.
        **kwargs: Additional formatter-specific options.

    Returns:
        An OutputFormatter instance.

    Raises:
        ValueError: If format_type is not recognized.
    """
    if isinstance(format_type, str):
        format_type = OutputFormat(format_type.lower())

    formatters: dict[OutputFormat, type[OutputFormatter]] = {
        OutputFormat.PLAIN: PlainFormatter,
        OutputFormat.JSON: JSONFormatter,
        OutputFormat.RICH: RichFormatter,
    }

    formatter_class = formatters.get(format_type)
    if formatter_class is None:
        raise ValueError(f"Unknown format type: {format_type}")

    return formatter_class(verbose=verbose, **kwargs)
