"""CLI utility functions."""

from flowchain.cli.utils.formatters import (
    format_error,
    format_info,
    format_json,
    format_success,
    format_table,
    format_value,
    format_warning,
)
from flowchain.cli.utils.progress import ProgressTracker

__all__ = [
    "format_error",
    "format_info",
    "format_json",
    "format_success",
    "format_table",
    "format_value",
    "format_warning",
    "ProgressTracker",
]
