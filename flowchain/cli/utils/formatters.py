"""Output formatting utilities for CLI."""

import json
from decimal import Decimal
from typing import Any, List

import click


def format_success(message: str) -> str:
    """Format a success message in green."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message in red."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message in yellow."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message in blue."""
    return click.style(f"ℹ {message}", fg="blue")


def format_value(value: Any) -> str:
    """Render a cell value for table output.

    Decimals print without trailing zeros and None prints as "-".

    Example:
        >>> format_value(Decimal("12.50"))
        '12.5'
        >>> format_value(None)
        '-'
    """
    if value is None:
        return "-"
    if isinstance(value, Decimal):
        normalized = value.normalize()
        # normalize() turns 100 into 1E+2
        if normalized == normalized.to_integral_value():
            return str(normalized.quantize(Decimal("1")))
        return format(normalized, "f")
    return str(value)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_json(data: Any) -> str:
    """Serialize view output as indented JSON.

    Decimals become numbers and dates become ISO strings.

    Example:
        >>> format_json({"hours": Decimal("5")})
        '{\\n  "hours": 5\\n}'
    """
    return json.dumps(data, indent=2, default=_json_default)


def format_table(headers: List[str], rows: List[List[Any]], max_width: int = 80) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 80)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    cells = [[format_value(cell) for cell in row[: len(headers)]] for row in rows]

    col_widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))
    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def render(row: List[str]) -> str:
        padded = [
            f" {cell[: col_widths[i]]:<{col_widths[i]}} " for i, cell in enumerate(row)
        ]
        return "|" + "|".join(padded) + "|"

    table_lines = [separator, render(headers), separator]
    if cells:
        table_lines.extend(render(row) for row in cells)
        table_lines.append(separator)

    return "\n".join(table_lines)
