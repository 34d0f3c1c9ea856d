"""CLI commands."""

from flowchain.cli.commands.analytics import analytics
from flowchain.cli.commands.export import export_report
from flowchain.cli.commands.filters import filter_options_command
from flowchain.cli.commands.ocr import ocr_receipt

__all__ = ["analytics", "export_report", "filter_options_command", "ocr_receipt"]
