"""FlowChain Analytics CLI.

This module provides a command-line interface for the analytics core.
It includes commands for computing analytics views, listing filter options,
extracting receipt data with OCR and exporting reports.
"""

import click

from flowchain import __version__
from flowchain.cli.commands.analytics import analytics
from flowchain.cli.commands.export import export_report
from flowchain.cli.commands.filters import filter_options_command
from flowchain.cli.commands.ocr import ocr_receipt
from flowchain.config.logging_config import LoggingConfig, configure_logging
from flowchain.config.settings import get_config
from flowchain.utils.logging_utils import LogContext, generate_correlation_id


@click.group(
    help="FlowChain Analytics CLI - Project analytics and receipt OCR"
)
@click.version_option(version=__version__)
@click.option("--verbose", is_flag=True, help="Log at DEBUG level")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """FlowChain Analytics CLI main entry point."""
    try:
        logging_config = LoggingConfig.from_settings(get_config(), verbose=verbose)
    except ValueError:
        # Invalid settings are reported by the command that needs them
        logging_config = LoggingConfig(level="DEBUG" if verbose else "WARNING")
    configure_logging(logging_config)

    # Tag every record of this run
    ctx.with_resource(LogContext(correlation_id=generate_correlation_id()))


# Register commands
cli.add_command(analytics)
cli.add_command(filter_options_command)
cli.add_command(ocr_receipt)
cli.add_command(export_report)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
