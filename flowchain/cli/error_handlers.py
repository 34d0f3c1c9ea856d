"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from flowchain.cli.utils.formatters import format_error, format_warning
from flowchain.ocr.receipt_extractor import OCRProcessingError
from flowchain.readers.snapshot_reader import SnapshotLoadError
from flowchain.storage.interface import StorageError
from flowchain.utils.logging_utils import get_log_context


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""

    pass


class DataLoadError(CLIError):
    """Error related to loading the data snapshot."""

    pass


class ProcessingError(CLIError):
    """Error related to computing a view or processing an image."""

    pass


EXIT_CODES = {
    ConfigurationError: 1,
    DataLoadError: 3,
    ProcessingError: 4,
}

LABELS = {
    ConfigurationError: "Configuration Error",
    DataLoadError: "Data Error",
    ProcessingError: "Processing Error",
}


def _echo_cli_error(error: CLIError) -> int:
    error_type = type(error)
    for cls in error_type.__mro__:
        if cls in EXIT_CODES:
            click.echo(format_error(f"{LABELS[cls]}: {error.message}"), err=True)
            if error.recovery_hint:
                click.echo(format_warning(f"Hint: {error.recovery_hint}"), err=True)
            return EXIT_CODES[cls]
    click.echo(format_error(error.message), err=True)
    return 255


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Translate an exception into a user-facing message and an exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace for unexpected errors

    Returns:
        Exit code (1 configuration, 3 data, 4 processing, 130 cancelled,
        255 unexpected)
    """
    if isinstance(error, CLIError):
        return _echo_cli_error(error)

    if isinstance(error, ValidationError) and error.title == "FlowChainConfig":
        return _echo_cli_error(
            ConfigurationError(
                str(error), recovery_hint="Check the values in your .env file"
            )
        )

    if isinstance(error, StorageError):
        hint = None
        if isinstance(error, SnapshotLoadError):
            hint = "Pass --data or set FLOWCHAIN_DATA_FILE to a valid JSON snapshot"
        return _echo_cli_error(DataLoadError(str(error), recovery_hint=hint))

    if isinstance(error, OCRProcessingError):
        cause = error.__cause__
        hint = f"Engine reported: {cause}" if cause else None
        return _echo_cli_error(ProcessingError(str(error), recovery_hint=hint))

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130  # Standard exit code for SIGINT

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
    click.echo(str(error), err=True)

    run_id = get_log_context().get("correlation_id")
    if run_id:
        click.echo(f"Run id (search the logs for it): {run_id}", err=True)

    if debug:
        click.echo("\nFull stack trace:", err=True)
        click.echo(
            "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            err=True,
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"), err=True)

    return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with with_error_handling(debug):
                # Command implementation
                pass
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if isinstance(exc_val, Exception) and not isinstance(
                exc_val, click.exceptions.Exit
            ):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
