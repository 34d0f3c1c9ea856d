"""Unit tests for CLI error handling."""

import click
import pytest
from pydantic import ValidationError

from flowchain.cli.error_handlers import (
    ConfigurationError,
    DataLoadError,
    ProcessingError,
    handle_cli_error,
    with_error_handling,
)
from flowchain.config import FlowChainConfig
from flowchain.ocr.receipt_extractor import OCRProcessingError
from flowchain.readers.snapshot_reader import SnapshotLoadError
from flowchain.storage import StorageError
from flowchain.utils.logging_utils import LogContext


class TestHandleCliError:
    """Test suite for handle_cli_error()."""

    @pytest.mark.parametrize(
        "error,expected_code",
        [
            (ConfigurationError("bad config"), 1),
            (DataLoadError("no data"), 3),
            (ProcessingError("failed"), 4),
            (StorageError("connection refused"), 3),
            (SnapshotLoadError("Snapshot file not found: x.json"), 3),
            (OCRProcessingError(), 4),
            (click.Abort(), 130),
            (RuntimeError("boom"), 255),
        ],
    )
    def test_exit_codes(self, error, expected_code):
        """Test that each error category maps to its exit code."""
        assert handle_cli_error(error) == expected_code

    def test_config_validation_error(self, capsys):
        """Test that invalid settings are reported as configuration errors."""
        with pytest.raises(ValidationError) as exc_info:
            FlowChainConfig(_env_file=None, LOG_LEVEL="LOUD")

        assert handle_cli_error(exc_info.value) == 1
        assert "Configuration Error" in capsys.readouterr().err

    def test_recovery_hint_printed(self, capsys):
        """Test that recovery hints reach stderr."""
        handle_cli_error(DataLoadError("no data", recovery_hint="Pass --data"))

        err = capsys.readouterr().err
        assert "Data Error: no data" in err
        assert "Hint: Pass --data" in err

    def test_ocr_cause_in_hint(self, capsys):
        """Test that the engine's own message is shown as a hint."""
        try:
            try:
                raise OSError("cannot identify image file")
            except OSError as e:
                raise OCRProcessingError() from e
        except OCRProcessingError as error:
            handle_cli_error(error)

        err = capsys.readouterr().err
        assert "Failed to process image with OCR" in err
        assert "cannot identify image file" in err

    def test_unexpected_error_with_debug_shows_trace(self, capsys):
        """Test full stack trace in debug mode."""
        try:
            raise KeyError("missing")
        except KeyError as error:
            handle_cli_error(error, debug=True)

        assert "Full stack trace" in capsys.readouterr().err

    def test_unexpected_error_names_run_id(self, capsys):
        """Test the run's correlation id is printed for log lookup."""
        with LogContext(correlation_id="run-42"):
            try:
                raise KeyError("missing")
            except KeyError as error:
                handle_cli_error(error)

        assert "run-42" in capsys.readouterr().err


class TestWithErrorHandling:
    """Test suite for the with_error_handling() context manager."""

    def test_exits_with_mapped_code(self):
        """Test that handled errors exit the process with their code."""
        with pytest.raises(SystemExit) as exc_info:
            with with_error_handling():
                raise StorageError("unavailable")

        assert exc_info.value.code == 3

    def test_no_error_passes_through(self):
        """Test that a clean block does not exit."""
        with with_error_handling():
            value = 1

        assert value == 1

    def test_click_exit_not_intercepted(self):
        """Test that click's own exit signal propagates."""
        with pytest.raises(click.exceptions.Exit):
            with with_error_handling():
                raise click.exceptions.Exit(0)
