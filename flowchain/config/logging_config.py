"""Centralized logging configuration for the analytics core and CLI.

Two output formats are supported: a single-line ``text`` format for
terminals and a ``json`` format with one object per line for log
shippers. Both carry the fields bound with
:class:`flowchain.utils.logging_utils.LogContext`.
"""

import datetime as dt
import json
import logging
import logging.handlers
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from flowchain.config.settings import LOG_FORMATS, LOG_LEVELS
from flowchain.utils.logging_utils import _ContextFilter

if TYPE_CHECKING:
    from flowchain.config.settings import FlowChainConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# PIL logs every PNG chunk at DEBUG while receipts are opened for OCR
QUIET_LOGGERS = ("PIL",)

# Attributes every LogRecord carries; anything else came in through
# extra={} or a LogContext
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_RECORD_FIELDS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object.

    Decimal hour and money values become JSON numbers.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, TEXT_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(_context_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default)


@dataclass
class LoggingConfig:
    """
    Where and how log records are written.

    Attributes:
        level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "text" or "json"
        log_file: Rotating log file; no file output when None
        console: Write to stderr
        max_file_size: Size in bytes at which the log file rotates
        backup_count: Rotated files to keep
    """

    level: str = "INFO"
    log_format: str = "text"
    log_file: Optional[str] = None
    console: bool = True
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self):
        """
        Normalize and validate the options.

        Raises:
            ValueError: If the level or format is unknown
        """
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.level}. Must be one of {', '.join(LOG_LEVELS)}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. "
                f"Must be one of {', '.join(LOG_FORMATS)}"
            )

    @classmethod
    def from_settings(
        cls, settings: "FlowChainConfig", verbose: bool = False
    ) -> "LoggingConfig":
        """
        Build the logging options from application settings.

        DEBUG and ``verbose`` both force the DEBUG level.
        """
        return cls(
            level="DEBUG" if settings.debug or verbose else settings.log_level,
            log_format=settings.log_format,
            log_file=settings.log_file,
            console=settings.log_console,
        )


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if config.console:
        handlers.append(logging.StreamHandler())
    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                config.log_file,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )
    return handlers


def configure_logging(config: LoggingConfig) -> None:
    """
    Install handlers on the root logger.

    Previously installed root handlers are closed first, so repeated calls
    never duplicate output.

    Args:
        config: Logging options
    """
    reset_logging()

    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)

    context_filter = _ContextFilter()
    for handler in _build_handlers(config):
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    quiet_level = max(logging.WARNING, root_logger.level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def reset_logging() -> None:
    """
    Close every root handler and restore the WARNING default.

    Useful for testing and cleanup.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.WARNING)
