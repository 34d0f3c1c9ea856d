"""Structured logging context.

Fields bound with :class:`LogContext` are copied onto every log record
that passes a handler carrying :class:`_ContextFilter`. The fields live in
a :mod:`contextvars` variable, so coroutines started by ``asyncio.run``
see the fields of the code that started them.
"""

import contextvars
import logging
import uuid
from typing import Any, Dict, Optional

_log_fields: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "flowchain_log_fields", default={}
)


def generate_correlation_id() -> str:
    """Return a fresh id tagging every record of one CLI run."""
    return str(uuid.uuid4())


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently bound to log records."""
    return dict(_log_fields.get())


class LogContext:
    """
    Bind structured fields to log records within a block.

    Nested contexts merge their fields; leaving a context restores the
    outer fields, also when the block raises.

    Example:
        with LogContext(correlation_id=generate_correlation_id()):
            with LogContext(analytics_view="kpis"):
                logger.info("Computing KPIs")  # carries both fields
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_fields.set({**_log_fields.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_fields.reset(self._token)
            self._token = None


class _ContextFilter(logging.Filter):
    """Copy the bound context fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_fields.get().items():
            setattr(record, key, value)
        return True
