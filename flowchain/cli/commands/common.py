"""Options and helpers shared by the analytics commands."""

import functools
import logging
from typing import Any, Callable, Dict, Optional

import click

from flowchain.config.settings import get_config
from flowchain.readers.snapshot_reader import SnapshotReader
from flowchain.storage.memory_storage import InMemoryStorage

logger = logging.getLogger(__name__)

FILTER_KEYS = ("project", "employee", "status", "billable", "start", "end")


def data_file_option(func: Callable) -> Callable:
    """Add the ``--data`` snapshot option."""
    return click.option(
        "--data",
        "data_file",
        type=click.Path(dir_okay=False),
        default=None,
        help="JSON data snapshot (optional, uses FLOWCHAIN_DATA_FILE from config)",
    )(func)


def filter_options(func: Callable) -> Callable:
    """Add the analytics filter options and collect them into ``filters``.

    Values are passed through untouched; normalization ignores anything it
    does not recognize.
    """

    @click.option("--project", default=None, help="Project id or 'all'")
    @click.option("--employee", default=None, help="Employee (user) id or 'all'")
    @click.option("--status", default=None, help="Task status or 'all'")
    @click.option("--billable", default=None, help="'true', 'false' or 'all'")
    @click.option("--start", default=None, help="Start date (YYYY-MM-DD), inclusive")
    @click.option("--end", default=None, help="End date (YYYY-MM-DD), inclusive")
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        filters: Dict[str, Any] = {}
        for key in FILTER_KEYS:
            value = kwargs.pop(key)
            if value is not None:
                filters[key] = value
        return func(*args, filters=filters, **kwargs)

    return wrapper


def load_storage(data_file: Optional[str]) -> InMemoryStorage:
    """Load the data snapshot given on the command line or in config.

    Args:
        data_file: Path from ``--data`` or None

    Returns:
        InMemoryStorage with the snapshot contents

    Raises:
        SnapshotLoadError: If the snapshot cannot be read
    """
    path = data_file or get_config().data_path
    logger.debug(f"Using data snapshot: {path}")
    return SnapshotReader(path).load()
