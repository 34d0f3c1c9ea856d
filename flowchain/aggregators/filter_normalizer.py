"""Filter normalization for analytics views.

Query-string filters arrive as loosely typed values. This module maps them
to a :class:`FilterCriteria` record with a permissive policy: anything that
is absent, empty, ``"all"`` or unrecognized means "no restriction". No
input makes normalization fail.
"""

import datetime as dt
import logging
from typing import Any, Mapping, Optional, Union

from flowchain.models.filters import FilterCriteria
from flowchain.models.task import TASK_STATUSES

logger = logging.getLogger(__name__)

ALL = "all"

_STATUS_BY_NAME = {status.lower(): status for status in TASK_STATUSES}

RawFilters = Union[Mapping[str, Any], FilterCriteria, None]


def _clean_choice(value: Any) -> Optional[str]:
    """Return a trimmed filter value, or None for "no filter"."""
    if value is None:
        return None
    # Repeated query parameters arrive as lists; the first one wins
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
        if value is None:
            return None
    text = str(value).strip()
    if not text or text.lower() == ALL:
        return None
    return text


def _parse_billable(value: Any) -> Optional[bool]:
    """Map "true"/"false" (or real booleans) to a flag, anything else to None."""
    if isinstance(value, bool):
        return value
    text = _clean_choice(value)
    if text is None:
        return None
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    logger.debug(f"Ignoring unrecognized billable filter value: {value!r}")
    return None


def _parse_status(value: Any) -> Optional[str]:
    """Map a task status name (any case) to its canonical form, anything else to None."""
    text = _clean_choice(value)
    if text is None:
        return None
    status = _STATUS_BY_NAME.get(text.lower())
    if status is None:
        logger.debug(f"Ignoring unrecognized status filter value: {value!r}")
    return status


def _to_naive_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is not None:
        return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value


def parse_date_bound(value: Any, end_of_day: bool = False) -> Optional[dt.datetime]:
    """Parse a date-range bound.

    Accepts date and datetime objects and ISO strings (``YYYY-MM-DD`` or a
    full timestamp, optionally ``Z``-suffixed). A bare date expands to the
    start of the day, or to its last microsecond when ``end_of_day`` is set.

    Args:
        value: Raw bound value
        end_of_day: Expand bare dates to the end of the day

    Returns:
        Naive UTC datetime, or None when the value is absent or unparseable

    Example:
        >>> parse_date_bound("2024-03-15")
        datetime.datetime(2024, 3, 15, 0, 0)
        >>> parse_date_bound("not a date") is None
        True
    """
    if isinstance(value, dt.datetime):
        return _to_naive_utc(value)
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time.max if end_of_day else dt.time.min)

    text = _clean_choice(value)
    if text is None:
        return None

    if len(text) == 10:
        try:
            day = dt.datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            logger.debug(f"Ignoring unparseable date bound: {value!r}")
            return None
        return dt.datetime.combine(day, dt.time.max if end_of_day else dt.time.min)

    try:
        parsed = dt.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Ignoring unparseable date bound: {value!r}")
        return None
    return _to_naive_utc(parsed)


def normalize_filters(raw: RawFilters = None) -> FilterCriteria:
    """Normalize a raw filter bag into typed criteria.

    Recognized keys are ``project``, ``employee``, ``status``, ``billable``,
    ``start`` and ``end``. Other keys are ignored.

    Args:
        raw: Query-string style mapping, an existing FilterCriteria, or None

    Returns:
        FilterCriteria with None for every unrestricted dimension

    Example:
        >>> criteria = normalize_filters(
        ...     {"project": "all", "billable": "true", "start": "garbage"}
        ... )
        >>> criteria.project is None, criteria.billable, criteria.start is None
        (True, True, True)
    """
    if isinstance(raw, FilterCriteria):
        return raw
    if raw is None or not isinstance(raw, Mapping):
        return FilterCriteria()

    criteria = FilterCriteria(
        project=_clean_choice(raw.get("project")),
        employee=_clean_choice(raw.get("employee")),
        status=_parse_status(raw.get("status")),
        billable=_parse_billable(raw.get("billable")),
        start=parse_date_bound(raw.get("start")),
        end=parse_date_bound(raw.get("end"), end_of_day=True),
    )

    logger.debug(f"Normalized filters: {criteria.model_dump(exclude_none=True)}")
    return criteria
