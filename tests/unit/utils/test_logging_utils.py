"""Tests for structured logging utilities."""

import asyncio
import logging
import uuid

from flowchain.utils.logging_utils import (
    LogContext,
    _ContextFilter,
    generate_correlation_id,
    get_log_context,
)


class TestCorrelationId:
    """Test generate_correlation_id()."""

    def test_is_uuid(self):
        assert uuid.UUID(generate_correlation_id())

    def test_unique(self):
        assert generate_correlation_id() != generate_correlation_id()


class TestLogContext:
    """Test LogContext."""

    def test_fields_visible_inside(self):
        with LogContext(analytics_view="kpis"):
            assert get_log_context() == {"analytics_view": "kpis"}

        assert get_log_context() == {}

    def test_nested_contexts_merge_and_restore(self):
        with LogContext(correlation_id="run-1"):
            with LogContext(analytics_view="kpis"):
                assert get_log_context() == {
                    "correlation_id": "run-1",
                    "analytics_view": "kpis",
                }
            assert get_log_context() == {"correlation_id": "run-1"}

    def test_restored_after_exception(self):
        try:
            with LogContext(analytics_view="kpis"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert get_log_context() == {}

    def test_visible_inside_coroutines(self):
        async def read_context():
            return get_log_context()

        with LogContext(correlation_id="run-2"):
            seen = asyncio.run(read_context())

        assert seen == {"correlation_id": "run-2"}

    def test_filter_copies_fields_to_record(self):
        record = logging.LogRecord("flowchain", logging.INFO, __file__, 1, "msg", None, None)

        with LogContext(analytics_view="task_status"):
            assert _ContextFilter().filter(record) is True

        assert record.analytics_view == "task_status"
