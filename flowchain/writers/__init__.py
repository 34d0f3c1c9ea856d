"""Writers for exporting analytics reports."""

from flowchain.writers.report_generator import (
    AnalyticsReport,
    AnalyticsReportGenerator,
    write_report_csv,
)

__all__ = ["AnalyticsReport", "AnalyticsReportGenerator", "write_report_csv"]
