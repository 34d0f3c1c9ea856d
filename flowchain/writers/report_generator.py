"""Analytics report generator for tabular export.

This module renders the seven analytics views as pandas DataFrames and
writes them to CSV files, one file per view.
"""

import logging
from dataclasses import dataclass, fields
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from flowchain.aggregators.analytics_aggregator import AnalyticsAggregator
from flowchain.aggregators.filter_normalizer import RawFilters, normalize_filters

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsReport:
    """Container for all analytics view DataFrames.

    Attributes:
        kpis: One-row KPI summary
        project_costs: Cost and revenue per project
        resource_utilization: Billable vs non-billable hours
        project_completion: Completion percentage per project
        workload_trend: Hours per month (12 rows)
        revenue_expense: Revenue and expense per month (12 rows)
        task_status: Task count per present status
    """

    kpis: pd.DataFrame
    project_costs: pd.DataFrame
    resource_utilization: pd.DataFrame
    project_completion: pd.DataFrame
    workload_trend: pd.DataFrame
    revenue_expense: pd.DataFrame
    task_status: pd.DataFrame

    def frames(self) -> Dict[str, pd.DataFrame]:
        """Return the DataFrames keyed by view name, in report order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


class AnalyticsReportGenerator:
    """Generate analytics report DataFrames from an aggregator.

    Every view is computed with the same normalized filters. Decimal
    values are converted to floats for tabular output.

    Example:
        >>> generator = AnalyticsReportGenerator(aggregator)
        >>> report = generator.generate({"project": "p1"})
        >>> list(report.workload_trend.columns)
        ['month', 'hours']
    """

    PROJECT_COST_COLUMNS = ["name", "cost", "revenue"]
    NAMED_VALUE_COLUMNS = ["name", "value"]
    WORKLOAD_COLUMNS = ["month", "hours"]
    REVENUE_EXPENSE_COLUMNS = ["month", "revenue", "expense"]

    def __init__(self, aggregator: AnalyticsAggregator):
        """Initialize with the aggregator computing the views.

        Args:
            aggregator: AnalyticsAggregator bound to a storage backend
        """
        self.aggregator = aggregator

    def generate(self, filters: RawFilters = None) -> AnalyticsReport:
        """Compute every view and convert it to a DataFrame.

        Args:
            filters: Raw filters or normalized criteria

        Returns:
            AnalyticsReport with one DataFrame per view
        """
        criteria = normalize_filters(filters)
        logger.info("Generating analytics report")

        kpis = self.aggregator.get_kpis(criteria)

        report = AnalyticsReport(
            kpis=self._to_frame([kpis.to_dict()], list(kpis.to_dict().keys())),
            project_costs=self._to_frame(
                [row.to_dict() for row in self.aggregator.get_project_costs(criteria)],
                self.PROJECT_COST_COLUMNS,
            ),
            resource_utilization=self._to_frame(
                [
                    row.to_dict()
                    for row in self.aggregator.get_resource_utilization(criteria)
                ],
                self.NAMED_VALUE_COLUMNS,
            ),
            project_completion=self._to_frame(
                [
                    row.to_dict()
                    for row in self.aggregator.get_project_completion(criteria)
                ],
                self.NAMED_VALUE_COLUMNS,
            ),
            workload_trend=self._to_frame(
                [row.to_dict() for row in self.aggregator.get_workload_trend(criteria)],
                self.WORKLOAD_COLUMNS,
            ),
            revenue_expense=self._to_frame(
                [
                    row.to_dict()
                    for row in self.aggregator.get_revenue_expense(criteria)
                ],
                self.REVENUE_EXPENSE_COLUMNS,
            ),
            task_status=self._to_frame(
                [
                    row.to_dict()
                    for row in self.aggregator.get_task_status_distribution(criteria)
                ],
                self.NAMED_VALUE_COLUMNS,
            ),
        )

        logger.info(
            f"Report generated: {len(report.project_costs)} projects, "
            f"{len(report.task_status)} task statuses"
        )
        return report

    @staticmethod
    def _to_frame(rows: List[Dict], columns: List[str]) -> pd.DataFrame:
        """Build a DataFrame with fixed columns, converting Decimals to float."""
        if not rows:
            return pd.DataFrame(columns=columns)

        df = pd.DataFrame(rows, columns=columns)
        for column in df.columns:
            if df[column].dtype == object and df[column].map(_is_decimal).any():
                df[column] = df[column].astype(float)
        return df


def write_report_csv(report: AnalyticsReport, output_dir: Union[str, Path]) -> List[Path]:
    """Write each report DataFrame to ``<output_dir>/<view>.csv``.

    Args:
        report: Generated analytics report
        output_dir: Target directory, created when missing

    Returns:
        Paths of the written files in report order
    """
    target = Path(output_dir)
    target.mkdir(parents=True, exist_ok=True)

    written = []
    for name, df in report.frames().items():
        path = target / f"{name}.csv"
        df.to_csv(path, index=False)
        written.append(path)
        logger.debug(f"Wrote {len(df)} rows to {path}")

    logger.info(f"Wrote {len(written)} report files to {target}")
    return written


def _is_decimal(value) -> bool:
    return isinstance(value, Decimal)
