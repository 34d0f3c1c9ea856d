"""Analytics view command."""

from typing import Any, Callable, Dict, List, Optional

import click

from flowchain.aggregators.analytics_aggregator import AnalyticsAggregator
from flowchain.cli.commands.common import data_file_option, filter_options, load_storage
from flowchain.cli.error_handlers import with_error_handling
from flowchain.cli.utils.formatters import format_info, format_json, format_table
from flowchain.utils.logging_utils import LogContext

# View name -> aggregator method; names match the HTTP endpoint paths
VIEWS: Dict[str, Callable[[AnalyticsAggregator, Dict[str, Any]], Any]] = {
    "kpis": AnalyticsAggregator.get_kpis,
    "project-costs": AnalyticsAggregator.get_project_costs,
    "resource-utilization": AnalyticsAggregator.get_resource_utilization,
    "completion": AnalyticsAggregator.get_project_completion,
    "workload-trend": AnalyticsAggregator.get_workload_trend,
    "revenue-expense": AnalyticsAggregator.get_revenue_expense,
    "task-status": AnalyticsAggregator.get_task_status_distribution,
}


def compute_view(aggregator: AnalyticsAggregator, view: str, filters: Dict[str, Any]):
    """Compute a view and return its JSON-shaped result.

    Args:
        aggregator: Aggregator bound to the loaded storage
        view: One of the VIEWS keys
        filters: Raw filter values

    Returns:
        A dict for "kpis", a list of dicts for every other view
    """
    result = VIEWS[view](aggregator, filters)
    if isinstance(result, list):
        return [row.to_dict() for row in result]
    return result.to_dict()


def _render_table(data) -> str:
    if isinstance(data, dict):
        return format_table(["Metric", "Value"], [[k, v] for k, v in data.items()])

    rows: List[Dict[str, Any]] = data
    if not rows:
        return format_info("No data matches the given filters.")
    headers = list(rows[0].keys())
    return format_table(headers, [[row[h] for h in headers] for row in rows])


@click.command(name="analytics")
@click.argument("view", type=click.Choice(sorted(VIEWS)))
@data_file_option
@filter_options
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON shape")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def analytics(
    view: str,
    data_file: Optional[str],
    filters: Dict[str, Any],
    as_json: bool,
    debug: bool,
):
    """Compute an analytics VIEW over a data snapshot.

    Example:
        flowchain analytics kpis --data snapshot.json --billable true
        flowchain analytics workload-trend --employee u1 --start 2024-01-01 --json
    """
    with with_error_handling(debug), LogContext(analytics_view=view):
        aggregator = AnalyticsAggregator(load_storage(data_file))
        data = compute_view(aggregator, view, filters)

        if as_json:
            click.echo(format_json(data))
        else:
            click.echo(_render_table(data))
