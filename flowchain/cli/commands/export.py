"""Export analytics report command."""

from typing import Any, Dict, Optional

import click

from flowchain.aggregators.analytics_aggregator import AnalyticsAggregator
from flowchain.aggregators.filter_normalizer import normalize_filters
from flowchain.cli.commands.common import data_file_option, filter_options, load_storage
from flowchain.cli.error_handlers import with_error_handling
from flowchain.cli.utils.formatters import format_info, format_success
from flowchain.cli.utils.progress import ProgressTracker
from flowchain.config.settings import get_config
from flowchain.writers.report_generator import AnalyticsReportGenerator, write_report_csv


@click.command(name="export-report")
@data_file_option
@filter_options
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the CSV files (optional, uses REPORT_OUTPUT_DIR from config)",
)
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def export_report(
    data_file: Optional[str],
    filters: Dict[str, Any],
    output_dir: Optional[str],
    debug: bool,
):
    """Write every analytics view to CSV files.

    Example:
        flowchain export-report --data snapshot.json --output-dir reports/
        flowchain export-report --project p1 --start 2024-01-01 --end 2024-06-30
    """
    with with_error_handling(debug):
        target_dir = output_dir or get_config().report_output_path
        criteria = normalize_filters(filters)
        if criteria.is_unrestricted:
            click.echo(format_info("No filters applied, exporting all data"))
        else:
            applied = criteria.model_dump(mode="json", exclude_none=True)
            click.echo(format_info(f"Filters: {applied}"))

        tracker = ProgressTracker(
            ["Loading data snapshot", "Computing analytics views", "Writing CSV files"]
        )

        with tracker.stage() as notes:
            storage = load_storage(data_file)
            notes.append(f"{len(storage.list_projects())} projects loaded")

        with tracker.stage() as notes:
            report = AnalyticsReportGenerator(AnalyticsAggregator(storage)).generate(criteria)
            notes.append(f"{len(report.frames())} views computed")

        with tracker.stage():
            paths = write_report_csv(report, target_dir)

        click.echo(format_success(f"Wrote {len(paths)} files to {target_dir}"))
        click.echo(format_info(tracker.summary()))
