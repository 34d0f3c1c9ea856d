"""Filter options command."""

from typing import Optional

import click

from flowchain.aggregators.filter_options import FilterOptionProvider
from flowchain.cli.commands.common import data_file_option, load_storage
from flowchain.cli.error_handlers import with_error_handling
from flowchain.cli.utils.formatters import format_info, format_json, format_table


@click.command(name="filter-options")
@data_file_option
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON shape")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def filter_options_command(data_file: Optional[str], as_json: bool, debug: bool):
    """List the projects, employees and statuses available as filters.

    Example:
        flowchain filter-options --data snapshot.json
    """
    with with_error_handling(debug):
        options = FilterOptionProvider(load_storage(data_file)).get_filter_options()

        if as_json:
            click.echo(format_json(options.to_dict()))
            return

        click.echo(format_info("Projects"))
        click.echo(
            format_table(["ID", "Name"], [[p["id"], p["name"]] for p in options.projects])
        )
        click.echo()
        click.echo(format_info("Employees"))
        click.echo(
            format_table(
                ["ID", "Name"], [[e["id"], e["name"]] for e in options.employees]
            )
        )
        click.echo()
        click.echo(format_info(f"Statuses: {', '.join(options.statuses)}"))
