"""
Users command for listing the people table of a config.
"""

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cohoard.cli import cli, common_options, fail, resolve_config
from cohoard.errors import CohoardError
from cohoard.logger import configure_logging


console = Console(legacy_windows=False)


@cli.command()
@common_options
def users(config_path, log_level):
    """List the people a config defines."""
    configure_logging(level=log_level, console_output=True)

    try:
        config = resolve_config(config_path)
    except (FileNotFoundError, CohoardError) as e:
        fail("Error loading config", e)

    if len(config) == 0:
        console.print("[yellow]No people configured[/yellow]")
        return

    columns = ["key"]
    for user in config:
        for field_name in user:
            if field_name not in columns:
                columns.append(field_name)

    table = Table(title=f"People ({len(config)})")
    for column in columns:
        table.add_column(column, style="cyan" if column == "key" else None)
    for user in config:
        table.add_row(*(Text(user.get(column, "")) for column in columns))

    console.print(table)
