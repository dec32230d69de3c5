"""
Parse command for inspecting how a chatlog is split into blocks.
"""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cohoard.cli import cli, common_options, fail, read_input, resolve_config
from cohoard.errors import CohoardError
from cohoard.logger import configure_logging
from cohoard.parser import parse_posts


console = Console(legacy_windows=False)


@cli.command()
@common_options
@click.argument('in_file', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--format', 'output_format',
    type=click.Choice(['table', 'json']),
    default='table',
    help='Output format (default: table)',
)
def parse(in_file, output_format, config_path, log_level):
    """
    Show the blocks a chatlog parses into.

    IN_FILE is the chatlog; standard input is read when it is omitted.
    """
    configure_logging(level=log_level, console_output=True)

    try:
        config = resolve_config(config_path)
    except (FileNotFoundError, CohoardError) as e:
        fail("Error loading config", e)

    posts = parse_posts(config, read_input(in_file))

    if output_format == 'json':
        click.echo(json.dumps([block.to_dict() for block in posts], indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Parsed Blocks ({len(posts)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Speaker", style="magenta")
    table.add_column("Message")

    for index, block in enumerate(posts, start=1):
        data = block.to_dict()
        speaker = data["user"].get("name", data["user"]["key"]) if "user" in data else ""
        table.add_row(str(index), data["type"], Text(speaker), Text(data["message"].rstrip("\n")))

    console.print(table)
