"""
Command-line interface for the cohoard package.

Provides commands for rendering chatlogs, inspecting parsed blocks and
listing configured people.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from cohoard import __version__
from cohoard.config import DEFAULT_CONFIG_PATH, Config, load_config
from cohoard.logger import get_default_logger


# Rendered HTML goes to stdout, so everything else goes to stderr
err_console = Console(stderr=True, legacy_windows=False)
logger = get_default_logger()


def common_options(func):
    """Decorator to add common CLI options."""
    func = click.option(
        '--config', '-c', 'config_path',
        type=click.Path(exists=False, dir_okay=False, path_type=Path),
        default=None,
        help=f'People config file (default: ./{DEFAULT_CONFIG_PATH}, if present)',
    )(func)
    func = click.option(
        '--log-level',
        type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
        default='WARNING',
        help='Logging level (default: WARNING)',
    )(func)
    return func


def resolve_config(config_path: Optional[Path]) -> Config:
    """
    Load the config named on the command line.

    Without ``--config`` the default ``config.yaml`` is used when it exists,
    otherwise an empty people table.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.info(f"No {DEFAULT_CONFIG_PATH} found; using an empty people table")
            return Config.empty()
        config_path = DEFAULT_CONFIG_PATH
    return load_config(config_path)


def read_input(in_file: Optional[Path]) -> str:
    """Read the chatlog from a file, or stdin when no file is given."""
    if in_file is None:
        return click.get_text_stream('stdin').read()
    return in_file.read_text(encoding='utf-8')


def fail(message: str, error: Exception) -> None:
    """Print an error to stderr and exit non-zero."""
    err_console.print(f"[bold red]{message}:[/bold red] {error}", highlight=False)
    logger.debug(message, exc_info=error)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name='cohoard')
def cli():
    """
    cohoard, a chatlog formatter for cohost.

    Turns play-script style chatlogs into HTML that survives cohost's
    restricted HTML subset.
    """


@cli.command()
def version():
    """Display version information."""
    click.echo(f"cohoard v{__version__}")


def main():
    """Main entry point for the CLI."""
    # Import commands to register them
    from cohoard.cli.commands import render, parse, users

    cli()


if __name__ == '__main__':
    main()
