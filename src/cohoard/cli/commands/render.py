"""
Render command: chatlog in, cohost-ready HTML out.

Handles the whole run: read -> parse -> render -> write.
"""

from pathlib import Path

import click

from cohoard.cli import cli, common_options, err_console, fail, read_input, resolve_config
from cohoard.errors import CohoardError
from cohoard.logger import configure_logging
from cohoard.parser import parse_posts
from cohoard.render import DEFAULT_TEMPLATE_NAME, load_default_template, render as render_html


def parse_variables(pairs):
    """Turn ``KEY=VALUE`` option values into a dict."""
    variables = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="'--var'")
        variables[key] = value
    return variables


@cli.command()
@common_options
@click.argument('in_file', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--template', '-t', 'template_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f'Jinja2 template to render with (default: bundled {DEFAULT_TEMPLATE_NAME})',
)
@click.option(
    '--out', '-o', 'out_file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='File to write the HTML to (default: standard output)',
)
@click.option(
    '--var', 'variables',
    multiple=True,
    metavar='KEY=VALUE',
    help='Extra template variable (repeatable)',
)
def render(in_file, template_path, out_file, variables, config_path, log_level):
    """
    Render a chatlog into HTML for a cohost post.

    IN_FILE is the chatlog; standard input is read when it is omitted.

    Examples:

        # Render with the bundled template
        cohoard render chat.txt

        # Use a custom template and people config, write to a file
        cohoard render chat.txt -t my_template.html -c people.yaml -o post.html

        # Pass extra values to the template
        cohoard render chat.txt --var title="bee removal"
    """
    configure_logging(level=log_level, console_output=True)

    extra_variables = parse_variables(variables)

    try:
        config = resolve_config(config_path)
    except (FileNotFoundError, CohoardError) as e:
        fail("Error loading config", e)

    try:
        text = read_input(in_file)
    except (OSError, UnicodeDecodeError) as e:
        fail("Error reading chatlog", e)

    if template_path is None:
        template_name, template_source = DEFAULT_TEMPLATE_NAME, load_default_template()
    else:
        template_name = template_path.name
        try:
            template_source = template_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            fail("Error reading template", e)

    posts = parse_posts(config, text)

    try:
        html = render_html(template_name, template_source, posts, config, extra_variables)
    except CohoardError as e:
        fail("Error rendering chatlog", e)

    if out_file is not None:
        out_file.write_text(html, encoding='utf-8')
        err_console.print(f"[green]✓[/green] Wrote {len(posts)} blocks to {out_file}")
    else:
        click.echo(html)
