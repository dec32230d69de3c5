"""
Render pipeline.

Evaluates a Jinja2 template against parsed blocks and turns the output into
an HTML fragment cohost accepts:

    template -> raw HTML -> inline <style> -> strip class/id -> <body> children

The template context exposes:

- ``posts``: every block as a dict with a ``type`` of ``"timestamp"`` or
  ``"post"`` (posts also carry ``user``)
- ``users``: every configured user, in config order
- any extra variables passed by the caller (these win on name collisions)
"""

from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateSyntaxError,
    select_autoescape,
)

from cohoard.config import Config
from cohoard.errors import TemplateCompileError, TemplateRenderError
from cohoard.logger import get_default_logger
from cohoard.markdown_filter import markdown_to_html
from cohoard.models import ChatlogBlock
from cohoard.postprocess import postprocess


logger = get_default_logger()


DEFAULT_TEMPLATE_NAME = "discord.html"


def create_environment(template_name: str, template_source: str) -> Environment:
    """
    Build a Jinja2 environment holding a single template.

    Autoescaping is on for ``.html``/``.htm``/``.xml`` template names.
    Undefined variables raise instead of rendering as empty strings.
    """
    env = Environment(
        loader=DictLoader({template_name: template_source}),
        autoescape=select_autoescape(
            enabled_extensions=("html", "htm", "xml"),
            default_for_string=False,
            default=False,
        ),
        undefined=StrictUndefined,
    )
    env.filters["markdown"] = markdown_to_html
    return env


def build_context(
    posts: Sequence[ChatlogBlock],
    config: Config,
    extra_variables: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the template context; extra variables are merged in last."""
    context: Dict[str, Any] = {
        "posts": [block.to_dict() for block in posts],
        "users": [user.to_dict() for user in config.users()],
    }
    if extra_variables:
        context.update(extra_variables)
    return context


def render_template(
    template_name: str,
    template_source: str,
    context: Mapping[str, Any],
) -> str:
    """
    Compile and evaluate a template.

    Raises:
        TemplateCompileError: If the template has a syntax error
        TemplateRenderError: If evaluation fails
    """
    env = create_environment(template_name, template_source)

    try:
        template = env.get_template(template_name)
    except TemplateSyntaxError as e:
        raise TemplateCompileError(template_name, e.message or str(e), lineno=e.lineno) from e

    try:
        return template.render(context)
    except TemplateError as e:
        raise TemplateRenderError(template_name, e.message or str(e)) from e
    except (TypeError, ValueError, AttributeError, ArithmeticError, LookupError) as e:
        raise TemplateRenderError(template_name, f"{type(e).__name__}: {e}") from e


def render(
    template_name: str,
    template_source: str,
    posts: Sequence[ChatlogBlock],
    config: Config,
    extra_variables: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Render blocks through a template into a cohost-ready HTML fragment.

    Args:
        template_name: Name used for autoescape selection and error messages
        template_source: Jinja2 template source
        posts: Blocks, usually from ``parse_posts``
        config: People table, exposed to the template as ``users``
        extra_variables: Additional template variables

    Returns:
        HTML fragment without ``<html>``/``<head>``/``<body>``

    Raises:
        TemplateCompileError, TemplateRenderError, CssInlineError, MissingBodyError
    """
    logger.info(f"Rendering {len(posts)} blocks with template {template_name}")
    context = build_context(posts, config, extra_variables)
    html = render_template(template_name, template_source, context)
    return postprocess(html)


def load_default_template() -> str:
    """Source of the bundled ``discord.html`` template."""
    return (
        resources.files("cohoard")
        .joinpath("templates")
        .joinpath(DEFAULT_TEMPLATE_NAME)
        .read_text(encoding="utf-8")
    )


def render_file(
    template_path: Union[str, Path],
    posts: Sequence[ChatlogBlock],
    config: Config,
    extra_variables: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render using a template read from disk; its file name is the template name."""
    template_path = Path(template_path)
    if not template_path.exists():
        raise FileNotFoundError(f"Template file not found: {template_path}")
    source = template_path.read_text(encoding="utf-8")
    return render(template_path.name, source, posts, config, extra_variables)
