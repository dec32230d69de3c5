"""
The ``markdown`` template filter.

Converts a message written in markdown into HTML that cohost will actually
render. cohost drops ``<u>`` and decorates ``<code>``/``<pre>`` with its own
pseudo-elements, so those are rewritten into spans and divs carrying
``cohoard-*`` classes that a template can style through a ``<style>`` block
(the classes are inlined and then stripped later in the pipeline).
"""

from typing import Any

from bs4 import BeautifulSoup, Tag
from jinja2.exceptions import FilterArgumentError
from markupsafe import Markup
from markdown_it import MarkdownIt


UNDERLINE_CLASS = "cohoard-underline"
CODEBLOCK_CLASS = "cohoard-codeblock"
INLINE_CODE_CLASS = "cohoard-code"
LANGUAGE_CLASS_PREFIX = "language-"


def _markdown_parser() -> MarkdownIt:
    # CommonMark passes raw inline HTML through, which is how <u> gets in
    return MarkdownIt("commonmark").enable("strikethrough")


_md = _markdown_parser()


def _leading_code(pre: Tag):
    """Return the <code> element a <pre> starts with, if any."""
    for child in pre.contents:
        if isinstance(child, Tag):
            return child if child.name == "code" else None
        if child.strip():
            return None
    return None


def rewrite_for_cohost(html: str) -> str:
    """
    Rewrite converter output into tags cohost keeps.

    - ``<p>`` is unwrapped (cohost gives paragraphs a large margin)
    - ``<u>`` becomes ``<span class="cohoard-underline">``
    - ``<pre><code class="language-X">`` becomes
      ``<div class="cohoard-codeblock language-X">``
    - any other ``<code>`` becomes ``<span class="cohoard-code">``

    Args:
        html: HTML fragment

    Returns:
        Rewritten HTML fragment
    """
    soup = BeautifulSoup(html, "html.parser")

    for pre in soup.find_all("pre"):
        code = _leading_code(pre)
        if code is None:
            continue
        languages = [c for c in code.get("class", []) if c.startswith(LANGUAGE_CLASS_PREFIX)]
        code.name = "div"
        code.attrs = {"class": [CODEBLOCK_CLASS] + languages}
        pre.unwrap()

    for code in soup.find_all("code"):
        code.name = "span"
        code.attrs = {"class": [INLINE_CODE_CLASS]}

    for u in soup.find_all("u"):
        u.name = "span"
        u.attrs = {"class": [UNDERLINE_CLASS]}

    for p in soup.find_all("p"):
        p.unwrap()

    return str(soup)


def markdown_to_html(value: Any) -> Markup:
    """
    Template filter: convert a markdown string into cohost-friendly HTML.

    Supports emphasis, strong emphasis, ``~~strikethrough~~``, inline code,
    fenced code blocks, hard line breaks and inline HTML.

    Raises:
        FilterArgumentError: If ``value`` is not a string

    Example:
        >>> str(markdown_to_html("```py\\ncode\\n```")).strip()
        '<div class="cohoard-codeblock language-py">code\\n</div>'
    """
    if not isinstance(value, str):
        raise FilterArgumentError(
            f"non-string value passed to markdown filter: {type(value).__name__}"
        )

    return Markup(rewrite_for_cohost(_md.render(value)))
