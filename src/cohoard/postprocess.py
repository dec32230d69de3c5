"""
HTML post-processing for rendered templates.

cohost ignores ``<style>`` tags and the ``class``/``id`` attributes, so:

1. rules from ``<style>`` blocks are inlined into ``style=""`` attributes;
2. ``class`` and ``id`` are stripped to keep the post small;
3. the ``<html>``/``<head>``/``<body>`` wrapper added by the inliner is
   dropped, keeping only the children of ``<body>``.
"""

from typing import Union

import css_inline
from bs4 import BeautifulSoup, NavigableString, Tag

from cohoard.errors import CssInlineError, MissingBodyError
from cohoard.logger import get_default_logger


logger = get_default_logger()


STRIPPED_ATTRIBUTES = ("class", "id")


def _inliner() -> css_inline.CSSInliner:
    return css_inline.CSSInliner(
        inline_style_tags=True,
        keep_style_tags=False,
        load_remote_stylesheets=False,
    )


def inline_style_tags(html: str) -> str:
    """
    Inline the ``<style>`` tags of an HTML string and remove them.

    Declarations are merged into any ``style`` attribute the element already
    has. The result is a full document.

    Raises:
        CssInlineError: If the CSS can't be inlined
    """
    try:
        return _inliner().inline(html)
    except ValueError as e:
        raise CssInlineError(f"Failed to inline <style> tags: {e}") from e


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def strip_class_and_id(document: BeautifulSoup) -> BeautifulSoup:
    """Remove ``class`` and ``id`` from every element (in place)."""
    for tag in document.find_all(True):
        for attribute in STRIPPED_ATTRIBUTES:
            if attribute in tag.attrs:
                del tag[attribute]
    return document


def _serialize(node: Union[Tag, NavigableString]) -> str:
    if isinstance(node, Tag):
        return node.decode(formatter="minimal")
    # Text nodes need escaping; comments get their delimiters back
    return node.output_ready(formatter="minimal")


def extract_body(document: BeautifulSoup) -> str:
    """
    Serialize the children of ``<body>``, one per line.

    Raises:
        MissingBodyError: If the document has no ``<body>``
    """
    body = document.find("body")
    if body is None:
        raise MissingBodyError("Rendered document has no <body> element")
    return "\n".join(_serialize(node) for node in body.children)


def postprocess(html: str) -> str:
    """
    Run the full post-processing chain over rendered template output.

    Args:
        html: Raw template output (fragment, may contain ``<style>`` blocks)

    Returns:
        HTML fragment with styles inlined and ``class``/``id`` removed
    """
    inlined = inline_style_tags(html)
    document = strip_class_and_id(parse_document(inlined))
    fragment = extract_body(document)
    logger.debug(f"Post-processed {len(html)} characters into {len(fragment)}")
    return fragment
