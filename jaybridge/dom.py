"""Small helpers over BeautifulSoup trees."""

from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

HTML_PARSER = "html.parser"


def parse_html(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, HTML_PARSER)


def element_children(tag: Tag) -> List[Tag]:
    """Child elements only; text and comment nodes are skipped."""
    return [child for child in tag.children if isinstance(child, Tag)]


def get_attribute(tag: Tag, name: str) -> Optional[str]:
    """Attribute lookup tolerant of parsers that lowercase attribute names.

    Multi-valued attributes such as ``class`` are joined with spaces.
    """
    value = tag.get(name)
    if value is None and name.lower() != name:
        value = tag.get(name.lower())
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def non_empty_attribute(tag: Tag, name: str) -> Optional[str]:
    value = get_attribute(tag, name)
    if value is None or not value.strip():
        return None
    return value.strip()


def direct_text(tag: Tag) -> str:
    """Concatenated text of direct text-node children, excluding comments."""
    return "".join(
        str(child)
        for child in tag.children
        if isinstance(child, NavigableString) and not isinstance(child, Comment)
    )


__all__ = [
    "HTML_PARSER",
    "parse_html",
    "element_children",
    "get_attribute",
    "non_empty_attribute",
    "direct_text",
]
