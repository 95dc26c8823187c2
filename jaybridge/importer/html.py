"""Reading full Jay HTML documents for import."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..dom import HTML_PARSER, non_empty_attribute
from .ir import HeadlessImport

HEADLESS_SCRIPT_TYPE = "application/jay-headless"
DATA_SCRIPT_TYPE = "application/jay-data"


@dataclass(frozen=True)
class ParsedJayHtml:
    body: Tag
    headless_imports: Tuple[HeadlessImport, ...] = ()
    css: str = ""
    title: Optional[str] = None
    data_contract: Optional[str] = None

    @property
    def content_hash(self) -> str:
        return content_hash(self.body)


def content_hash(body: Tag) -> str:
    """First 16 hex characters of the SHA-256 of the serialized body."""
    return hashlib.sha256(str(body).encode("utf-8")).hexdigest()[:16]


def _headless_imports(soup: BeautifulSoup) -> List[HeadlessImport]:
    imports: List[HeadlessImport] = []
    for script in soup.find_all("script"):
        if non_empty_attribute(script, "type") != HEADLESS_SCRIPT_TYPE:
            continue
        plugin = non_empty_attribute(script, "plugin")
        contract = non_empty_attribute(script, "contract")
        if plugin is None or contract is None:
            continue
        key = non_empty_attribute(script, "key") or contract
        imports.append(HeadlessImport(plugin=plugin, contract=contract, key=key))
    return imports


def parse_jay_html(markup: str) -> ParsedJayHtml:
    """Split a Jay HTML document into body, headless imports and inline CSS.

    Fragments without a ``<body>`` are wrapped in one so element paths always
    start at ``body``.
    """
    soup = BeautifulSoup(markup, HTML_PARSER)
    body = soup.find("body")
    if not isinstance(body, Tag):
        body = BeautifulSoup(f"<body>{markup}</body>", HTML_PARSER).body

    css = "\n".join(style.get_text() for style in soup.find_all("style") if style.find_parent("body") is None)

    data_contract = None
    for script in soup.find_all("script"):
        if non_empty_attribute(script, "type") == DATA_SCRIPT_TYPE:
            data_contract = non_empty_attribute(script, "contract") or script.get_text().strip() or None
            break

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if isinstance(title_tag, Tag) else None

    return ParsedJayHtml(
        body=body,
        headless_imports=tuple(_headless_imports(soup)),
        css=css.strip(),
        title=title or None,
        data_contract=data_contract,
    )


__all__ = [
    "HEADLESS_SCRIPT_TYPE",
    "DATA_SCRIPT_TYPE",
    "ParsedJayHtml",
    "content_hash",
    "parse_jay_html",
]
