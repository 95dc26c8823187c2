"""Wrap exported body HTML into a complete Jay HTML document."""

from __future__ import annotations

import html
from typing import Iterable, Optional, Sequence
from urllib.parse import quote

from ..config import DEFAULT_CONFIG, ConverterConfig
from ..contract.models import UsedComponent

FONT_WEIGHTS = "100;200;300;400;500;600;700;800;900"

RESET_CSS = """\
    body { margin: 0; font-family: sans-serif; }
    a { color: inherit; text-decoration: none; }
    a:hover { text-decoration: underline; }
    div { box-sizing: border-box; }
    ::-webkit-scrollbar { width: 8px; height: 8px; }
    ::-webkit-scrollbar-track { background: transparent; }
    ::-webkit-scrollbar-thumb { background: rgba(0, 0, 0, 0.3); border-radius: 4px; }
    ::-webkit-scrollbar-thumb:hover { background: rgba(0, 0, 0, 0.5); }
    * { scroll-behavior: smooth; }"""


def google_fonts_url(font_families: Iterable[str], base_url: str = DEFAULT_CONFIG.fonts_base_url) -> Optional[str]:
    families = list(font_families)
    if not families:
        return None
    query = "&".join(f"family={quote(family, safe='').replace('%20', '+')}:wght@{FONT_WEIGHTS}" for family in families)
    return f"{base_url}?{query}&display=swap"


def _font_links(font_families: Sequence[str], config: ConverterConfig) -> str:
    url = google_fonts_url(font_families, config.fonts_base_url)
    if url is None:
        return ""
    return (
        '  <link rel="preconnect" href="https://fonts.googleapis.com">\n'
        '  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>\n'
        f'  <link href="{html.escape(url)}" rel="stylesheet">\n'
    )


def _headless_scripts(components: Sequence[UsedComponent]) -> str:
    return "".join(
        '  <script type="application/jay-headless" '
        f'plugin="{html.escape(component.plugin or "")}" '
        f'contract="{html.escape(component.component_name)}" '
        f'key="{html.escape(component.key)}"></script>\n'
        for component in components
        if component.plugin
    )


def _data_script(contract_yaml: Optional[str]) -> str:
    body = "    data:\n"
    if contract_yaml:
        body += "".join(f"      {line}\n" for line in contract_yaml.rstrip().splitlines())
    return f'  <script type="application/jay-data">\n{body}  </script>\n'


def build_jay_html(
    body_html: str,
    font_families: Sequence[str] = (),
    *,
    headless_components: Sequence[UsedComponent] = (),
    contract_yaml: Optional[str] = None,
    title: Optional[str] = None,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> str:
    """Full document: fonts, headless component imports, data contract, reset CSS and body."""
    page_title = html.escape(title or config.page_title)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"{_font_links(font_families, config)}"
        f"{_headless_scripts(headless_components)}"
        f"{_data_script(contract_yaml)}"
        f"  <title>{page_title}</title>\n"
        "  <style>\n"
        f"{RESET_CSS}\n"
        "  </style>\n"
        "</head>\n"
        "<body>\n"
        f"{body_html}"
        "</body>\n"
        "</html>\n"
    )


__all__ = ["FONT_WEIGHTS", "google_fonts_url", "build_jay_html"]
