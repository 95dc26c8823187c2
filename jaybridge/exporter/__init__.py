"""Vendor document → Jay HTML."""

from .body import ExportResult, build_component_set_index, convert_to_body_html, find_content_frame
from .context import ExportContext, HtmlFragment
from .converters import convert_node
from .page import build_jay_html

__all__ = [
    "ExportContext",
    "HtmlFragment",
    "ExportResult",
    "convert_node",
    "convert_to_body_html",
    "find_content_frame",
    "build_component_set_index",
    "build_jay_html",
]
