"""Inline CSS ↔ structured style."""

from .declarations import join_declarations, style_to_declarations
from .model import AxisAlignment, ImportIRStyle, LayoutMode, Padding
from .resolver import parse_inline_style, resolve_style

__all__ = [
    "AxisAlignment",
    "ImportIRStyle",
    "LayoutMode",
    "Padding",
    "parse_inline_style",
    "resolve_style",
    "style_to_declarations",
    "join_declarations",
]
