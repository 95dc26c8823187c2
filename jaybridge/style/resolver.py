"""Inline CSS → structured style resolution for the import direction."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Tuple

from ..diagnostics import Diagnostic, DiagnosticCode, warning
from .model import AxisAlignment, ImportIRStyle, LayoutMode, Padding
from .units import parse_px, parse_unitless

_DYNAMIC_RE = re.compile(r"\{[^}]*\}")
_WHITESPACE_RE = re.compile(r"\s+")

# Recognized properties that have no structured counterpart.
RECOGNIZED_BUT_NOT_STORED = frozenset(
    {"box-sizing", "overflow", "object-fit", "text-align", "position", "top", "left"}
)

_JUSTIFY_CONTENT = {
    "flex-start": AxisAlignment.MIN,
    "center": AxisAlignment.CENTER,
    "flex-end": AxisAlignment.MAX,
    "space-between": AxisAlignment.SPACE_BETWEEN,
}

_ALIGN_ITEMS = {
    "flex-start": AxisAlignment.MIN,
    "center": AxisAlignment.CENTER,
    "flex-end": AxisAlignment.MAX,
    "stretch": AxisAlignment.STRETCH,
}

_PX_FIELDS = {
    "min-width": "min_width",
    "min-height": "min_height",
    "max-width": "max_width",
    "max-height": "max_height",
    "gap": "gap",
    "font-size": "font_size",
    "letter-spacing": "letter_spacing",
    "border-radius": "border_radius",
}

_PADDING_SIDES = {
    "padding-top": "top",
    "padding-right": "right",
    "padding-bottom": "bottom",
    "padding-left": "left",
}


@dataclass(frozen=True)
class ParsedInlineStyle:
    declarations: Dict[str, str]
    dynamic_properties: Tuple[str, ...]


def parse_inline_style(style_attr: str) -> ParsedInlineStyle:
    """Split a ``style`` attribute into ordered declarations.

    Fragments without a colon or with an empty side are skipped. Values
    carrying a ``{binding}`` placeholder are listed as dynamic.
    """
    declarations: Dict[str, str] = {}
    dynamic: List[str] = []
    if not style_attr:
        return ParsedInlineStyle(declarations, ())

    for fragment in style_attr.split(";"):
        fragment = fragment.strip()
        if not fragment or ":" not in fragment:
            continue
        prop, _, value = fragment.partition(":")
        prop = prop.strip()
        value = value.strip()
        if not prop or not value:
            continue
        declarations[prop] = value
        if _DYNAMIC_RE.search(value) and prop not in dynamic:
            dynamic.append(prop)
    return ParsedInlineStyle(declarations, tuple(dynamic))


def _expand_padding(value: str) -> Padding | None:
    parts = [parse_px(part) for part in _WHITESPACE_RE.split(value.strip())]
    if any(part is None for part in parts):
        return None
    if len(parts) == 1:
        return Padding(parts[0], parts[0], parts[0], parts[0])
    if len(parts) == 2:
        return Padding(parts[0], parts[1], parts[0], parts[1])
    if len(parts) == 3:
        return Padding(parts[0], parts[1], parts[2], parts[1])
    if len(parts) == 4:
        return Padding(parts[0], parts[1], parts[2], parts[3])
    return None


def _font_weight(value: str) -> int | None:
    match = re.match(r"^\s*(\d+)", value)
    if match:
        return int(match.group(1))
    if value == "bold":
        return 700
    if value == "normal":
        return 400
    return None


def resolve_style(inline_style: str) -> Tuple[ImportIRStyle, List[Diagnostic]]:
    """Resolve an inline ``style`` attribute into an :class:`ImportIRStyle`."""
    parsed = parse_inline_style(inline_style)
    warnings: List[Diagnostic] = [
        warning(DiagnosticCode.CSS_DYNAMIC_VALUE, prop) for prop in parsed.dynamic_properties
    ]
    values: Dict[str, Any] = {}

    for prop, value in parsed.declarations.items():
        if prop in parsed.dynamic_properties:
            continue

        if prop in ("width", "height"):
            px = parse_px(value)
            if px is not None:
                values[prop] = px
            elif "%" in value:
                warnings.append(warning(DiagnosticCode.CSS_UNSUPPORTED_UNIT, f"{prop}: {value}"))
        elif prop in _PX_FIELDS:
            px = parse_px(value)
            if px is not None:
                values[_PX_FIELDS[prop]] = px
            elif prop.startswith(("min-", "max-")) and "%" in value:
                warnings.append(warning(DiagnosticCode.CSS_UNSUPPORTED_UNIT, f"{prop}: {value}"))
        elif prop == "display":
            if value == "flex" and "layout_mode" not in values:
                values["layout_mode"] = LayoutMode.ROW
        elif prop == "flex-direction":
            if value == "column":
                values["layout_mode"] = LayoutMode.COLUMN
            elif value == "row":
                values["layout_mode"] = LayoutMode.ROW
        elif prop == "padding":
            padding = _expand_padding(value)
            if padding is not None:
                values["padding"] = padding
        elif prop in _PADDING_SIDES:
            px = parse_px(value)
            if px is not None:
                current = values.get("padding") or Padding()
                values["padding"] = replace(current, **{_PADDING_SIDES[prop]: px})
        elif prop == "background-color":
            values["background_color"] = value
        elif prop == "color":
            values["text_color"] = value
        elif prop == "font-family":
            values["font_family"] = value.split(",")[0].strip().strip("'\"")
        elif prop == "font-weight":
            weight = _font_weight(value)
            if weight is not None:
                values["font_weight"] = weight
        elif prop == "line-height":
            px = parse_px(value)
            number = px if px is not None else parse_unitless(value)
            if number is not None:
                values["line_height"] = number
        elif prop == "border":
            parts = _WHITESPACE_RE.split(value.strip())
            width = parse_px(parts[0])
            if width is not None:
                values["border_width"] = width
            if len(parts) >= 3:
                values["border_color"] = parts[2]
            values["border_style"] = "dashed" if any(p in ("dashed", "dotted") for p in parts) else "solid"
        elif prop == "opacity":
            number = parse_unitless(value)
            if number is not None:
                values["opacity"] = number
        elif prop == "justify-content":
            if value in _JUSTIFY_CONTENT:
                values["justify_content"] = _JUSTIFY_CONTENT[value]
        elif prop == "align-items":
            if value in _ALIGN_ITEMS:
                values["align_items"] = _ALIGN_ITEMS[value]
        elif prop not in RECOGNIZED_BUT_NOT_STORED:
            warnings.append(warning(DiagnosticCode.CSS_UNSUPPORTED_PROPERTY, prop))

    if parsed.declarations.get("position") == "absolute":
        top = parse_px(parsed.declarations.get("top", ""))
        left = parse_px(parsed.declarations.get("left", ""))
        if top is not None:
            values["y"] = top
        if left is not None:
            values["x"] = left

    return ImportIRStyle(**values), warnings


__all__ = [
    "ParsedInlineStyle",
    "parse_inline_style",
    "resolve_style",
    "RECOGNIZED_BUT_NOT_STORED",
]
