"""Structured style → inline CSS declarations."""

from __future__ import annotations

from typing import List

from .model import AxisAlignment, ImportIRStyle, LayoutMode
from .units import format_number

_JUSTIFY_CSS = {
    AxisAlignment.MIN: "flex-start",
    AxisAlignment.CENTER: "center",
    AxisAlignment.MAX: "flex-end",
    AxisAlignment.SPACE_BETWEEN: "space-between",
}

_ALIGN_CSS = {
    AxisAlignment.MIN: "flex-start",
    AxisAlignment.CENTER: "center",
    AxisAlignment.MAX: "flex-end",
    AxisAlignment.STRETCH: "stretch",
}


def _px(value: float) -> str:
    return f"{format_number(value)}px"


def join_declarations(declarations: List[str]) -> str:
    """Concatenate ``prop: value`` pairs as ``prop: value;prop: value;``."""
    return "".join(f"{declaration};" for declaration in declarations if declaration)


def style_to_declarations(style: ImportIRStyle) -> str:
    """Render ``style`` back to an inline style string.

    Groups are emitted as position, size, background, border, border-radius,
    opacity, flex layout, typography, box-sizing.
    """
    out: List[str] = []

    if style.x is not None or style.y is not None:
        out.append("position: absolute")
        out.append(f"top: {_px(style.y or 0)}")
        out.append(f"left: {_px(style.x or 0)}")

    for prop, value in (
        ("width", style.width),
        ("height", style.height),
        ("min-width", style.min_width),
        ("min-height", style.min_height),
        ("max-width", style.max_width),
        ("max-height", style.max_height),
    ):
        if value is not None:
            out.append(f"{prop}: {_px(value)}")

    if style.background_color:
        out.append(f"background-color: {style.background_color}")

    if style.border_width is not None:
        border = f"border: {_px(style.border_width)} {style.border_style or 'solid'}"
        if style.border_color:
            border += f" {style.border_color}"
        out.append(border)

    if style.border_radius is not None:
        out.append(f"border-radius: {_px(style.border_radius)}")

    if style.opacity is not None:
        out.append(f"opacity: {format_number(style.opacity)}")

    if style.layout_mode in (LayoutMode.ROW, LayoutMode.COLUMN):
        out.append("display: flex")
        out.append(f"flex-direction: {style.layout_mode.value}")
        if style.gap is not None:
            out.append(f"gap: {_px(style.gap)}")
    if style.padding is not None:
        p = style.padding
        out.append(f"padding: {_px(p.top)} {_px(p.right)} {_px(p.bottom)} {_px(p.left)}")
    if style.justify_content in _JUSTIFY_CSS:
        out.append(f"justify-content: {_JUSTIFY_CSS[style.justify_content]}")
    if style.align_items in _ALIGN_CSS:
        out.append(f"align-items: {_ALIGN_CSS[style.align_items]}")

    if style.text_color:
        out.append(f"color: {style.text_color}")
    if style.font_family:
        out.append(f"font-family: '{style.font_family}', sans-serif")
    if style.font_size is not None:
        out.append(f"font-size: {_px(style.font_size)}")
    if style.font_weight is not None:
        out.append(f"font-weight: {style.font_weight}")
    if style.line_height is not None:
        out.append(f"line-height: {_px(style.line_height)}")
    if style.letter_spacing is not None:
        out.append(f"letter-spacing: {_px(style.letter_spacing)}")

    if style.padding is not None or style.border_width is not None:
        out.append("box-sizing: border-box")

    return join_declarations(out)


__all__ = ["style_to_declarations", "join_declarations"]
