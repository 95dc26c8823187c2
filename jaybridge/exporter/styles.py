"""
Vendor node → inline CSS.

Every helper returns a run of ``prop: value;`` declarations (possibly empty)
so callers can concatenate them in a fixed order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..style.units import format_number, paint_color, rgb_to_hex, rgba_string
from ..vendor.document import NodeKind, VendorNode
from .context import ExportContext

RADIUS_KINDS = frozenset({NodeKind.RECTANGLE, NodeKind.FRAME, NodeKind.COMPONENT, NodeKind.INSTANCE})

_JUSTIFY = {
    "MIN": "flex-start",
    "MAX": "flex-end",
    "CENTER": "center",
    "SPACE_BETWEEN": "space-between",
}

_ALIGN = {
    "MIN": "flex-start",
    "MAX": "flex-end",
    "CENTER": "center",
    "BASELINE": "baseline",
}


def px(value: Any) -> str:
    return f"{format_number(value if value is not None else 0)}px"


def _visible(paints: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    return [paint for paint in paints or [] if paint.get("visible") is not False]


# ============================================================================
# Position and size
# ============================================================================


def position_type(node: VendorNode, ctx: ExportContext) -> str:
    if node.layout_positioning == "ABSOLUTE":
        return "absolute"
    if node.scroll_behavior == "FIXED" and ctx.parent_layout_mode == "NONE":
        return "fixed"
    if ctx.parent_kind is NodeKind.SECTION:
        return "absolute"
    if ctx.parent_layout_mode == "NONE":
        return "absolute"
    if ctx.parent_layout_mode:
        return "relative"
    return "static"


def position_style(node: VendorNode, ctx: ExportContext) -> str:
    if node.kind is NodeKind.COMPONENT:
        return ""
    kind = position_type(node, ctx)
    if kind == "static":
        return ""
    if kind in ("absolute", "fixed"):
        return f"position: {kind};top: {px(node.y)};left: {px(node.x)};"
    return f"position: {kind};"


def _fixed_size(node: VendorNode) -> str:
    return f"width: {px(node.width)};height: {px(node.height)};"


def node_size_styles(node: VendorNode, ctx: ExportContext) -> str:
    """Size of a leaf or non-frame node, honoring auto-layout child sizing."""
    if ctx.parent_kind is NodeKind.SECTION:
        return f"width: 100%;height: {px(node.height)};"
    if not ctx.parent_layout_mode or ctx.parent_layout_mode == "NONE":
        return _fixed_size(node)
    if not node.layout_grow and not node.layout_align:
        return _fixed_size(node)

    styles = ""
    sizing = node.layout_sizing_horizontal
    if sizing == "HUG":
        styles += "width: fit-content;"
    elif sizing == "FILL":
        styles += "width: auto;" if node.kind is NodeKind.TEXT else "width: 100%;"
    else:
        styles += f"width: {px(node.width)};"

    sizing = node.layout_sizing_vertical
    if sizing == "HUG":
        styles += "height: fit-content;"
    elif sizing == "FILL":
        styles += "height: 100%;"
    else:
        styles += f"height: {px(node.height)};"
    return styles


def min_max_styles(node: VendorNode) -> str:
    styles = ""
    for prop, value in (
        ("min-width", node.min_width),
        ("max-width", node.max_width),
        ("min-height", node.min_height),
        ("max-height", node.max_height),
    ):
        if value is not None:
            styles += f"{prop}: {px(value)};"
    return styles


def _axis_size(prop: str, sizing: Optional[str], value: Any) -> str:
    if sizing == "HUG":
        return f"{prop}: fit-content;"
    if sizing == "FILL":
        return f"{prop}: 100%;"
    return f"{prop}: {px(value)};"


def frame_size_styles(node: VendorNode, ctx: ExportContext) -> str:
    """Size of a container, driven by its own horizontal/vertical sizing modes."""
    if ctx.parent_kind is NodeKind.SECTION:
        return f"width: 100%;height: {px(node.height)};" + min_max_styles(node)
    return (
        _axis_size("width", node.layout_sizing_horizontal, node.width)
        + _axis_size("height", node.layout_sizing_vertical, node.height)
        + min_max_styles(node)
    )


# ============================================================================
# Paint, border and shape
# ============================================================================


def _hex_with_alpha(color: Mapping[str, Any], alpha: float) -> str:
    base = rgb_to_hex(color)
    if alpha >= 1:
        return base
    return f"{base}{max(0, min(255, int(round(alpha * 255)))):02x}"


def background_style(node: VendorNode) -> str:
    fill = next((paint for paint in _visible(node.fills) if paint.get("type") == "SOLID"), None)
    if fill is None or not fill.get("color"):
        return ""
    opacity = fill.get("opacity")
    alpha = float(opacity) if opacity is not None else 1.0
    return f"background-color: {_hex_with_alpha(fill['color'], alpha)};"


def stroke_styles(node: VendorNode) -> str:
    strokes = _visible(node.strokes)
    if not strokes:
        return ""
    color = paint_color(strokes[0])
    if color is None:
        return ""
    weight = node.stroke_weight if isinstance(node.stroke_weight, (int, float)) and node.stroke_weight else 1
    line = "dashed" if node.dash_pattern else "solid"
    return f"border: {px(weight)} {line} {color};"


def border_radius_style(node: VendorNode) -> str:
    if node.kind is NodeKind.ELLIPSE:
        return "border-radius: 50%;"
    if node.kind not in RADIUS_KINDS:
        return ""
    corners = (node.top_left_radius, node.top_right_radius, node.bottom_right_radius, node.bottom_left_radius)
    if isinstance(node.corner_radius, (int, float)):
        if node.corner_radius:
            return f"border-radius: {px(node.corner_radius)};"
        return ""
    if any(corner for corner in corners):
        return "border-radius: " + " ".join(px(corner) for corner in corners) + ";"
    return ""


def overflow_styles(node: VendorNode) -> str:
    direction = node.overflow_direction
    if direction == "BOTH":
        return "overflow: auto;"
    if direction == "HORIZONTAL":
        return "overflow-x: auto;overflow-y: hidden;"
    if direction == "VERTICAL":
        return "overflow-y: auto;overflow-x: hidden;"
    return ""


# ============================================================================
# Opacity, rotation and effects
# ============================================================================


def common_styles(node: VendorNode) -> str:
    styles = ""
    if node.opacity is not None and node.opacity < 1:
        styles += f"opacity: {format_number(node.opacity)};"

    shadows: List[str] = []
    filters: List[str] = []
    for effect in reversed(node.effects or []):
        if effect.get("visible") is False:
            continue
        kind = effect.get("type")
        radius = effect.get("radius")
        if kind in ("DROP_SHADOW", "INNER_SHADOW"):
            color, offset = effect.get("color"), effect.get("offset")
            if not color or not offset or radius is None:
                continue
            inset = "inset " if kind == "INNER_SHADOW" else ""
            shadow_color = rgba_string(color, float(color.get("a", 1)))
            shadows.append(
                f"{inset}{px(offset.get('x'))} {px(offset.get('y'))} {px(radius)} "
                f"{px(effect.get('spread') or 0)} {shadow_color}"
            )
        elif kind == "LAYER_BLUR" and radius is not None:
            filters.append(f"blur({px(radius)})")
        elif kind == "BACKGROUND_BLUR" and radius is not None:
            styles += f"backdrop-filter: blur({px(radius)});"
            styles += f"-webkit-backdrop-filter: blur({px(radius)});"

    if shadows:
        styles += f"box-shadow: {', '.join(shadows)};"
    if filters:
        styles += f"filter: {' '.join(filters)};"

    if node.rotation:
        styles += f"transform: rotate({format_number(node.rotation)}deg);"
        styles += f"transform-origin: {px((node.width or 0) / 2)} {px((node.height or 0) / 2)};"
    return styles


# ============================================================================
# Auto layout
# ============================================================================


def auto_layout_styles(node: VendorNode) -> str:
    if node.layout_mode not in ("HORIZONTAL", "VERTICAL"):
        return ""
    styles = "display: flex;"
    styles += "flex-direction: row;" if node.layout_mode == "HORIZONTAL" else "flex-direction: column;"
    if node.layout_wrap == "WRAP":
        styles += "flex-wrap: wrap;"
    if node.item_spacing:
        styles += f"gap: {px(node.item_spacing)};"
    for prop, value in (
        ("padding-left", node.padding_left),
        ("padding-right", node.padding_right),
        ("padding-top", node.padding_top),
        ("padding-bottom", node.padding_bottom),
    ):
        if value:
            styles += f"{prop}: {px(value)};"
    if node.primary_axis_align_items in _JUSTIFY:
        styles += f"justify-content: {_JUSTIFY[node.primary_axis_align_items]};"
    if node.counter_axis_align_items in _ALIGN:
        styles += f"align-items: {_ALIGN[node.counter_axis_align_items]};"
    return styles


def frame_styles(node: VendorNode, ctx: ExportContext, size: Optional[str] = None) -> str:
    """Full container styling; ``size`` replaces the computed frame size."""
    return (
        position_style(node, ctx)
        + (size if size is not None else frame_size_styles(node, ctx))
        + background_style(node)
        + stroke_styles(node)
        + border_radius_style(node)
        + overflow_styles(node)
        + common_styles(node)
        + auto_layout_styles(node)
        + "box-sizing: border-box;"
    )


__all__ = [
    "px",
    "position_type",
    "position_style",
    "node_size_styles",
    "min_max_styles",
    "frame_size_styles",
    "background_style",
    "stroke_styles",
    "border_radius_style",
    "overflow_styles",
    "common_styles",
    "auto_layout_styles",
    "frame_styles",
]
