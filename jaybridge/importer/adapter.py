"""Import IR → vendor document."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_CONFIG, ConverterConfig
from ..bindings.models import serialize_layer_bindings
from ..style.model import AxisAlignment, ImportIRStyle, LayoutMode
from ..vendor.document import NodeKind, VendorNode
from ..vendor.metadata import (
    IMAGE_ROLE,
    LAYER_BINDINGS_KEY,
    PAGE_ROOT_KEY,
    PAGE_ROOT_VALUE,
    ROUTE_KEY,
    SEMANTIC_HTML_KEY,
)
from .ir import IRKind, ImportIRDocument, ImportIRNode

HEADLESS_IMPORTS_KEY = "headlessImports"

_HEX3_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)
_HEX_RE = re.compile(r"^#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})?$", re.IGNORECASE)

FALLBACK_COLOR = {"r": 0.9, "g": 0.9, "b": 0.9, "a": 1.0}

_LAYOUT_MODES = {
    LayoutMode.ROW: "HORIZONTAL",
    LayoutMode.COLUMN: "VERTICAL",
    LayoutMode.NONE: "NONE",
}

# STRETCH has no counter-axis equivalent; children stretch via layoutAlign instead.
_COUNTER_AXIS = {
    AxisAlignment.MIN: "MIN",
    AxisAlignment.CENTER: "CENTER",
    AxisAlignment.MAX: "MAX",
    AxisAlignment.STRETCH: "MIN",
}


def parse_color(css_color: str) -> Dict[str, float]:
    """``#rgb``, ``#rrggbb``, ``#rrggbbaa`` and ``transparent`` to 0..1 channels.

    Anything else falls back to a light gray.
    """
    value = css_color.strip()
    if value == "transparent":
        return {"r": 0.0, "g": 0.0, "b": 0.0, "a": 0.0}
    match = _HEX3_RE.match(value)
    if match:
        r, g, b = (int(channel * 2, 16) / 255 for channel in match.groups())
        return {"r": r, "g": g, "b": b, "a": 1.0}
    match = _HEX_RE.match(value)
    if match:
        r, g, b = (int(channel, 16) / 255 for channel in match.groups()[:3])
        alpha = match.group(4)
        return {"r": r, "g": g, "b": b, "a": int(alpha, 16) / 255 if alpha else 1.0}
    return dict(FALLBACK_COLOR)


def _solid_paint(css_color: str) -> Dict[str, Any]:
    color = parse_color(css_color)
    return {
        "type": "SOLID",
        "color": {"r": color["r"], "g": color["g"], "b": color["b"]},
        "opacity": color["a"],
    }


def _number(value: Optional[float]) -> Any:
    if value is None:
        return None
    return int(value) if float(value).is_integer() else value


def style_to_vendor_props(style: ImportIRStyle) -> Dict[str, Any]:
    """Vendor node fields (snake_case) for a resolved style."""
    props: Dict[str, Any] = {}
    for name in ("x", "y", "width", "height", "min_width", "min_height", "max_width", "max_height"):
        value = getattr(style, name)
        if value is not None:
            props[name] = _number(value)

    if style.layout_mode is not None:
        props["layout_mode"] = _LAYOUT_MODES[style.layout_mode]
    if style.gap is not None:
        props["item_spacing"] = _number(style.gap)
    if style.padding is not None:
        props["padding_top"] = _number(style.padding.top)
        props["padding_right"] = _number(style.padding.right)
        props["padding_bottom"] = _number(style.padding.bottom)
        props["padding_left"] = _number(style.padding.left)

    if style.background_color:
        props["fills"] = [_solid_paint(style.background_color)]
    if style.border_radius is not None:
        props["corner_radius"] = _number(style.border_radius)
    if style.opacity is not None:
        props["opacity"] = _number(style.opacity)
    if style.border_width is not None:
        props["stroke_weight"] = _number(style.border_width)
    if style.border_color:
        props["strokes"] = [_solid_paint(style.border_color)]
    if style.border_style == "dashed":
        props["dash_pattern"] = [4, 4]

    if style.justify_content is not None and style.justify_content is not AxisAlignment.STRETCH:
        props["primary_axis_align_items"] = style.justify_content.value
    if style.align_items is not None:
        props["counter_axis_align_items"] = _COUNTER_AXIS.get(style.align_items, "MIN")
    return props


def _text_props(node: ImportIRNode) -> Dict[str, Any]:
    style = node.style
    props: Dict[str, Any] = {"text_auto_resize": "WIDTH_AND_HEIGHT"}
    if node.text is not None:
        props["characters"] = node.text.characters
    if style.font_family:
        props["font_name"] = {"family": style.font_family, "style": "Regular"}
    if style.font_size:
        props["font_size"] = _number(style.font_size)
    if style.font_weight:
        props["font_weight"] = style.font_weight
    if style.text_color:
        props["fills"] = [_solid_paint(style.text_color)]
    if style.line_height is not None:
        props["line_height"] = {"value": _number(style.line_height), "unit": "PIXELS"}
    if style.letter_spacing is not None:
        props["letter_spacing"] = {"value": _number(style.letter_spacing), "unit": "PIXELS"}
    if style.width:
        props["width"] = _number(style.width)
    if style.height:
        props["height"] = _number(style.height)
    return props


def _image_props(node: ImportIRNode) -> Dict[str, Any]:
    props = style_to_vendor_props(node.style)
    src = node.image.src if node.image else None
    if src and "{" not in src:
        props["fills"] = [{"type": "IMAGE", "imageUrl": src, "scaleMode": "FILL"}, *props.get("fills", [])]
    return props


def adapt_node(node: ImportIRNode, index: int = 0) -> VendorNode:
    """Map one IR node, and its subtree, onto a vendor node."""
    props: Dict[str, Any] = {
        "id": node.id,
        "name": node.name or f"{node.kind.value.lower()}-{index}",
        "visible": node.visible,
    }
    plugin_data: Dict[str, str] = {}

    if node.kind is IRKind.SECTION:
        props["kind"] = NodeKind.SECTION
        plugin_data[PAGE_ROOT_KEY] = PAGE_ROOT_VALUE
    elif node.kind is IRKind.FRAME:
        props["kind"] = NodeKind.FRAME
        style_props = style_to_vendor_props(node.style)
        props.update(style_props)
        if style_props.get("layout_mode") not in (None, "NONE"):
            props["layout_sizing_horizontal"] = "FIXED" if node.style.width is not None else "HUG"
            props["layout_sizing_vertical"] = "FIXED" if node.style.height is not None else "HUG"
    elif node.kind is IRKind.TEXT:
        props["kind"] = NodeKind.TEXT
        props.update(_text_props(node))
    elif node.kind is IRKind.IMAGE:
        props["kind"] = NodeKind.RECTANGLE
        props.update(_image_props(node))
        plugin_data[SEMANTIC_HTML_KEY] = IMAGE_ROLE
    elif node.kind is IRKind.COMPONENT:
        props["kind"] = NodeKind.COMPONENT
        props.update(style_to_vendor_props(node.style))
        if node.variant_properties:
            props["variant_properties"] = dict(node.variant_properties)
    elif node.kind is IRKind.COMPONENT_SET:
        props["kind"] = NodeKind.COMPONENT_SET
        props.update(style_to_vendor_props(node.style))
        if node.component_property_definitions:
            props["component_property_definitions"] = {
                name: {"type": definition.type, "variant_options": list(definition.variant_options)}
                for name, definition in node.component_property_definitions.items()
            }
    elif node.kind is IRKind.INSTANCE:
        props["kind"] = NodeKind.INSTANCE
        if node.main_component_id:
            props["main_component_id"] = node.main_component_id
        props.update(style_to_vendor_props(node.style))

    layer_bindings = node.layer_bindings
    if layer_bindings:
        plugin_data[LAYER_BINDINGS_KEY] = serialize_layer_bindings(layer_bindings)
    if plugin_data:
        props["plugin_data"] = plugin_data

    props["children"] = [adapt_node(child, position) for position, child in enumerate(node.children)]
    return VendorNode(**props)


def adapt_ir_to_vendor_document(ir: ImportIRDocument, config: ConverterConfig = DEFAULT_CONFIG) -> VendorNode:
    """Adapt a whole Import IR document.

    The SECTION root gets its page markers and, when the markup gave it no
    size, the configured default section size.
    """
    root = adapt_node(ir.root, 0)
    if root.kind is not NodeKind.SECTION:
        return root

    plugin_data = dict(root.plugin_data or {})
    plugin_data[PAGE_ROOT_KEY] = PAGE_ROOT_VALUE
    if ir.route:
        plugin_data[ROUTE_KEY] = ir.route
    if ir.headless_imports:
        headless: List[Dict[str, str]] = [
            {"plugin": item.plugin, "contract": item.contract, "key": item.key} for item in ir.headless_imports
        ]
        plugin_data[HEADLESS_IMPORTS_KEY] = json.dumps(headless, separators=(",", ":"))
    update: Dict[str, Any] = {"plugin_data": plugin_data}
    if root.width is None:
        update["width"] = config.default_section_width
    if root.height is None:
        update["height"] = config.default_section_height
    return root.model_copy(update=update)


__all__ = [
    "HEADLESS_IMPORTS_KEY",
    "parse_color",
    "style_to_vendor_props",
    "adapt_node",
    "adapt_ir_to_vendor_document",
]
