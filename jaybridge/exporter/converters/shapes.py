"""Rectangles, ellipses and vector-like nodes."""

from __future__ import annotations

from typing import List

from ...bindings.analysis import BindingAnalysis
from ...style.units import format_number, paint_color
from ...vendor.document import VendorNode
from ..context import ExportContext, HtmlFragment
from ..markup import binding_attributes, comment, escape_attribute, ref_attribute
from ..styles import (
    background_style,
    border_radius_style,
    common_styles,
    node_size_styles,
    position_style,
    stroke_styles,
)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _shape(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext, figma_type: str) -> HtmlFragment:
    style = (
        position_style(node, ctx)
        + node_size_styles(node, ctx)
        + background_style(node)
        + stroke_styles(node)
        + border_radius_style(node)
        + common_styles(node)
    )
    html = (
        f'{ctx.indent}<div data-figma-id="{escape_attribute(node.id)}" data-figma-type="{figma_type}"'
        f'{ref_attribute(analysis)}{binding_attributes(analysis)} style="{style}"></div>\n'
    )
    return HtmlFragment(html)


def convert_rectangle(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext) -> HtmlFragment:
    return _shape(node, analysis, ctx, "rectangle")


def convert_ellipse(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext) -> HtmlFragment:
    return _shape(node, analysis, ctx, "ellipse")


def _svg_paths(node: VendorNode) -> List[str]:
    fill = next((paint_color(p) for p in node.fills or [] if p.get("visible") is not False), None)
    stroke = next((paint_color(p) for p in node.strokes or [] if p.get("visible") is not False), None)

    attrs = f' fill="{fill or "none"}"'
    if stroke:
        weight = node.stroke_weight if isinstance(node.stroke_weight, (int, float)) else 1
        attrs += f' stroke="{stroke}" stroke-width="{format_number(weight)}"'

    paths: List[str] = []
    for path in node.vector_paths or node.fill_geometry or []:
        data = path.get("data") or path.get("path")
        if not data:
            continue
        rule = path.get("windingRule")
        rule_attr = ' fill-rule="evenodd"' if rule == "EVENODD" else ""
        paths.append(f'<path d="{escape_attribute(str(data))}"{rule_attr}{attrs} />')
    return paths


def convert_vector(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext) -> HtmlFragment:
    """Inline SVG from serialized markup or path geometry."""
    style = position_style(node, ctx) + node_size_styles(node, ctx) + common_styles(node)
    open_tag = (
        f'{ctx.indent}<div data-figma-id="{escape_attribute(node.id)}" data-figma-type="vector"'
        f'{ref_attribute(analysis)}{binding_attributes(analysis)} style="{style}">\n'
    )
    close_tag = f"{ctx.indent}</div>\n"

    if node.svg_content:
        return HtmlFragment(f"{open_tag}{ctx.indent_at(1)}{node.svg_content.strip()}\n{close_tag}")

    paths = _svg_paths(node)
    if not paths:
        return HtmlFragment(f"{ctx.indent}{comment(f'{node.name} ({node.kind.value}) has no vector data')}\n")

    width = format_number(node.width or 0)
    height = format_number(node.height or 0)
    lines = [
        open_tag,
        f'{ctx.indent_at(1)}<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n',
    ]
    lines.extend(f"{ctx.indent_at(2)}{path}\n" for path in paths)
    lines.append(f"{ctx.indent_at(1)}</svg>\n")
    lines.append(close_tag)
    return HtmlFragment("".join(lines))


__all__ = ["convert_rectangle", "convert_ellipse", "convert_vector"]
