"""TEXT node rendering."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...bindings.analysis import BindingAnalysis
from ...style.units import format_number, rgb_to_hex
from ...vendor.document import FontName, VendorNode
from ..context import ExportContext, HtmlFragment
from ..markup import binding_attributes, comment, escape_attribute, escape_text, ref_attribute
from ..styles import common_styles, node_size_styles, position_style

_VERTICAL_JUSTIFY = {
    "TOP": "flex-start",
    "CENTER": "center",
    "BOTTOM": "flex-end",
}

_TEXT_CASE = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
}

_DECORATION = {
    "UNDERLINE": "underline",
    "STRIKETHROUGH": "line-through",
}


def font_family(node: VendorNode) -> Optional[str]:
    if isinstance(node.font_name, FontName) and node.font_name.family:
        return node.font_name.family
    return None


def _unit(measure: Dict[str, Any]) -> str:
    return "px" if measure.get("unit") == "PIXELS" else "%"


def text_styles(node: VendorNode) -> str:
    """Typography declarations for a TEXT node."""
    family = font_family(node)
    styles = f"font-family: '{family}', sans-serif;" if family else "font-family: sans-serif;"
    size = node.font_size if isinstance(node.font_size, (int, float)) else 16
    weight = node.font_weight if isinstance(node.font_weight, (int, float)) else 400
    styles += f"font-size: {format_number(size)}px;"
    styles += f"font-weight: {format_number(weight)};"

    color = "#000000"
    fills = node.fills or []
    if fills and fills[0].get("type") == "SOLID" and fills[0].get("color"):
        color = rgb_to_hex(fills[0]["color"])
    styles += f"color: {color};"

    align = (node.text_align_horizontal or "left").lower()
    if align == "justified":
        align = "justify"
    styles += f"text-align: {align};"

    spacing = node.letter_spacing
    if spacing and spacing.get("value"):
        styles += f"letter-spacing: {format_number(spacing['value'])}{_unit(spacing)};"

    line_height = node.line_height
    if line_height:
        if line_height.get("unit") == "AUTO":
            styles += "line-height: normal;"
        elif line_height.get("value") is not None:
            styles += f"line-height: {format_number(line_height['value'])}{_unit(line_height)};"

    if node.text_decoration in _DECORATION:
        styles += f"text-decoration: {_DECORATION[node.text_decoration]};"
    if node.text_case in _TEXT_CASE:
        styles += f"text-transform: {_TEXT_CASE[node.text_case]};"

    if node.text_truncation == "ENDING":
        if node.max_lines and node.max_lines > 1:
            styles += (
                f"display: -webkit-box; -webkit-line-clamp: {node.max_lines}; "
                "-webkit-box-orient: vertical; overflow: hidden;"
            )
        else:
            styles += "white-space: nowrap; overflow: hidden; text-overflow: ellipsis;"
    if node.max_width and node.max_width > 0:
        styles += f"max-width: {format_number(node.max_width)}px;"
    return styles


def text_content(node: VendorNode) -> str:
    """Escaped characters with hyperlink ranges (inclusive ends) spliced in."""
    characters = node.characters or ""
    if not node.hyperlinks:
        return escape_text(characters)

    parts = []
    last_end = 0
    for link in node.hyperlinks:
        if link.start > last_end:
            parts.append(escape_text(characters[last_end:link.start]))
        linked = characters[link.start:link.end + 1]
        parts.append(f'<a href="{escape_attribute(link.url)}" style="color: inherit;">{escape_text(linked)}</a>')
        last_end = link.end + 1
    if last_end < len(characters):
        parts.append(escape_text(characters[last_end:]))
    return "".join(parts)


def convert_text(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext) -> HtmlFragment:
    indent = ctx.indent
    if node.has_missing_font:
        note = comment(f'Text node "{node.name}" has missing fonts')
        return HtmlFragment(f"{indent}{note}\n")

    content_path = analysis.content_path
    if not node.characters and not content_path:
        return HtmlFragment()

    typography = text_styles(node)
    style = position_style(node, ctx) + node_size_styles(node, ctx) + common_styles(node) + typography
    content = f"{{{content_path}}}" if content_path else text_content(node)
    attrs = f'data-figma-id="{escape_attribute(node.id)}"{ref_attribute(analysis)}{binding_attributes(analysis)}'

    justify = _VERTICAL_JUSTIFY.get(node.text_align_vertical or "")
    if node.text_align_vertical:
        wrapper = "display: flex; flex-direction: column;"
        if justify:
            wrapper += f"justify-content: {justify};"
        html = (
            f'{indent}<div {attrs} style="{style}{wrapper}">\n'
            f'{ctx.indent_at(1)}<div style="{typography}">\n'
            f"{ctx.indent_at(2)}{content}\n"
            f"{ctx.indent_at(1)}</div>\n"
            f"{indent}</div>\n"
        )
    else:
        html = f'{indent}<div {attrs} style="{style}">{content}</div>\n'
    return HtmlFragment(html)


__all__ = ["font_family", "text_styles", "text_content", "convert_text"]
