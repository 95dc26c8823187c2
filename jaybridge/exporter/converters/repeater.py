"""Repeater frames become an outer container plus a ``forEach`` template div."""

from __future__ import annotations

from typing import Callable

from ...bindings.analysis import BindingAnalysis
from ...errors import RepeaterConversionError
from ...vendor.document import NodeKind, VendorNode
from ..context import ExportContext, HtmlFragment
from ..markup import escape_attribute
from ..styles import frame_size_styles, frame_styles

ConvertNode = Callable[[VendorNode, ExportContext], HtmlFragment]


def _inner_size(node: VendorNode) -> str:
    if node.layout_wrap == "WRAP":
        return "width: fit-content; height: fit-content;"
    if node.layout_mode == "HORIZONTAL":
        return "height: 100%;"
    if node.layout_mode == "VERTICAL":
        return "width: 100%;"
    return ""


def _outer_size(node: VendorNode, ctx: ExportContext) -> str:
    # HUG on the cross axis is measured against placeholder content; stretch instead.
    size = frame_size_styles(node, ctx)
    if node.layout_mode == "VERTICAL" and node.layout_sizing_horizontal == "HUG":
        size = size.replace("width: fit-content;", "width: 100%;")
    if node.layout_mode == "HORIZONTAL" and node.layout_sizing_vertical == "HUG":
        size = size.replace("height: fit-content;", "height: 100%;")
    return size


def _template_child(node: VendorNode) -> VendorNode:
    child = node.children[0]
    if child.kind is not NodeKind.FRAME:
        return child
    overrides = {}
    if node.layout_mode == "VERTICAL" and child.layout_sizing_horizontal == "HUG":
        overrides["layout_sizing_horizontal"] = "FILL"
    if node.layout_mode == "HORIZONTAL" and child.layout_sizing_vertical == "HUG":
        overrides["layout_sizing_vertical"] = "FILL"
    return child.model_copy(update=overrides) if overrides else child


def convert_repeater(
    node: VendorNode,
    analysis: BindingAnalysis,
    ctx: ExportContext,
    convert_node: ConvertNode,
) -> HtmlFragment:
    """Render ``node`` as a repeater; only its first child is the template."""
    if node.kind is not NodeKind.FRAME:
        raise RepeaterConversionError(
            f'Repeater node "{node.name}" must be a FRAME (got: {node.kind.value})',
            node_id=node.id,
            node_name=node.name,
        )
    if not node.layout_mode or node.layout_mode == "NONE":
        raise RepeaterConversionError(
            f'Repeater node "{node.name}" must have auto-layout (HORIZONTAL or VERTICAL)',
            node_id=node.id,
            node_name=node.name,
            hint="Enable auto layout on the repeated frame",
        )
    if not node.children:
        raise RepeaterConversionError(
            f'Repeater node "{node.name}" has no children - repeater template is required',
            node_id=node.id,
            node_name=node.name,
        )

    path = analysis.repeater_path or ""
    style = frame_styles(node, ctx, size=_outer_size(node, ctx))
    template_ctx = ctx.child_of(node, 2).with_repeater(path.split("."))
    template = convert_node(_template_child(node), template_ctx)

    opening = (
        f'{ctx.indent}<div id="{escape_attribute(node.id)}" data-figma-id="{escape_attribute(node.id)}" data-figma-type="frame-repeater" '
        f'style="{style}">\n'
        f'{ctx.indent_at(1)}<div style="position: relative; {_inner_size(node)}" '
        f'forEach="{path}" trackBy="{analysis.track_by_key or "id"}">\n'
    )
    closing = f"{ctx.indent_at(1)}</div>\n{ctx.indent}</div>\n"
    return HtmlFragment(opening) + template + HtmlFragment(closing)


__all__ = ["convert_repeater"]
