"""GROUP nodes: a positioned box whose children keep group-relative offsets."""

from __future__ import annotations

from typing import Callable

from ...bindings.analysis import BindingAnalysis
from ...vendor.document import VendorNode
from ..context import ExportContext, HtmlFragment
from ..markup import binding_attributes, comment, escape_attribute, ref_attribute
from ..styles import common_styles, node_size_styles, position_style

ConvertNode = Callable[[VendorNode, ExportContext], HtmlFragment]


def _relative_to(child: VendorNode, group: VendorNode) -> VendorNode:
    # Group children are positioned in the coordinate space of the group's parent.
    if child.x is None and child.y is None:
        return child
    return child.model_copy(
        update={"x": (child.x or 0) - (group.x or 0), "y": (child.y or 0) - (group.y or 0)}
    )


def convert_group(
    node: VendorNode,
    analysis: BindingAnalysis,
    ctx: ExportContext,
    convert_node: ConvertNode,
) -> HtmlFragment:
    style = position_style(node, ctx) + node_size_styles(node, ctx) + common_styles(node)
    opening = HtmlFragment(
        f'{ctx.indent}<div data-figma-id="{escape_attribute(node.id)}" data-figma-type="group"'
        f'{ref_attribute(analysis)}{binding_attributes(analysis)} style="{style}">\n'
        f"{ctx.indent_at(1)}{comment(node.name)}\n"
    )
    child_ctx = ctx.child_of(node)
    children = HtmlFragment.concat(convert_node(_relative_to(child, node), child_ctx) for child in node.children)
    return opening + children + HtmlFragment(f"{ctx.indent}</div>\n")


__all__ = ["convert_group"]
