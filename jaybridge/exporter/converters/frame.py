"""Containers: page sections, frames, components and instances."""

from __future__ import annotations

from typing import Callable

from ...bindings.analysis import BindingAnalysis
from ...vendor.document import NodeKind, VendorNode
from ...vendor.metadata import ROUTE_KEY, SEMANTIC_HTML_KEY
from ..context import ExportContext, HtmlFragment
from ..markup import binding_attributes, comment, escape_attribute, ref_attribute
from ..styles import common_styles, frame_styles, node_size_styles, position_style

ConvertNode = Callable[[VendorNode, ExportContext], HtmlFragment]

CONTAINER_KINDS = frozenset({NodeKind.FRAME, NodeKind.COMPONENT, NodeKind.INSTANCE})
VOID_TAGS = frozenset({"input", "hr", "br", "img"})


def _children(node: VendorNode, ctx: ExportContext, convert_node: ConvertNode) -> HtmlFragment:
    child_ctx = ctx.child_of(node)
    return HtmlFragment.concat(convert_node(child, child_ctx) for child in node.children)


def convert_section(node: VendorNode, ctx: ExportContext, convert_node: ConvertNode) -> HtmlFragment:
    """A page section; its bindings are never analyzed."""
    route = escape_attribute(node.metadata(ROUTE_KEY) or "")
    opening = HtmlFragment(
        f'{ctx.indent}<section data-figma-id="{escape_attribute(node.id)}" data-page-url="{route}">\n'
        f"{ctx.indent_at(1)}{comment(f'Jay Page: {node.name}')}\n"
    )
    return opening + _children(node, ctx, convert_node) + HtmlFragment(f"{ctx.indent}</section>\n")


def convert_component_set(node: VendorNode, ctx: ExportContext) -> HtmlFragment:
    # Variants render through the instances that reference them.
    return HtmlFragment(f"{ctx.indent}{comment(f'{node.name} (COMPONENT_SET)')}\n")


def convert_frame(
    node: VendorNode,
    analysis: BindingAnalysis,
    ctx: ExportContext,
    convert_node: ConvertNode,
) -> HtmlFragment:
    """Render a container, or a placeholder comment for an empty non-container."""
    if node.kind in CONTAINER_KINDS:
        style = frame_styles(node, ctx)
    else:
        style = position_style(node, ctx) + node_size_styles(node, ctx) + common_styles(node)

    if not node.children and node.kind not in CONTAINER_KINDS:
        return HtmlFragment(f"{ctx.indent}{comment(f'{node.name} ({node.kind.value})')}\n")

    tag = node.metadata(SEMANTIC_HTML_KEY) or "div"
    attrs = (
        f'data-figma-id="{escape_attribute(node.id)}" data-figma-type="{node.kind.value.lower()}" style="{style}"'
        f"{ref_attribute(analysis)}{binding_attributes(analysis)}"
    )
    if tag in VOID_TAGS:
        return HtmlFragment(f"{ctx.indent}<{tag} {attrs} />\n")
    opening = HtmlFragment(f"{ctx.indent}<{tag} {attrs}>\n{ctx.indent_at(1)}{comment(node.name)}\n")
    return opening + _children(node, ctx, convert_node) + HtmlFragment(f"{ctx.indent}</{tag}>\n")


__all__ = ["CONTAINER_KINDS", "VOID_TAGS", "convert_section", "convert_component_set", "convert_frame"]
