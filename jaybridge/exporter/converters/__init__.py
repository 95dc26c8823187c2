"""Node dispatch for the export direction."""

from __future__ import annotations

from typing import Callable, Dict

from ...bindings.analysis import BindingAnalysis, BindingKind, analyze_bindings, validate_bindings
from ...bindings.models import parse_layer_bindings
from ...vendor.document import VECTOR_LIKE_KINDS, NodeKind, VendorNode
from ...vendor.metadata import (
    IMAGE_ROLE,
    LAYER_BINDINGS_KEY,
    PAGE_ROOT_KEY,
    PAGE_ROOT_VALUE,
    SEMANTIC_HTML_KEY,
)
from ..context import ExportContext, HtmlFragment
from .frame import convert_component_set, convert_frame, convert_section
from .group import convert_group
from .image import convert_image
from .repeater import convert_repeater
from .shapes import convert_ellipse, convert_rectangle, convert_vector
from .text import convert_text, font_family
from .variants import convert_variant

LeafConverter = Callable[[VendorNode, BindingAnalysis, ExportContext], HtmlFragment]

_LEAF_CONVERTERS: Dict[NodeKind, LeafConverter] = {
    NodeKind.TEXT: convert_text,
    NodeKind.RECTANGLE: convert_rectangle,
    NodeKind.ELLIPSE: convert_ellipse,
    **{kind: convert_vector for kind in VECTOR_LIKE_KINDS},
}


def _is_page_section(node: VendorNode) -> bool:
    return node.kind is NodeKind.SECTION and node.metadata(PAGE_ROOT_KEY) == PAGE_ROOT_VALUE


def _render(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext) -> HtmlFragment:
    if analysis.kind is BindingKind.REPEATER:
        return convert_repeater(node, analysis, ctx, convert_node)
    if analysis.kind is BindingKind.PROPERTY_VARIANT:
        return convert_variant(node, analysis, ctx, convert_node)
    if node.kind is not NodeKind.TEXT and node.metadata(SEMANTIC_HTML_KEY) == IMAGE_ROLE:
        return convert_image(node, analysis, ctx)
    if node.kind in _LEAF_CONVERTERS:
        return _LEAF_CONVERTERS[node.kind](node, analysis, ctx)
    if node.kind is NodeKind.GROUP:
        return convert_group(node, analysis, ctx, convert_node)
    if node.kind is NodeKind.COMPONENT_SET:
        return convert_component_set(node, ctx)
    return convert_frame(node, analysis, ctx, convert_node)


def convert_node(node: VendorNode, ctx: ExportContext) -> HtmlFragment:
    """Convert one vendor node (and its subtree) to Jay HTML."""
    fonts = ()
    if node.kind is NodeKind.TEXT:
        family = font_family(node)
        fonts = (family,) if family else ()

    if _is_page_section(node):
        return HtmlFragment(font_families=fonts) + convert_section(node, ctx, convert_node)

    bindings, diagnostics = parse_layer_bindings(node.metadata(LAYER_BINDINGS_KEY), node.id)
    analysis, analysis_diagnostics = analyze_bindings(
        bindings,
        project_page=ctx.project_page,
        plugins=ctx.plugins,
        repeater_stack=ctx.repeater_path_stack,
        node_id=node.id,
    )
    diagnostics.extend(analysis_diagnostics)
    diagnostics.extend(validate_bindings(analysis, node.name, node.id))

    fragment = HtmlFragment(font_families=fonts, diagnostics=tuple(diagnostics))
    return fragment + _render(node, analysis, ctx)


__all__ = [
    "convert_node",
    "convert_text",
    "convert_image",
    "convert_rectangle",
    "convert_ellipse",
    "convert_vector",
    "convert_group",
    "convert_repeater",
    "convert_variant",
    "convert_frame",
    "convert_section",
]
