"""Nodes marked with the ``img`` semantic role render as ``<img>``."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ...bindings.analysis import BindingAnalysis
from ...diagnostics import Diagnostic, DiagnosticCode, warning
from ...vendor.document import VendorNode
from ..context import ExportContext, HtmlFragment
from ..markup import binding_attributes, escape_attribute, ref_attribute
from ..styles import border_radius_style, common_styles, node_size_styles, position_style


def static_image_url(node: VendorNode) -> Tuple[Optional[str], List[Diagnostic]]:
    """URL of the first visible IMAGE fill, if the serializer exported one."""
    for fill in node.fills or []:
        if fill.get("visible") is False or fill.get("type") != "IMAGE":
            continue
        if fill.get("imageUrl"):
            return str(fill["imageUrl"]), []
        if fill.get("imageHash"):
            return None, [
                warning(
                    DiagnosticCode.IMAGE_NOT_EXPORTED,
                    f'Image fill "{fill["imageHash"]}" on "{node.name}" has no exported imageUrl',
                    node.id,
                )
            ]
        return None, []
    return None, []


def convert_image(node: VendorNode, analysis: BindingAnalysis, ctx: ExportContext) -> HtmlFragment:
    bound = analysis.attribute_map
    diagnostics: List[Diagnostic] = []

    if "src" in bound:
        src = f"{{{bound['src']}}}"
    else:
        url, diagnostics = static_image_url(node)
        if url is not None:
            src = escape_attribute(url)
        else:
            src = ctx.config.placeholder_image
            diagnostics.append(
                warning(
                    DiagnosticCode.IMAGE_NO_SOURCE,
                    f'Image node "{node.name}" has no src binding or static image',
                    node.id,
                )
            )
    alt = f"{{{bound['alt']}}}" if "alt" in bound else escape_attribute(node.name)

    style = (position_style(node, ctx) + node_size_styles(node, ctx) + border_radius_style(node) + common_styles(node)).strip()
    style_attr = f' style="{style}"' if style else ""
    extra = binding_attributes(analysis, skip=("src", "alt"))
    html = (
        f'{ctx.indent}<img data-figma-id="{escape_attribute(node.id)}"{ref_attribute(analysis)} '
        f'src="{src}" alt="{alt}"{extra}{style_attr} />\n'
    )
    return HtmlFragment(html, diagnostics=tuple(diagnostics))


__all__ = ["static_image_url", "convert_image"]
