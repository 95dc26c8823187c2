"""
Page export entry point: vendor page section → Jay HTML body.

The document root must be a SECTION marked as a page. Its first FRAME child
is the content frame; everything else on the section (notes, stray shapes,
component sets) is ignored except that component sets are indexed so
instances can resolve their variants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..config import DEFAULT_CONFIG, ConverterConfig
from ..contract.models import Plugin, ProjectPage
from ..diagnostics import Diagnostic, DiagnosticCode, warning
from ..errors import ContentFrameError, NotAPageError
from ..vendor.document import NodeKind, VendorNode
from ..vendor.metadata import PAGE_ROOT_KEY, PAGE_ROOT_VALUE
from .context import ExportContext
from .converters import convert_node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    body_html: str
    font_families: Tuple[str, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()


def build_component_set_index(root: VendorNode) -> Dict[str, VendorNode]:
    """Map every COMPONENT id to the COMPONENT_SET that contains it."""
    index: Dict[str, VendorNode] = {}
    for node in root.walk():
        if node.kind is not NodeKind.COMPONENT_SET:
            continue
        for child in node.children:
            if child.kind is NodeKind.COMPONENT:
                index[child.id] = node
    return index


def find_content_frame(section: VendorNode) -> Tuple[VendorNode, List[Diagnostic]]:
    if not section.children:
        raise ContentFrameError(
            f'Jay Page section "{section.name}" has no children',
            node_id=section.id,
            node_name=section.name,
        )
    frames = [child for child in section.children if child.kind is NodeKind.FRAME]
    if not frames:
        found = ", ".join(child.kind.value for child in section.children)
        raise ContentFrameError(
            f'Jay Page section "{section.name}" has no FrameNode children. Found: {found}',
            node_id=section.id,
            node_name=section.name,
            hint="Wrap the page content in a single top-level frame",
        )
    if len(frames) > 1:
        return frames[0], [
            warning(
                DiagnosticCode.MULTIPLE_CONTENT_FRAMES,
                f'Jay Page section "{section.name}" has {len(frames)} FrameNodes, using the first one',
                section.id,
            )
        ]
    return frames[0], []


def convert_to_body_html(
    vendor_doc: VendorNode,
    project_page: ProjectPage,
    plugins: Sequence[Plugin] = (),
    *,
    config: ConverterConfig = DEFAULT_CONFIG,
) -> ExportResult:
    """Convert a page section to body HTML, collecting fonts and diagnostics."""
    if vendor_doc.metadata(PAGE_ROOT_KEY) != PAGE_ROOT_VALUE:
        raise NotAPageError(
            f"Document \"{vendor_doc.name}\" is not marked as a Jay Page (missing {PAGE_ROOT_KEY}='true' in pluginData)",
            node_id=vendor_doc.id,
            node_name=vendor_doc.name,
        )

    frame, diagnostics = find_content_frame(vendor_doc)
    logger.debug("Converting content frame %s (%s)", frame.name, frame.id)

    ctx = ExportContext(
        project_page=project_page,
        plugins=tuple(plugins),
        config=config,
        indent_level=1,
        component_set_index=build_component_set_index(vendor_doc),
        parent_kind=NodeKind.SECTION,
        parent_layout_mode="NONE",
    )
    fragment = convert_node(frame, ctx)
    return ExportResult(
        body_html=fragment.html,
        font_families=fragment.font_families,
        diagnostics=tuple(diagnostics) + fragment.diagnostics,
    )


__all__ = ["ExportResult", "build_component_set_index", "find_content_frame", "convert_to_body_html"]
