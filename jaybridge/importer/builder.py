"""
Jay HTML → Import IR.

The builder walks a parsed ``<body>`` depth-first and produces a SECTION whose
single child is the page's content FRAME. Element handling, in order:

* ``script``/``style``/``meta``/``link``/``title`` are skipped
* ``<img>`` becomes IMAGE
* elements carrying ``forEach`` become a repeater FRAME
* text-like elements become TEXT
* everything else becomes FRAME, with runs of ``if`` siblings synthesized
  into a COMPONENT_SET followed by its INSTANCE
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from bs4 import Comment, NavigableString, Tag

from ..bindings.models import IRBinding
from ..bindings.reconstructor import (
    bindings_for_text,
    extract_bindings_from_element,
    resolve_binding_path,
)
from ..contract.lookup import split_path
from ..contract.models import Contract, ContractTag, PageContractPath
from ..diagnostics import Diagnostic, DiagnosticCode, warning
from ..dom import element_children, non_empty_attribute
from ..ids import (
    DEFAULT_HASH_LENGTH,
    build_dom_path,
    existing_round_trip_id,
    generate_node_id,
    get_semantic_anchors,
)
from ..style.model import ImportIRStyle
from ..style.resolver import resolve_style
from .html import ParsedJayHtml, content_hash
from .ir import (
    HeadlessImport,
    IRKind,
    ImagePayload,
    ImportIRDocument,
    ImportIRNode,
    ImportSource,
    TextPayload,
)
from .synthesizer import VariantGroup, detect_variant_groups, synthesize_repeater, synthesize_variant

logger = logging.getLogger(__name__)

SKIPPED_TAGS = frozenset({"script", "style", "meta", "link", "title"})
TEXT_TAGS = frozenset({"span", "p", "h1", "h2", "h3", "h4", "h5", "h6", "label", "a"})
INLINE_TAGS = frozenset({"a", "b", "br", "code", "em", "i", "small", "span", "strong", "sub", "sup", "u"})

HEADING_DEFAULTS: Dict[str, ImportIRStyle] = {
    "h1": ImportIRStyle(font_size=32.0, font_weight=700),
    "h2": ImportIRStyle(font_size=24.0, font_weight=700),
    "h3": ImportIRStyle(font_size=18.72, font_weight=700),
    "h4": ImportIRStyle(font_size=16.0, font_weight=700),
    "h5": ImportIRStyle(font_size=13.28, font_weight=700),
    "h6": ImportIRStyle(font_size=10.72, font_weight=700),
}


@dataclass(frozen=True)
class ImportContext:
    """Per-call state threaded through the walk; derived, never mutated."""

    root: Tag
    section_id: str
    contract_path: PageContractPath
    contract_tags: Tuple[ContractTag, ...] = ()
    repeater_context: Tuple[Tuple[str, ...], ...] = ()
    id_length: int = DEFAULT_HASH_LENGTH

    def with_repeater(self, tag_path: Sequence[str]) -> "ImportContext":
        return replace(self, repeater_context=self.repeater_context + (tuple(tag_path),))

    def node_id(self, element: Tag) -> str:
        return generate_node_id(
            build_dom_path(element, self.root),
            get_semantic_anchors(element),
            existing_round_trip_id(element),
            length=self.id_length,
        )


def _collapse(text: str) -> str:
    return " ".join(text.split())


def is_text_element(element: Tag) -> bool:
    """Text tags holding only inline markup, or a ``div`` holding only text."""
    children = element_children(element)
    if element.name in TEXT_TAGS:
        return all(child.name in INLINE_TAGS for child in children)
    if element.name == "div":
        return not children and bool(element.get_text().strip())
    return False


# ============================================================================
# Node builders
# ============================================================================


def _element_bindings(
    element: Tag, ctx: ImportContext, node_id: str, *, include_text: bool
) -> Tuple[List[IRBinding], List[Diagnostic]]:
    return extract_bindings_from_element(
        element,
        ctx.contract_tags,
        ctx.section_id,
        ctx.contract_path,
        ctx.repeater_context,
        node_id=node_id,
        include_text=include_text,
    )


def _build_image(element: Tag, ctx: ImportContext) -> Tuple[ImportIRNode, List[Diagnostic]]:
    node_id = ctx.node_id(element)
    style, warnings = resolve_style(non_empty_attribute(element, "style") or "")
    bindings, binding_warnings = _element_bindings(element, ctx, node_id, include_text=False)
    src = non_empty_attribute(element, "src")
    alt = non_empty_attribute(element, "alt")
    name = alt if alt and "{" not in alt else "Image"
    node = ImportIRNode(
        id=node_id,
        source_path=build_dom_path(element, ctx.root),
        kind=IRKind.IMAGE,
        name=name,
        tag_name="img",
        style=style,
        image=ImagePayload(src=src, alt=alt),
        bindings=tuple(bindings),
    )
    return node, warnings + binding_warnings


def _build_text(element: Tag, ctx: ImportContext) -> Tuple[ImportIRNode, List[Diagnostic]]:
    node_id = ctx.node_id(element)
    style, warnings = resolve_style(non_empty_attribute(element, "style") or "")
    defaults = HEADING_DEFAULTS.get(element.name or "")
    if defaults is not None:
        style = style.merged_with(defaults)

    characters = _collapse(element.get_text())
    bindings, binding_warnings = _element_bindings(element, ctx, node_id, include_text=False)
    text_bindings, text_warnings = bindings_for_text(
        characters, ctx.contract_tags, ctx.section_id, ctx.contract_path, ctx.repeater_context, node_id=node_id
    )
    node = ImportIRNode(
        id=node_id,
        source_path=build_dom_path(element, ctx.root),
        kind=IRKind.TEXT,
        name=characters[:30] or "Text",
        tag_name=element.name,
        style=style,
        text=TextPayload(characters),
        bindings=tuple(bindings) + tuple(text_bindings),
    )
    return node, warnings + binding_warnings + text_warnings


def _build_loose_text(text: str, parent: Tag, index: int, ctx: ImportContext) -> Tuple[ImportIRNode, List[Diagnostic]]:
    parent_path = build_dom_path(parent, ctx.root)
    node_id = generate_node_id(f"{parent_path}/#text{index}", length=ctx.id_length)
    bindings, warnings = bindings_for_text(
        text, ctx.contract_tags, ctx.section_id, ctx.contract_path, ctx.repeater_context, node_id=node_id
    )
    node = ImportIRNode(
        id=node_id,
        source_path=f"{parent_path}/#text{index}",
        kind=IRKind.TEXT,
        name=text[:30],
        text=TextPayload(text),
        bindings=tuple(bindings),
    )
    return node, warnings


def _build_repeater(element: Tag, ctx: ImportContext) -> Tuple[ImportIRNode, List[Diagnostic]]:
    for_each = non_empty_attribute(element, "forEach") or ""
    resolved = resolve_binding_path(for_each, ctx.contract_tags, ctx.repeater_context)
    inner = ctx.with_repeater(resolved.tag_path if resolved.resolved else split_path(for_each))

    child_warnings: List[Diagnostic] = []

    def build_child(child: Tag) -> ImportIRNode:
        node, warnings = build_node(child, inner)
        child_warnings.extend(warnings)
        return node

    result = synthesize_repeater(
        element,
        ctx.root,
        ctx.contract_tags,
        ctx.section_id,
        ctx.contract_path,
        build_child,
        repeater_context=ctx.repeater_context,
        id_length=ctx.id_length,
    )
    return result.frame, list(result.warnings) + child_warnings


def _build_variant_group(group: VariantGroup, ctx: ImportContext) -> Tuple[List[ImportIRNode], List[Diagnostic]]:
    child_warnings: List[Diagnostic] = []

    def build_child(child: Tag) -> ImportIRNode:
        node, warnings = build_node(child, ctx)
        child_warnings.extend(warnings)
        return node

    result = synthesize_variant(
        group,
        ctx.root,
        ctx.contract_tags,
        ctx.section_id,
        ctx.contract_path,
        build_child,
        repeater_context=ctx.repeater_context,
        id_length=ctx.id_length,
    )
    return [result.component_set, result.instance], list(result.warnings) + child_warnings


def _build_children(element: Tag, ctx: ImportContext) -> Tuple[List[ImportIRNode], List[Diagnostic]]:
    groups = {id(group.elements[0]): group for group in detect_variant_groups(element)}
    grouped = {id(member) for group in groups.values() for member in group.elements}

    children: List[ImportIRNode] = []
    warnings: List[Diagnostic] = []
    text_index = 0
    for child in element.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            text = _collapse(str(child))
            if text:
                node, node_warnings = _build_loose_text(text, element, text_index, ctx)
                children.append(node)
                warnings.extend(node_warnings)
                text_index += 1
            continue
        if not isinstance(child, Tag) or child.name in SKIPPED_TAGS:
            continue
        group = groups.get(id(child))
        if group is not None:
            nodes, group_warnings = _build_variant_group(group, ctx)
            children.extend(nodes)
            warnings.extend(group_warnings)
            continue
        if id(child) in grouped:
            continue
        node, node_warnings = build_node(child, ctx)
        children.append(node)
        warnings.extend(node_warnings)
    return children, warnings


def _frame_name(element: Tag) -> str:
    return (
        non_empty_attribute(element, "data-name")
        or non_empty_attribute(element, "aria-label")
        or non_empty_attribute(element, "data-figma-type")
        or element.name
        or "Frame"
    )


def _build_frame(element: Tag, ctx: ImportContext, name: Optional[str] = None) -> Tuple[ImportIRNode, List[Diagnostic]]:
    node_id = ctx.node_id(element)
    style, warnings = resolve_style(non_empty_attribute(element, "style") or "")
    bindings, binding_warnings = _element_bindings(element, ctx, node_id, include_text=False)
    children, child_warnings = _build_children(element, ctx)
    node = ImportIRNode(
        id=node_id,
        source_path=build_dom_path(element, ctx.root),
        kind=IRKind.FRAME,
        name=name or _frame_name(element),
        tag_name=element.name,
        style=style,
        bindings=tuple(bindings),
        children=tuple(children),
    )
    return node, warnings + binding_warnings + child_warnings


def build_node(element: Tag, ctx: ImportContext) -> Tuple[ImportIRNode, List[Diagnostic]]:
    """Build the IR subtree rooted at ``element``."""
    if element.name == "img":
        return _build_image(element, ctx)
    if non_empty_attribute(element, "forEach") is not None:
        return _build_repeater(element, ctx)
    if is_text_element(element):
        return _build_text(element, ctx)
    return _build_frame(element, ctx)


# ============================================================================
# Document entry point
# ============================================================================


def _first_content_element(body: Tag) -> Optional[Tag]:
    for child in element_children(body):
        if child.name not in SKIPPED_TAGS:
            return child
    return None


def build_import_ir(
    body: Tag,
    page_url: str,
    page_name: str,
    *,
    contract: Optional[Contract] = None,
    headless_imports: Sequence[HeadlessImport] = (),
    contract_path: Optional[PageContractPath] = None,
    content_digest: Optional[str] = None,
    id_length: int = DEFAULT_HASH_LENGTH,
) -> ImportIRDocument:
    """Build the Import IR for a page from its parsed ``<body>``."""
    section_id = generate_node_id(f"section:{page_url}", length=id_length)
    ctx = ImportContext(
        root=body,
        section_id=section_id,
        contract_path=contract_path or PageContractPath(page_url=page_url),
        contract_tags=contract.tags if contract else (),
        id_length=id_length,
    )

    warnings: List[Diagnostic] = []
    root_children: Tuple[ImportIRNode, ...] = ()
    content = _first_content_element(body)
    if content is None:
        warnings.append(warning(DiagnosticCode.IMPORT_EMPTY_BODY, "No block-level content found in <body>"))
    else:
        name = non_empty_attribute(content, "data-figma-type") or "content"
        frame, frame_warnings = _build_frame(content, ctx, name=name)
        warnings.extend(frame_warnings)
        root_children = (frame,)

    root = ImportIRNode(
        id=section_id,
        source_path="section",
        kind=IRKind.SECTION,
        name=page_name,
        children=root_children,
    )
    logger.debug("Built import IR for %s with %d nodes", page_url, sum(1 for _ in root.walk()))
    return ImportIRDocument(
        page_name=page_name,
        route=page_url,
        source=ImportSource(kind="jay-html", file_path=page_url, content_hash=content_digest or content_hash(body)),
        root=root,
        page_contract=contract,
        headless_imports=tuple(headless_imports),
        warnings=tuple(warnings),
    )


def build_import_ir_from_document(
    parsed: ParsedJayHtml,
    page_url: str,
    page_name: str,
    *,
    contract: Optional[Contract] = None,
    id_length: int = DEFAULT_HASH_LENGTH,
) -> ImportIRDocument:
    return build_import_ir(
        parsed.body,
        page_url,
        page_name,
        contract=contract,
        headless_imports=parsed.headless_imports,
        content_digest=parsed.content_hash,
        id_length=id_length,
    )


__all__ = [
    "SKIPPED_TAGS",
    "TEXT_TAGS",
    "HEADING_DEFAULTS",
    "ImportContext",
    "is_text_element",
    "build_node",
    "build_import_ir",
    "build_import_ir_from_document",
]
