"""
Import-side binding reconstruction.

Scans one parsed Jay HTML element for binding syntax (``ref``, ``{path}``
placeholders in text and attributes, ``if`` and ``forEach``) and rebuilds the
binding records a vendor node would carry.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bs4 import Tag

from ..contract.lookup import apply_repeater_context, find_contract_tag, split_path
from ..contract.models import ContractTag, PageContractPath
from ..diagnostics import Diagnostic, DiagnosticCode, warning
from ..dom import direct_text, non_empty_attribute
from .models import IRBinding, LayerBinding, VariantExpressionBinding

BINDING_ATTRIBUTES: Tuple[str, ...] = ("src", "alt", "href", "value", "placeholder", "title", "aria-label")

_TEXT_PATTERNS = (re.compile(r"\{([^}]+)\}"), re.compile(r"\$\{([^}]+)\}"))


@dataclass(frozen=True)
class ResolvedPath:
    tag_path: Tuple[str, ...]
    resolved: bool


def extract_text_bindings(text: str) -> List[str]:
    """Distinct ``{path}`` / ``${path}`` placeholder paths in order of appearance."""
    paths: List[str] = []
    for pattern in _TEXT_PATTERNS:
        for match in pattern.finditer(text):
            path = match.group(1).strip()
            if path and path not in paths:
                paths.append(path)
    return paths


def extract_attribute_bindings(element: Tag) -> List[Tuple[str, str]]:
    """``(attribute, path)`` pairs for bindable attributes holding a placeholder."""
    result: List[Tuple[str, str]] = []
    for attribute in BINDING_ATTRIBUTES:
        value = non_empty_attribute(element, attribute)
        if value is None:
            continue
        match = _TEXT_PATTERNS[0].search(value) or _TEXT_PATTERNS[1].search(value)
        if match and match.group(1).strip():
            result.append((attribute, match.group(1).strip()))
    return result


def resolve_binding_path(
    raw_path: str,
    contract_tags: Sequence[ContractTag],
    repeater_context: Sequence[Sequence[str]] = (),
) -> ResolvedPath:
    """Resolve ``raw_path`` inside the innermost active repeater, if any.

    Inside a repeater the path is looked up among the repeater tag's children
    and the repeater path is prefixed back onto the result.
    """
    path_to_resolve = raw_path
    tags_to_search: Sequence[ContractTag] = contract_tags
    innermost: Tuple[str, ...] = ()

    if repeater_context:
        path_to_resolve = apply_repeater_context(raw_path, repeater_context)
        innermost = tuple(repeater_context[-1])
        repeater_tag = find_contract_tag(contract_tags, innermost)
        if repeater_tag is not None and repeater_tag.tags:
            tags_to_search = repeater_tag.tags

    segments = split_path(path_to_resolve)
    if not segments:
        return ResolvedPath((), False)
    if find_contract_tag(tags_to_search, segments) is not None:
        return ResolvedPath(innermost + tuple(segments), True)
    if repeater_context and find_contract_tag(contract_tags, segments) is not None:
        # page-level paths stay reachable from inside a repeater
        return ResolvedPath(tuple(segments), True)
    return ResolvedPath(tuple(segments), False)


def variant_binding_id(expression: str) -> str:
    return "ve-" + hashlib.sha256(expression.encode("utf-8")).hexdigest()[:12]


def _unresolved(path: str, node_id: Optional[str]) -> Diagnostic:
    return warning(DiagnosticCode.BINDING_UNRESOLVED, f"Could not resolve '{path}' against contract", node_id)


def bindings_for_text(
    text: str,
    contract_tags: Sequence[ContractTag],
    section_id: str,
    contract_path: PageContractPath,
    repeater_context: Sequence[Sequence[str]] = (),
    *,
    node_id: Optional[str] = None,
) -> Tuple[List[LayerBinding], List[Diagnostic]]:
    """Layer bindings for every resolvable placeholder in ``text``."""
    bindings: List[LayerBinding] = []
    warnings: List[Diagnostic] = []
    for path in extract_text_bindings(text):
        resolved = resolve_binding_path(path, contract_tags, repeater_context)
        if resolved.resolved:
            bindings.append(
                LayerBinding(
                    page_contract_path=contract_path,
                    jay_page_section_id=section_id,
                    tag_path=resolved.tag_path,
                )
            )
        else:
            warnings.append(_unresolved(f"{{{path}}}", node_id))
    return bindings, warnings


def extract_bindings_from_element(
    element: Tag,
    contract_tags: Sequence[ContractTag],
    section_id: str,
    contract_path: PageContractPath,
    repeater_context: Sequence[Sequence[str]] = (),
    *,
    node_id: Optional[str] = None,
    include_text: bool = True,
) -> Tuple[List[IRBinding], List[Diagnostic]]:
    """Rebuild the bindings carried by ``element``.

    Unresolvable paths are dropped with a ``BINDING_UNRESOLVED`` warning.
    With ``include_text`` off, placeholders in the element's own text nodes
    are left for the caller to attach elsewhere.
    """
    bindings: List[IRBinding] = []
    warnings: List[Diagnostic] = []

    def layer(tag_path: Sequence[str], attribute: Optional[str] = None) -> LayerBinding:
        return LayerBinding(
            page_contract_path=contract_path,
            jay_page_section_id=section_id,
            tag_path=tuple(tag_path),
            attribute=attribute,
        )

    ref = non_empty_attribute(element, "ref")
    if ref is not None:
        resolved = resolve_binding_path(ref, contract_tags, repeater_context)
        if resolved.resolved and len(split_path(ref)) == 1:
            bindings.append(layer(resolved.tag_path))
        else:
            warnings.append(_unresolved(ref, node_id))

    if include_text:
        text_bindings, text_warnings = bindings_for_text(
            direct_text(element), contract_tags, section_id, contract_path, repeater_context, node_id=node_id
        )
        bindings.extend(text_bindings)
        warnings.extend(text_warnings)

    for attribute, path in extract_attribute_bindings(element):
        resolved = resolve_binding_path(path, contract_tags, repeater_context)
        if resolved.resolved:
            bindings.append(layer(resolved.tag_path, attribute))
        else:
            warnings.append(_unresolved(f"{{{path}}}", node_id))

    expression = non_empty_attribute(element, "if")
    if expression is not None:
        bindings.append(VariantExpressionBinding(id=variant_binding_id(expression), expression=expression))

    for_each = non_empty_attribute(element, "forEach")
    if for_each is not None:
        resolved = resolve_binding_path(for_each, contract_tags, repeater_context)
        if not resolved.resolved:
            warnings.append(_unresolved(for_each, node_id))
        else:
            repeater_tag = find_contract_tag(contract_tags, resolved.tag_path)
            if repeater_tag is not None and repeater_tag.is_repeater:
                bindings.append(layer(resolved.tag_path))
            else:
                warnings.append(
                    warning(
                        DiagnosticCode.BINDING_UNRESOLVED,
                        f"Could not resolve forEach '{for_each}' as repeater",
                        node_id,
                    )
                )

    return bindings, warnings


__all__ = [
    "BINDING_ATTRIBUTES",
    "ResolvedPath",
    "extract_text_bindings",
    "extract_attribute_bindings",
    "resolve_binding_path",
    "variant_binding_id",
    "bindings_for_text",
    "extract_bindings_from_element",
]
