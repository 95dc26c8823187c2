"""
Export-side binding analysis.

Every vendor node may carry a list of :class:`LayerBinding` records. Before a
node is rendered those records are resolved against the page or plugin
contract and classified into exactly one :class:`BindingKind`, which decides
the HTML shape the node converts to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..contract.lookup import apply_repeater_context, find_contract_tag
from ..contract.models import ContractTag, Plugin, ProjectPage, find_plugin
from ..diagnostics import Diagnostic, DiagnosticCode, warning
from .models import LayerBinding


class BindingKind(str, Enum):
    NONE = "none"
    DYNAMIC_CONTENT = "dynamic-content"
    INTERACTIVE = "interactive"
    ATTRIBUTE = "attribute"
    PROPERTY_VARIANT = "property-variant"
    DUAL = "dual"
    REPEATER = "repeater"


@dataclass(frozen=True)
class PropertyBinding:
    property: str
    tag_path: str
    contract_tag: ContractTag


@dataclass(frozen=True)
class BindingAnalysis:
    """Classification of one node's bindings; ``kind`` selects the active variant."""

    kind: BindingKind = BindingKind.NONE
    attributes: Tuple[Tuple[str, str], ...] = ()
    property_bindings: Tuple[PropertyBinding, ...] = ()
    repeater_path: Optional[str] = None
    repeater_tag: Optional[ContractTag] = None
    track_by_key: Optional[str] = None
    dynamic_content_path: Optional[str] = None
    dynamic_content_tag: Optional[ContractTag] = None
    ref_path: Optional[str] = None
    dual_path: Optional[str] = None
    interactive_variant_path: Optional[str] = None

    @property
    def attribute_map(self) -> Dict[str, str]:
        return dict(self.attributes)

    @property
    def is_repeater(self) -> bool:
        return self.kind is BindingKind.REPEATER

    @property
    def content_path(self) -> Optional[str]:
        """Path rendered as ``{path}`` text content, if any."""
        return self.dynamic_content_path or self.dual_path

    @property
    def ref(self) -> Optional[str]:
        """Path rendered as the ``ref`` attribute, if any."""
        return self.ref_path or self.dual_path or self.interactive_variant_path


NO_BINDINGS = BindingAnalysis()


@dataclass(frozen=True)
class _Resolved:
    binding: LayerBinding
    full_path: str
    tag: ContractTag


def _resolve(
    binding: LayerBinding,
    project_page: ProjectPage,
    plugins: Sequence[Plugin],
    repeater_stack: Sequence[Sequence[str]],
    node_id: Optional[str],
) -> Tuple[Optional[_Resolved], Optional[Diagnostic]]:
    contract_path = binding.page_contract_path
    key: Optional[str] = None

    if contract_path.is_plugin_contract:
        plugin = find_plugin(list(plugins), contract_path.plugin_name or "")
        if plugin is None:
            return None, warning(
                DiagnosticCode.PLUGIN_NOT_FOUND, f"Plugin not found: {contract_path.plugin_name}", node_id
            )
        contract = plugin.find_contract(contract_path.component_name or "")
        if contract is None:
            return None, warning(
                DiagnosticCode.CONTRACT_NOT_FOUND,
                f"Contract not found in plugin: {contract_path.component_name}",
                node_id,
            )
        used = project_page.find_used_component(contract_path.component_name or "")
        if used is None:
            return None, warning(
                DiagnosticCode.COMPONENT_NOT_USED,
                f"Used component not found: {contract_path.component_name}",
                node_id,
            )
        key = used.key
        tags: Sequence[ContractTag] = contract.tags
        lookup_path = list(binding.tag_path[1:])
    else:
        if project_page.contract is None:
            return None, warning(DiagnosticCode.CONTRACT_NOT_FOUND, "Page contract not found", node_id)
        tags = project_page.contract.tags
        lookup_path = list(binding.tag_path)

    tag = find_contract_tag(tags, lookup_path)
    if tag is None:
        return None, warning(
            DiagnosticCode.BINDING_UNRESOLVED,
            f"Contract tag not found: {'.'.join(lookup_path)}",
            node_id,
        )

    full_path = ".".join([key, *lookup_path]) if key else ".".join(binding.tag_path)
    full_path = apply_repeater_context(full_path, repeater_stack)
    return _Resolved(binding, full_path, tag), None


def analyze_bindings(
    bindings: Sequence[LayerBinding],
    *,
    project_page: ProjectPage,
    plugins: Sequence[Plugin] = (),
    repeater_stack: Sequence[Sequence[str]] = (),
    node_id: Optional[str] = None,
) -> Tuple[BindingAnalysis, List[Diagnostic]]:
    """Resolve and classify a node's bindings.

    Precedence: repeater, then property-variant, then attribute, then a
    single content binding (dual, interactive or dynamic content).
    """
    if not bindings:
        return NO_BINDINGS, []

    resolved_list: List[_Resolved] = []
    diagnostics: List[Diagnostic] = []
    for binding in bindings:
        resolved, diagnostic = _resolve(binding, project_page, plugins, repeater_stack, node_id)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
        if resolved is not None:
            resolved_list.append(resolved)

    if not resolved_list:
        return NO_BINDINGS, diagnostics

    repeater = next((r for r in resolved_list if r.tag.is_repeater), None)
    if repeater is not None:
        return (
            BindingAnalysis(
                kind=BindingKind.REPEATER,
                repeater_path=repeater.full_path,
                repeater_tag=repeater.tag,
                track_by_key=repeater.tag.track_by or "id",
            ),
            diagnostics,
        )

    property_bindings = [r for r in resolved_list if r.binding.property]
    if property_bindings:
        if len(property_bindings) != len(resolved_list):
            diagnostics.append(
                warning(
                    DiagnosticCode.BINDING_INVALID_MIX,
                    "Node has mixed property and non-property bindings",
                    node_id,
                )
            )
        interactive_variant = next(
            (r.full_path for r in property_bindings if r.tag.is_interactive), None
        )
        return (
            BindingAnalysis(
                kind=BindingKind.PROPERTY_VARIANT,
                attributes=tuple(
                    (r.binding.attribute, r.full_path) for r in resolved_list if r.binding.attribute
                ),
                property_bindings=tuple(
                    PropertyBinding(r.binding.property or "", r.full_path, r.tag) for r in property_bindings
                ),
                interactive_variant_path=interactive_variant,
            ),
            diagnostics,
        )

    kind = BindingKind.NONE
    attributes = tuple((r.binding.attribute, r.full_path) for r in resolved_list if r.binding.attribute)
    if attributes:
        kind = BindingKind.ATTRIBUTE

    values: Dict[str, object] = {}
    content = [r for r in resolved_list if not r.binding.attribute]
    if content:
        first = content[0]
        if first.tag.is_dual:
            kind = BindingKind.DUAL
            values["dual_path"] = first.full_path
        elif first.tag.is_interactive:
            kind = BindingKind.INTERACTIVE
            values["ref_path"] = first.full_path
        elif first.tag.is_data:
            if kind is not BindingKind.ATTRIBUTE:
                kind = BindingKind.DYNAMIC_CONTENT
            values["dynamic_content_path"] = first.full_path
            values["dynamic_content_tag"] = first.tag

    return BindingAnalysis(kind=kind, attributes=attributes, **values), diagnostics


def validate_bindings(analysis: BindingAnalysis, node_name: str, node_id: Optional[str] = None) -> List[Diagnostic]:
    """Report binding combinations that cannot be expressed in HTML."""
    diagnostics: List[Diagnostic] = []
    if analysis.kind is BindingKind.PROPERTY_VARIANT and analysis.attributes:
        diagnostics.append(
            warning(
                DiagnosticCode.BINDING_INVALID_MIX,
                f'Node "{node_name}" has both property and attribute bindings',
                node_id,
            )
        )
    if analysis.kind is BindingKind.INTERACTIVE and analysis.attributes:
        diagnostics.append(
            warning(
                DiagnosticCode.BINDING_INVALID_MIX,
                f'Node "{node_name}" has interactive binding with attributes',
                node_id,
            )
        )
    return diagnostics


__all__ = [
    "BindingKind",
    "PropertyBinding",
    "BindingAnalysis",
    "NO_BINDINGS",
    "analyze_bindings",
    "validate_bindings",
]
