"""
Property-variant nodes become a container holding one ``if`` div per value
permutation.

Variant values come from the node's own component property definitions,
from its serialized ``variants``, or, for instances that carry neither, from
the component set their main component belongs to. Pseudo-state values
(``hover:true`` and the like) contain ``:`` and are dropped; those toggle CSS,
not template conditions.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ...bindings.analysis import BindingAnalysis, PropertyBinding
from ...diagnostics import Diagnostic, DiagnosticCode, warning
from ...errors import VariantSynthesisError
from ...vendor.document import NodeKind, VendorNode
from ..context import ExportContext, HtmlFragment
from ..markup import escape_attribute, ref_attribute
from ..styles import frame_styles

ConvertNode = Callable[[VendorNode, ExportContext], HtmlFragment]


@dataclass(frozen=True)
class VariantChoice:
    property: str
    tag_path: str
    value: str
    is_boolean: bool

    @property
    def condition(self) -> str:
        if self.is_boolean:
            return self.tag_path if self.value == "true" else f"!{self.tag_path}"
        return f"{self.tag_path} == {self.value}"


Permutation = Tuple[VariantChoice, ...]


def _is_real_value(value: Optional[str]) -> bool:
    return bool(value) and ":" not in value


def _resolve_variant_source(node: VendorNode, index: Mapping[str, VendorNode]) -> VendorNode:
    if node.variants or not node.main_component_id:
        return node
    return index.get(node.main_component_id, node)


def _collect_from_variants(
    variants: Sequence[VendorNode], bindings: Sequence[PropertyBinding]
) -> Dict[str, List[str]]:
    values: Dict[str, List[str]] = {}
    for variant in variants:
        for binding in bindings:
            value = (variant.variant_properties or {}).get(binding.property)
            if _is_real_value(value) and value not in values.get(binding.property, []):
                values.setdefault(binding.property, []).append(value)
    return values


def get_component_variant_values(
    node: VendorNode,
    bindings: Sequence[PropertyBinding],
    component_set_index: Mapping[str, VendorNode],
) -> Dict[str, List[str]]:
    """Map each bound property to its selectable values, in declaration order."""
    source = node
    if not node.component_property_definitions and not node.variants:
        source = _resolve_variant_source(node, component_set_index)

    values: Dict[str, List[str]] = {}
    for binding in bindings:
        definition = (source.component_property_definitions or {}).get(binding.property)
        if definition is None or definition.type != "VARIANT" or not definition.variant_options:
            continue
        options = [option for option in definition.variant_options if _is_real_value(option)]
        if options:
            values[binding.property] = options

    if not values and source.variants:
        values = _collect_from_variants(source.variants, bindings)
    if not values and source.kind is NodeKind.COMPONENT_SET:
        components = [child for child in source.children if child.kind is NodeKind.COMPONENT]
        values = _collect_from_variants(components, bindings)
    return values


def _is_boolean_variant(values: Sequence[str], binding: PropertyBinding) -> bool:
    return binding.contract_tag.is_boolean and sorted(values) == ["false", "true"]


def generate_permutations(
    property_values: Mapping[str, Sequence[str]], bindings: Sequence[PropertyBinding]
) -> List[Permutation]:
    """Cartesian product of the bound properties' values."""
    by_property = {binding.property: binding for binding in bindings}
    axes: List[List[VariantChoice]] = []
    for prop, values in property_values.items():
        binding = by_property.get(prop)
        if binding is None:
            return []
        is_boolean = _is_boolean_variant(values, binding)
        axes.append([VariantChoice(prop, binding.tag_path, value, is_boolean) for value in values])
    if not axes:
        return []
    return [tuple(choice) for choice in itertools.product(*axes)]


def _variant_candidates(node: VendorNode) -> List[VendorNode]:
    if node.variants:
        return list(node.variants)
    if node.kind is NodeKind.COMPONENT_SET:
        return [child for child in node.children if child.kind is NodeKind.COMPONENT]
    return []


def find_component_variant(
    node: VendorNode, permutation: Permutation
) -> Tuple[VendorNode, List[Diagnostic]]:
    """Component whose variant properties agree with ``permutation``; else the first one."""
    variants = _variant_candidates(node)
    if not variants:
        raise VariantSynthesisError(
            f'Node "{node.name}" has no variants array - cannot find variant component',
            node_id=node.id,
            node_name=node.name,
        )

    target = {choice.property: choice.value for choice in permutation}
    for variant in variants:
        props = variant.variant_properties or {}
        if all(props.get(prop) == value for prop, value in target.items()):
            return variant, []

    wanted = ", ".join(f"{prop}={value}" for prop, value in target.items())
    return variants[0], [
        warning(
            DiagnosticCode.VARIANT_NO_MATCH,
            f'No matching variant found for "{node.name}" with {wanted}; using first variant',
            node.id,
        )
    ]


def build_variant_condition(permutation: Permutation) -> str:
    return " && ".join(choice.condition for choice in permutation)


def convert_variant(
    node: VendorNode,
    analysis: BindingAnalysis,
    ctx: ExportContext,
    convert_node: ConvertNode,
) -> HtmlFragment:
    permutations = generate_permutations(
        get_component_variant_values(node, analysis.property_bindings, ctx.component_set_index),
        analysis.property_bindings,
    )
    if not permutations:
        raise VariantSynthesisError(
            f'No permutations generated for variant node "{node.name}" - check property definitions',
            node_id=node.id,
            node_name=node.name,
        )

    source = _resolve_variant_source(node, ctx.component_set_index)
    style = frame_styles(node, ctx)
    body = HtmlFragment(
        f'{ctx.indent}<div id="{escape_attribute(node.id)}" data-figma-id="{escape_attribute(node.id)}" data-figma-type="variant-container"'
        f'{ref_attribute(analysis)} style="{style}">\n'
    )

    for permutation in permutations:
        variant, diagnostics = find_component_variant(source, permutation)
        body += HtmlFragment(
            f'{ctx.indent_at(1)}<div if="{build_variant_condition(permutation)}">\n',
            diagnostics=tuple(diagnostics),
        )
        child_ctx = ctx.child_of(variant, 2)
        body += HtmlFragment.concat(convert_node(child, child_ctx) for child in variant.children)
        body += HtmlFragment(f"{ctx.indent_at(1)}</div>\n")

    return body + HtmlFragment(f"{ctx.indent}</div>\n")


__all__ = [
    "VariantChoice",
    "get_component_variant_values",
    "generate_permutations",
    "find_component_variant",
    "build_variant_condition",
    "convert_variant",
]
