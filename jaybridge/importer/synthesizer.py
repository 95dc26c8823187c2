"""
Synthesis of vendor-native constructs from flat Jay HTML markup.

Runs of sibling elements guarded by ``if`` become a COMPONENT_SET with one
COMPONENT per permutation of the condition dimensions, plus an INSTANCE that
binds each dimension to its contract tag. ``forEach`` elements become a FRAME
whose single child is the repeated template.
"""

from __future__ import annotations

import itertools
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from bs4 import Tag

from ..bindings.models import IRBinding, LayerBinding
from ..bindings.reconstructor import extract_bindings_from_element, resolve_binding_path
from ..conditions import tokenize_condition
from ..contract.models import ContractTag, PageContractPath
from ..diagnostics import Diagnostic, DiagnosticCode, DiagnosticSeverity, warning
from ..dom import element_children, non_empty_attribute
from ..errors import VariantSynthesisError
from ..ids import DEFAULT_HASH_LENGTH, build_dom_path, generate_node_id, get_semantic_anchors
from ..style.model import LayoutMode
from ..style.resolver import resolve_style
from .ir import IRKind, ImportIRNode, SYNTHESIZED_SOURCE, VariantPropertyDefinition

BuildChild = Callable[[Tag], ImportIRNode]


@dataclass(frozen=True)
class VariantGroup:
    elements: Tuple[Tag, ...]
    conditions: Tuple[str, ...]
    container_parent: Tag

    def __len__(self) -> int:
        return len(self.elements)


@dataclass
class Dimension:
    name: str
    tag_path: Tuple[str, ...]
    values: List[str] = field(default_factory=list)
    is_boolean: bool = False

    def add(self, value: str) -> None:
        if value not in self.values:
            self.values.append(value)

    @property
    def sorted_values(self) -> Tuple[str, ...]:
        return tuple(sorted(self.values))


@dataclass(frozen=True)
class SynthesizedVariant:
    component_set: ImportIRNode
    instance: ImportIRNode
    warnings: Tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class SynthesizedRepeater:
    frame: ImportIRNode
    warnings: Tuple[Diagnostic, ...] = ()


def detect_variant_groups(parent: Tag) -> List[VariantGroup]:
    """Runs of two or more consecutive element children carrying ``if``."""
    groups: List[VariantGroup] = []
    elements: List[Tag] = []
    conditions: List[str] = []

    def flush() -> None:
        if len(elements) >= 2:
            groups.append(VariantGroup(tuple(elements), tuple(conditions), parent))
        elements.clear()
        conditions.clear()

    for child in element_children(parent):
        condition = non_empty_attribute(child, "if")
        if condition is None:
            flush()
            continue
        elements.append(child)
        conditions.append(condition)
    flush()
    return groups


def classify_dimensions(conditions: Sequence[str]) -> Tuple[List[Dimension], List[Diagnostic]]:
    """One dimension per distinct identifier path across ``conditions``.

    ``==`` comparisons contribute enumerated literals; bare or negated paths
    make the dimension boolean. Computed operands are reported and skipped.
    Dimensions are named by their last path segment unless two of them share
    it, in which case both use the full dotted path.
    """
    warnings: List[Diagnostic] = []
    dimensions: Dict[str, Dimension] = {}

    for condition in conditions:
        for token in tokenize_condition(condition):
            if token.is_computed:
                warnings.append(
                    warning(
                        DiagnosticCode.VARIANT_SYNTHETIC_DIMENSION,
                        f'Computed expression "{token.raw_expression}" used as variant dimension',
                    )
                )
                continue
            if not token.path:
                continue
            key = token.dotted_path
            dimension = dimensions.get(key)
            if dimension is None:
                dimension = dimensions[key] = Dimension(name=token.path[-1], tag_path=token.path)
            if token.operator == "==" and token.compared_value is not None:
                dimension.add(token.compared_value)
            elif token.is_negated or token.operator is None:
                dimension.is_boolean = True
                dimension.add("true")
                dimension.add("false")
    result = [dimension for dimension in dimensions.values() if dimension.values]
    leaf_counts = Counter(dimension.name for dimension in result)
    for dimension in result:
        if leaf_counts[dimension.name] > 1:
            dimension.name = ".".join(dimension.tag_path)
    return result, warnings


def variant_properties_for_condition(condition: str, dimensions: Sequence[Dimension]) -> Dict[str, str]:
    """The ``property -> value`` assignment a single ``if`` expression selects."""
    tokens = tokenize_condition(condition)
    result: Dict[str, str] = {}
    for dimension in dimensions:
        token = next((t for t in tokens if t.path == dimension.tag_path and not t.is_computed), None)
        if token is None:
            continue
        if token.operator == "==" and token.compared_value is not None:
            result[dimension.name] = token.compared_value
        elif token.operator is None:
            result[dimension.name] = "false" if token.is_negated else "true"
    return result


def _variant_name(assignment: Dict[str, str]) -> str:
    return ", ".join(f"{key}={value}" for key, value in assignment.items())


def _matching_member(assignment: Dict[str, str], member_properties: Sequence[Dict[str, str]]) -> Optional[int]:
    for index, properties in enumerate(member_properties):
        if properties and all(assignment.get(key) == value for key, value in properties.items()):
            return index
    return None


def _reidentify(node: ImportIRNode, salt: str, length: int) -> ImportIRNode:
    return replace(
        node,
        id=generate_node_id(f"{salt}/{node.id}", length=length),
        children=tuple(_reidentify(child, salt, length) for child in node.children),
    )


def synthesize_variant(
    group: VariantGroup,
    root: Tag,
    contract_tags: Sequence[ContractTag],
    section_id: str,
    contract_path: PageContractPath,
    build_child: BuildChild,
    *,
    repeater_context: Sequence[Sequence[str]] = (),
    id_length: int = DEFAULT_HASH_LENGTH,
) -> SynthesizedVariant:
    """Build the COMPONENT_SET and INSTANCE for one variant group."""
    dimensions, warnings = classify_dimensions(group.conditions)
    if not dimensions:
        raise VariantSynthesisError(
            f"Variant group with conditions {list(group.conditions)} yields no permutations",
            path=build_dom_path(group.container_parent, root),
            hint="Use identifier comparisons (a == X) or boolean paths in sibling if attributes.",
        )

    member_properties = [variant_properties_for_condition(c, dimensions) for c in group.conditions]
    built: Dict[int, ImportIRNode] = {}

    components: List[ImportIRNode] = []
    for values in itertools.product(*(d.sorted_values for d in dimensions)):
        assignment = {d.name: value for d, value in zip(dimensions, values)}
        name = _variant_name(assignment)
        member = _matching_member(assignment, member_properties)
        if member is None:
            member = 0
            warnings.append(
                Diagnostic(
                    code=DiagnosticCode.VARIANT_NO_MATCH,
                    message=f"No conditional element matches {name}; using the first",
                    severity=DiagnosticSeverity.INFO,
                )
            )
        element = group.elements[member]
        component_id = generate_node_id(
            build_dom_path(element, root),
            ["variant", group.conditions[member], name, *get_semantic_anchors(element)],
            length=id_length,
        )
        if member in built:
            child = _reidentify(built[member], component_id, id_length)
        else:
            child = built[member] = build_child(element)
        components.append(
            ImportIRNode(
                id=component_id,
                source_path=SYNTHESIZED_SOURCE,
                kind=IRKind.COMPONENT,
                name=name,
                variant_properties=assignment,
                children=(child,),
            )
        )

    for index, element in enumerate(group.elements):
        if index in built:
            continue
        condition = group.conditions[index]
        warnings.append(
            warning(
                DiagnosticCode.VARIANT_UNMATCHED_MEMBER,
                f'Conditional element "{condition}" is not selected by any variant permutation; kept as an unselectable variant',
            )
        )
        components.append(
            ImportIRNode(
                id=generate_node_id(build_dom_path(element, root), ["variant-unmatched", condition], length=id_length),
                source_path=SYNTHESIZED_SOURCE,
                kind=IRKind.COMPONENT,
                name=condition,
                variant_properties=member_properties[index],
                children=(build_child(element),),
            )
        )

    dimension_names = ", ".join(d.name for d in dimensions)
    set_name = f"{dimension_names} variants"
    anchor_path = build_dom_path(group.elements[0], root)
    component_set = ImportIRNode(
        id=generate_node_id(anchor_path, ["variant-set", *group.conditions], length=id_length),
        source_path=SYNTHESIZED_SOURCE,
        kind=IRKind.COMPONENT_SET,
        name=set_name,
        component_property_definitions={
            d.name: VariantPropertyDefinition(variant_options=d.sorted_values) for d in dimensions
        },
        children=tuple(components),
    )

    instance_bindings: List[IRBinding] = []
    for dimension in dimensions:
        resolved = resolve_binding_path(".".join(dimension.tag_path), contract_tags, repeater_context)
        if resolved.resolved:
            instance_bindings.append(
                LayerBinding(
                    page_contract_path=contract_path,
                    jay_page_section_id=section_id,
                    tag_path=resolved.tag_path,
                    property=dimension.name,
                )
            )
        else:
            warnings.append(
                warning(
                    DiagnosticCode.BINDING_UNRESOLVED,
                    f"Could not resolve '{'.'.join(dimension.tag_path)}' against contract",
                )
            )

    instance = ImportIRNode(
        id=generate_node_id(anchor_path, ["variant-instance", *group.conditions], length=id_length),
        source_path=SYNTHESIZED_SOURCE,
        kind=IRKind.INSTANCE,
        name=set_name,
        main_component_id=components[0].id,
        bindings=tuple(instance_bindings),
    )
    return SynthesizedVariant(component_set, instance, tuple(warnings))


def synthesize_repeater(
    element: Tag,
    root: Tag,
    contract_tags: Sequence[ContractTag],
    section_id: str,
    contract_path: PageContractPath,
    build_child: BuildChild,
    *,
    repeater_context: Sequence[Sequence[str]] = (),
    id_length: int = DEFAULT_HASH_LENGTH,
) -> SynthesizedRepeater:
    """Build a FRAME carrying the repeater binding with the first child as template."""
    for_each = non_empty_attribute(element, "forEach") or ""
    track_by = non_empty_attribute(element, "trackBy") or ""
    frame_id = generate_node_id(
        build_dom_path(element, root),
        ["repeater", for_each, track_by, *get_semantic_anchors(element)],
        non_empty_attribute(element, "data-figma-id"),
        length=id_length,
    )

    bindings, warnings = extract_bindings_from_element(
        element, contract_tags, section_id, contract_path, repeater_context, node_id=frame_id
    )
    style, style_warnings = resolve_style(non_empty_attribute(element, "style") or "")
    warnings.extend(style_warnings)
    if style.layout_mode in (None, LayoutMode.NONE):
        style = replace(style, layout_mode=LayoutMode.COLUMN)

    children = element_children(element)
    template = (build_child(children[0]),) if children else ()

    frame = ImportIRNode(
        id=frame_id,
        source_path=SYNTHESIZED_SOURCE,
        kind=IRKind.FRAME,
        name=element.name or "div",
        tag_name=element.name,
        style=style,
        bindings=tuple(b for b in bindings if isinstance(b, LayerBinding)),
        children=template,
    )
    return SynthesizedRepeater(frame, tuple(warnings))


__all__ = [
    "VariantGroup",
    "Dimension",
    "SynthesizedVariant",
    "SynthesizedRepeater",
    "detect_variant_groups",
    "classify_dimensions",
    "variant_properties_for_condition",
    "synthesize_variant",
    "synthesize_repeater",
]
