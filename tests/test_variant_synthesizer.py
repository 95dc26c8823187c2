"""Tests for COMPONENT_SET and repeater synthesis on import."""

import pytest

from jaybridge.diagnostics import DiagnosticCode, DiagnosticSeverity
from jaybridge.dom import parse_html
from jaybridge.errors import VariantSynthesisError
from jaybridge.importer.ir import IRKind, ImportIRNode
from jaybridge.importer.synthesizer import (
    classify_dimensions,
    detect_variant_groups,
    synthesize_repeater,
    synthesize_variant,
    variant_properties_for_condition,
)
from jaybridge.style.model import LayoutMode


class _Builder:
    """Stands in for the tree builder and records what it was asked to build."""

    def __init__(self):
        self.built = []

    def __call__(self, element):
        self.built.append(element)
        return ImportIRNode(
            id=f"{element.name}-{len(self.built)}",
            source_path="test",
            kind=IRKind.FRAME,
            name=element.name,
            children=(ImportIRNode(id=f"leaf-{len(self.built)}", source_path="test", kind=IRKind.TEXT),),
        )


def _body(markup: str):
    return parse_html(f"<body>{markup}</body>").body


def test_detect_variant_groups_needs_consecutive_runs() -> None:
    body = _body('<p if="a">1</p><p if="!a">2</p><span>x</span><p if="b">3</p>')
    [group] = detect_variant_groups(body)
    assert len(group) == 2
    assert group.conditions == ("a", "!a")
    assert group.container_parent is body


def test_classify_enumerated_dimension() -> None:
    [dimension], warnings = classify_dimensions(["mediaType == IMAGE", "mediaType == VIDEO"])
    assert warnings == []
    assert dimension.name == "mediaType"
    assert dimension.values == ["IMAGE", "VIDEO"]
    assert not dimension.is_boolean


def test_classify_boolean_dimension() -> None:
    [dimension], _ = classify_dimensions(["product.isOnSale", "!product.isOnSale"])
    assert dimension.name == "isOnSale"
    assert dimension.tag_path == ("product", "isOnSale")
    assert dimension.is_boolean
    assert dimension.sorted_values == ("false", "true")


def test_computed_operands_are_skipped_with_warning() -> None:
    dimensions, warnings = classify_dimensions(["items.length > 0", "ready"])
    assert [d.name for d in dimensions] == ["ready"]
    assert [w.code for w in warnings] == [DiagnosticCode.VARIANT_SYNTHETIC_DIMENSION]


def test_ordering_comparisons_contribute_no_values() -> None:
    dimensions, _ = classify_dimensions(["count > 3", "count < 2"])
    assert dimensions == []


def test_variant_properties_for_condition() -> None:
    dimensions, _ = classify_dimensions(["mediaType == IMAGE && !isOnSale", "isOnSale"])
    assert variant_properties_for_condition("mediaType == IMAGE && !isOnSale", dimensions) == {
        "mediaType": "IMAGE",
        "isOnSale": "false",
    }
    assert variant_properties_for_condition("isOnSale", dimensions) == {"isOnSale": "true"}


def test_synthesize_enumerated_variant(contract_tags, contract_path) -> None:
    body = _body('<img if="mediaType == IMAGE"/><video if="mediaType == VIDEO"></video>')
    [group] = detect_variant_groups(body)
    builder = _Builder()
    result = synthesize_variant(group, body, contract_tags, "s1", contract_path, builder)

    component_set = result.component_set
    assert component_set.kind is IRKind.COMPONENT_SET
    assert component_set.name == "mediaType variants"
    assert component_set.component_property_definitions["mediaType"].variant_options == ("IMAGE", "VIDEO")
    assert [c.name for c in component_set.children] == ["mediaType=IMAGE", "mediaType=VIDEO"]
    assert [c.children[0].name for c in component_set.children] == ["img", "video"]
    assert all(c.kind is IRKind.COMPONENT for c in component_set.children)

    instance = result.instance
    assert instance.kind is IRKind.INSTANCE
    assert instance.main_component_id == component_set.children[0].id
    [binding] = instance.layer_bindings
    assert binding.property == "mediaType"
    assert binding.tag_path == ("mediaType",)
    assert result.warnings == ()


def test_unmatched_permutations_fall_back_to_first_member(contract_tags, contract_path) -> None:
    body = _body('<p if="mediaType == IMAGE && isOnSale">a</p><p if="mediaType == VIDEO && isOnSale">b</p>')
    [group] = detect_variant_groups(body)
    builder = _Builder()
    result = synthesize_variant(group, body, contract_tags, "s1", contract_path, builder)

    components = result.component_set.children
    assert [c.name for c in components] == [
        "mediaType=IMAGE, isOnSale=false",
        "mediaType=IMAGE, isOnSale=true",
        "mediaType=VIDEO, isOnSale=false",
        "mediaType=VIDEO, isOnSale=true",
    ]
    no_match = [w for w in result.warnings if w.code is DiagnosticCode.VARIANT_NO_MATCH]
    assert len(no_match) == 2
    assert all(w.severity is DiagnosticSeverity.INFO for w in no_match)
    assert len(builder.built) == 2

    ids = [node.id for component in components for node in component.walk()]
    assert len(ids) == len(set(ids))


def test_unresolved_dimension_warns(contract_tags, contract_path) -> None:
    body = _body('<p if="color == RED">r</p><p if="color == BLUE">b</p>')
    [group] = detect_variant_groups(body)
    result = synthesize_variant(group, body, contract_tags, "s1", contract_path, _Builder())
    assert result.instance.bindings == ()
    assert [w.code for w in result.warnings] == [DiagnosticCode.BINDING_UNRESOLVED]


def test_group_without_dimensions_raises(contract_tags, contract_path) -> None:
    body = _body('<p if="count > 3">a</p><p if="count < 2">b</p>')
    [group] = detect_variant_groups(body)
    with pytest.raises(VariantSynthesisError) as excinfo:
        synthesize_variant(group, body, contract_tags, "s1", contract_path, _Builder())
    assert excinfo.value.code == "VARIANT_NO_PERMUTATIONS"


def test_synthesize_repeater(contract_tags, contract_path) -> None:
    body = _body('<ul forEach="items" trackBy="id" style="gap: 4px"><li>{name}</li><li>x</li></ul>')
    builder = _Builder()
    result = synthesize_repeater(body.ul, body, contract_tags, "s1", contract_path, builder)
    frame = result.frame
    assert frame.kind is IRKind.FRAME
    assert frame.tag_name == "ul"
    assert frame.style.layout_mode is LayoutMode.COLUMN
    assert frame.style.gap == 4.0
    assert [b.tag_path for b in frame.layer_bindings] == [("items",)]
    assert len(frame.children) == 1
    assert [e.name for e in builder.built] == ["li"]


def test_repeater_keeps_round_trip_id_and_row_layout(contract_tags, contract_path) -> None:
    body = _body('<div forEach="items" trackBy="id" data-figma-id="3:1" style="display: flex"><span></span></div>')
    result = synthesize_repeater(body.div, body, contract_tags, "s1", contract_path, _Builder())
    assert result.frame.id == "3:1"
    assert result.frame.style.layout_mode is LayoutMode.ROW


def test_three_consecutive_conditionals_form_one_group() -> None:
    body = _body(
        '<p if="mediaType == IMAGE">a</p><p if="mediaType == VIDEO">b</p><p if="isOnSale">c</p><span>x</span>'
    )
    [group] = detect_variant_groups(body)
    assert len(group) == 3
    assert [e.get_text() for e in group.elements] == ["a", "b", "c"]


def test_member_selected_by_no_permutation_is_kept_with_warning(contract_tags, contract_path) -> None:
    body = _body('<p if="title != X">OTHER</p><p if="title == X">IS X</p>')
    [group] = detect_variant_groups(body)
    builder = _Builder()
    result = synthesize_variant(group, body, contract_tags, "s1", contract_path, builder)

    components = result.component_set.children
    assert [c.name for c in components] == ["title=X", "title != X"]
    assert components[1].variant_properties == {}
    assert [e.get_text() for e in builder.built] == ["IS X", "OTHER"]

    [unmatched] = result.warnings
    assert unmatched.code is DiagnosticCode.VARIANT_UNMATCHED_MEMBER
    assert unmatched.severity is DiagnosticSeverity.WARNING
    assert '"title != X"' in unmatched.message


def test_dimensions_sharing_a_leaf_use_full_paths(contract_tags, contract_path) -> None:
    dimensions, _ = classify_dimensions(["a.type == X", "b.type == Y", "kind == Z"])
    assert [d.name for d in dimensions] == ["a.type", "b.type", "kind"]

    body = _body('<p if="a.type == X">1</p><p if="b.type == Y">2</p>')
    [group] = detect_variant_groups(body)
    result = synthesize_variant(group, body, contract_tags, "s1", contract_path, _Builder())
    definitions = result.component_set.component_property_definitions
    assert set(definitions) == {"a.type", "b.type"}
    assert definitions["a.type"].variant_options == ("X",)
    assert definitions["b.type"].variant_options == ("Y",)
    assert result.component_set.children[0].variant_properties == {"a.type": "X", "b.type": "Y"}


def test_identical_groups_under_one_parent_get_distinct_ids(contract_tags, contract_path) -> None:
    body = _body(
        '<img if="mediaType == IMAGE"/><video if="mediaType == VIDEO"></video><hr/>'
        '<img if="mediaType == IMAGE"/><video if="mediaType == VIDEO"></video>'
    )
    first, second = (
        synthesize_variant(group, body, contract_tags, "s1", contract_path, _Builder())
        for group in detect_variant_groups(body)
    )
    assert first.component_set.id != second.component_set.id
    assert first.instance.id != second.instance.id
    assert {c.id for c in first.component_set.children}.isdisjoint(c.id for c in second.component_set.children)
