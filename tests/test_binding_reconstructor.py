"""Tests for rebuilding bindings from Jay HTML elements."""

from jaybridge.bindings.models import LayerBinding, VariantExpressionBinding
from jaybridge.bindings.reconstructor import (
    bindings_for_text,
    extract_attribute_bindings,
    extract_bindings_from_element,
    extract_text_bindings,
    resolve_binding_path,
    variant_binding_id,
)
from jaybridge.diagnostics import DiagnosticCode
from jaybridge.dom import parse_html


def _element(markup: str):
    soup = parse_html(markup)
    return next(iter(soup.find_all(True)))


def test_extract_text_bindings_dedupes_in_order() -> None:
    assert extract_text_bindings("Hi {user.name}, ${count} left; {user.name}") == ["user.name", "count"]
    assert extract_text_bindings("{ }") == []


def test_extract_attribute_bindings() -> None:
    element = _element('<a href="{link}" title="static" alt="{ caption }"></a>')
    assert extract_attribute_bindings(element) == [("alt", "caption"), ("href", "link")]


def test_resolve_binding_path_inside_repeater(contract_tags) -> None:
    assert resolve_binding_path("name", contract_tags, [["items"]]).tag_path == ("items", "name")
    assert resolve_binding_path("items.price", contract_tags, [["items"]]).tag_path == ("items", "price")
    page_level = resolve_binding_path("title", contract_tags, [["items"]])
    assert page_level.resolved and page_level.tag_path == ("title",)


def test_resolve_binding_path_unresolved(contract_tags) -> None:
    result = resolve_binding_path("nope.deeper", contract_tags)
    assert not result.resolved
    assert result.tag_path == ("nope", "deeper")
    assert not resolve_binding_path("", contract_tags).resolved


def test_bindings_for_text(contract_tags, contract_path) -> None:
    bindings, warnings = bindings_for_text("{title} by {author}", contract_tags, "s1", contract_path, node_id="n1")
    assert [b.tag_path for b in bindings] == [("title",)]
    assert bindings[0].jay_page_section_id == "s1"
    [diagnostic] = warnings
    assert diagnostic.code is DiagnosticCode.BINDING_UNRESOLVED
    assert "{author}" in diagnostic.message
    assert diagnostic.node_id == "n1"


def test_element_bindings_in_order(contract_tags, contract_path) -> None:
    element = _element('<img ref="addToCart" src="{imageUrl}" alt="static" if="isOnSale"/>')
    bindings, warnings = extract_bindings_from_element(element, contract_tags, "s1", contract_path)
    assert warnings == []
    ref, src, variant = bindings
    assert isinstance(ref, LayerBinding) and ref.tag_path == ("addToCart",) and ref.attribute is None
    assert src.tag_path == ("imageUrl",) and src.attribute == "src"
    assert isinstance(variant, VariantExpressionBinding)
    assert variant.expression == "isOnSale"
    assert variant.id == variant_binding_id("isOnSale")


def test_text_placeholders_can_be_left_to_caller(contract_tags, contract_path) -> None:
    element = _element("<p>{title}</p>")
    bindings, _ = extract_bindings_from_element(element, contract_tags, "s1", contract_path, include_text=False)
    assert bindings == []
    bindings, _ = extract_bindings_from_element(element, contract_tags, "s1", contract_path)
    assert [b.tag_path for b in bindings] == [("title",)]


def test_dotted_ref_is_rejected(contract_tags, contract_path) -> None:
    element = _element('<button ref="items.remove"></button>')
    bindings, warnings = extract_bindings_from_element(element, contract_tags, "s1", contract_path)
    assert bindings == []
    assert [w.code for w in warnings] == [DiagnosticCode.BINDING_UNRESOLVED]


def test_for_each_binds_repeaters_only(contract_tags, contract_path) -> None:
    element = _element('<div forEach="items" trackBy="id"></div>')
    bindings, warnings = extract_bindings_from_element(element, contract_tags, "s1", contract_path)
    assert [b.tag_path for b in bindings] == [("items",)]
    assert warnings == []

    element = _element('<div forEach="title"></div>')
    bindings, warnings = extract_bindings_from_element(element, contract_tags, "s1", contract_path)
    assert bindings == []
    assert "as repeater" in warnings[0].message


def test_variant_binding_id_is_stable() -> None:
    assert variant_binding_id("a && b") == variant_binding_id("a && b")
    assert variant_binding_id("a && b").startswith("ve-")
    assert variant_binding_id("a") != variant_binding_id("b")
