"""Tests for semantic round-trip comparison of Jay HTML documents."""

from jaybridge.compare import (
    InvariantSeverity,
    compare_semantic_equivalence,
    extract_attribute_bindings,
    extract_refs,
    extract_significant_text,
    extract_text_bindings,
    max_depth,
    normalize_html,
)
from jaybridge.dom import parse_html

SOURCE = """
<body>
  <div ref="buy">
    <span>{title}</span>
    <img src="{imageUrl}" alt="Product">
    <p>Welcome to our store, {user.name}!</p>
    <p>ok</p>
  </div>
</body>
"""


def test_normalize_html_is_canonical() -> None:
    markup = (
        '<div title="" data-figma-id="1:2" style="width: 10px;  color:red" id="3:4">'
        '<!-- note --><img src="a.png">  Hello   world </div>'
    )
    assert normalize_html(markup) == "\n".join(
        [
            '<div style="color: red; width: 10px">',
            '  <img src="a.png"/>',
            "  Hello world",
            "</div>",
        ]
    )


def test_normalize_keeps_non_vendor_ids() -> None:
    assert normalize_html('<section id="main" data-page-url="/"></section>') == (
        '<section data-page-url="/" id="main">\n</section>'
    )


def test_extractors() -> None:
    root = parse_html(SOURCE).body
    assert extract_refs(root) == ["buy"]
    assert extract_text_bindings(root) == ["title", "user.name"]
    assert extract_attribute_bindings(root) == ["imageUrl"]
    assert extract_significant_text(root) == ["Welcome to our store,"]
    assert max_depth(root) == 2


def test_equivalent_documents_with_different_wrappers() -> None:
    exported = """
    <section data-figma-id="1:1">
      <div data-figma-id="1:2" style="display: flex">
        <button ref="buy" data-figma-id="2:2">
          <div>{title}</div>
        </button>
        <img data-figma-id="5:1" src="{imageUrl}" alt="Hero" />
        <div>Welcome to our store, {user.name}!</div>
      </div>
    </section>
    """
    comparison = compare_semantic_equivalence(SOURCE, exported)
    assert comparison.equivalent
    assert comparison.failures == []
    names = [result.name for result in comparison.invariant_results]
    assert names == [
        'ref="buy"',
        "text binding {title}",
        "text binding {user.name}",
        "attr binding {imageUrl}",
        'static text "Welcome to our store,"',
        "nesting depth",
    ]
    assert comparison.normalized_source.startswith('<div ref="buy">')


def test_missing_ref_and_binding_fail() -> None:
    comparison = compare_semantic_equivalence(SOURCE, "<div><span>Welcome to our store, {user.name}!</span></div>")
    assert not comparison.equivalent
    failed = {result.name: result.details for result in comparison.failures}
    assert failed['ref="buy"'] == "ref missing from output"
    assert failed["text binding {title}"] == "binding missing from output"
    assert failed["attr binding {imageUrl}"] == "binding missing from output"
    assert all(result.severity is InvariantSeverity.HARD_FAIL for result in comparison.failures)


def test_text_binding_may_move_to_an_attribute() -> None:
    comparison = compare_semantic_equivalence("<p>{title}</p>", '<input value="{title}">')
    assert comparison.equivalent


def test_depth_drift_only_warns() -> None:
    deep = "<div>" * 6 + "<p>Hello there</p>" + "</div>" * 6
    comparison = compare_semantic_equivalence("<p>Hello there</p>", deep)
    assert comparison.equivalent
    [depth] = comparison.failures
    assert depth.name == "nesting depth"
    assert depth.severity is InvariantSeverity.WARN
    assert depth.details == "depth differs by 6"


def test_long_text_labels_are_truncated() -> None:
    text = "A very long paragraph that keeps going and going"
    comparison = compare_semantic_equivalence(f"<p>{text}</p>", "<p>nothing</p>")
    [failure] = comparison.failures
    assert failure.name == f'static text "{text[:30]}..."'
