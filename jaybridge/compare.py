"""
Semantic comparison of two Jay HTML documents for round-trip testing.

Both sides are normalized first: comments, design-tool ids, empty attributes
and insignificant whitespace are dropped, attributes and style declarations
are sorted, and void elements are rendered one way. Equivalence is then
judged by invariants rather than byte equality: every ref, text binding,
attribute binding and piece of significant static text in the source must
survive in the output, and nesting depth should not drift far.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .dom import HTML_PARSER

DESIGN_ID_ATTRIBUTES = ("data-figma-id", "data-figma-type")
BINDABLE_ATTRIBUTES = ("src", "alt", "href", "value", "placeholder")
VOID_ELEMENTS = frozenset({"br", "img", "input", "hr", "meta", "link"})
MAX_DEPTH_DELTA = 2
MIN_SIGNIFICANT_TEXT = 4

_VENDOR_ID_RE = re.compile(r"^\d+:\d+$")
_BINDING_RE = re.compile(r"\{([^}]+)\}")
_WHITESPACE_RE = re.compile(r"\s+")


class InvariantSeverity(str, Enum):
    HARD_FAIL = "HARD_FAIL"
    WARN = "WARN"


@dataclass(frozen=True)
class InvariantResult:
    name: str
    passed: bool
    severity: InvariantSeverity = InvariantSeverity.HARD_FAIL
    details: str = ""


@dataclass(frozen=True)
class SemanticComparison:
    equivalent: bool
    invariant_results: Tuple[InvariantResult, ...] = field(default_factory=tuple)
    normalized_source: str = ""
    normalized_actual: str = ""

    @property
    def failures(self) -> List[InvariantResult]:
        return [result for result in self.invariant_results if not result.passed]


# ============================================================================
# Normalization
# ============================================================================


def _normalize_style(value: str) -> str:
    declarations = []
    for part in value.split(";"):
        prop, sep, val = part.partition(":")
        if sep and prop.strip():
            declarations.append((prop.strip(), _WHITESPACE_RE.sub(" ", val.strip())))
    return "; ".join(f"{prop}: {val}" for prop, val in sorted(declarations))


def _attribute_items(tag: Tag) -> List[Tuple[str, str]]:
    items = []
    for name, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        value = str(value)
        if name in DESIGN_ID_ATTRIBUTES or value == "":
            continue
        if name == "id" and _VENDOR_ID_RE.match(value):
            continue
        if name == "style":
            value = _normalize_style(value)
        items.append((name, value))
    return sorted(items)


def _render(tag: Tag, depth: int, lines: List[str]) -> None:
    attrs = "".join(f' {name}="{value}"' for name, value in _attribute_items(tag))
    indent = "  " * depth
    if tag.name in VOID_ELEMENTS:
        lines.append(f"{indent}<{tag.name}{attrs}/>")
        return
    lines.append(f"{indent}<{tag.name}{attrs}>")
    for child in tag.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, Tag):
            _render(child, depth + 1, lines)
        elif isinstance(child, NavigableString):
            text = _WHITESPACE_RE.sub(" ", str(child)).strip()
            if text:
                lines.append(f"{indent}  {text}")
    lines.append(f"{indent}</{tag.name}>")


def _content_root(markup: str) -> Tag:
    soup = BeautifulSoup(markup, HTML_PARSER)
    body = soup.find("body")
    return body if isinstance(body, Tag) else soup


def normalize_html(markup: str) -> str:
    """Canonical text form of a document's body."""
    root = _content_root(markup)
    lines: List[str] = []
    for child in root.children:
        if isinstance(child, Tag):
            _render(child, 0, lines)
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            text = _WHITESPACE_RE.sub(" ", str(child)).strip()
            if text:
                lines.append(text)
    return "\n".join(lines)


# ============================================================================
# Extraction
# ============================================================================


def _elements(root: Tag) -> Iterator[Tag]:
    yield from root.find_all(True)


def _text_nodes(root: Tag) -> Iterator[str]:
    for node in root.find_all(string=True):
        if isinstance(node, Comment) or node.parent is None or node.parent.name in ("script", "style"):
            continue
        text = _WHITESPACE_RE.sub(" ", str(node)).strip()
        if text:
            yield text


def _unique(values: Iterator[str]) -> List[str]:
    return list(dict.fromkeys(values))


def extract_refs(root: Tag) -> List[str]:
    return _unique(str(tag["ref"]) for tag in _elements(root) if tag.get("ref"))


def extract_text_bindings(root: Tag) -> List[str]:
    return _unique(match for text in _text_nodes(root) for match in _BINDING_RE.findall(text))


def extract_attribute_bindings(root: Tag) -> List[str]:
    def bound() -> Iterator[str]:
        for tag in _elements(root):
            for attribute in BINDABLE_ATTRIBUTES:
                value = tag.get(attribute)
                if isinstance(value, str):
                    yield from _BINDING_RE.findall(value)

    return _unique(bound())


def extract_significant_text(root: Tag) -> List[str]:
    """Static text runs long enough to be meaningful, with bindings cut out."""

    def runs() -> Iterator[str]:
        for text in _text_nodes(root):
            for part in _BINDING_RE.split(text)[::2]:
                part = part.strip()
                if len(part) >= MIN_SIGNIFICANT_TEXT:
                    yield part

    return _unique(runs())


def max_depth(root: Tag) -> int:
    def depth(tag: Tag) -> int:
        children = [child for child in tag.children if isinstance(child, Tag)]
        return 1 + max((depth(child) for child in children), default=0)

    return max((depth(child) for child in root.children if isinstance(child, Tag)), default=0)


# ============================================================================
# Comparison
# ============================================================================


def compare_semantic_equivalence(source_html: str, exported_html: str) -> SemanticComparison:
    """Check that ``exported_html`` preserves the bindings and text of ``source_html``."""
    source = _content_root(source_html)
    actual = _content_root(exported_html)
    results: List[InvariantResult] = []

    actual_refs = set(extract_refs(actual))
    for ref in extract_refs(source):
        passed = ref in actual_refs
        results.append(InvariantResult(f'ref="{ref}"', passed, details="" if passed else "ref missing from output"))

    actual_bindings = set(extract_text_bindings(actual)) | set(extract_attribute_bindings(actual))
    for path in extract_text_bindings(source):
        passed = path in actual_bindings
        results.append(
            InvariantResult(f"text binding {{{path}}}", passed, details="" if passed else "binding missing from output")
        )
    for path in extract_attribute_bindings(source):
        passed = path in actual_bindings
        results.append(
            InvariantResult(f"attr binding {{{path}}}", passed, details="" if passed else "binding missing from output")
        )

    actual_text = " ".join(_text_nodes(actual))
    for text in extract_significant_text(source):
        passed = text in actual_text
        label = text if len(text) <= 30 else f"{text[:30]}..."
        results.append(
            InvariantResult(f'static text "{label}"', passed, details="" if passed else "text missing from output")
        )

    delta = abs(max_depth(source) - max_depth(actual))
    results.append(
        InvariantResult(
            "nesting depth",
            delta <= MAX_DEPTH_DELTA,
            InvariantSeverity.WARN,
            f"depth differs by {delta}",
        )
    )

    equivalent = all(r.passed for r in results if r.severity is InvariantSeverity.HARD_FAIL)
    return SemanticComparison(
        equivalent=equivalent,
        invariant_results=tuple(results),
        normalized_source=normalize_html(source_html),
        normalized_actual=normalize_html(exported_html),
    )


__all__ = [
    "InvariantSeverity",
    "InvariantResult",
    "SemanticComparison",
    "normalize_html",
    "extract_refs",
    "extract_text_bindings",
    "extract_attribute_bindings",
    "extract_significant_text",
    "max_depth",
    "compare_semantic_equivalence",
]
