"""
Tokenizer for conditional-rendering expressions (``if="..."``).

An expression such as ``mediaType == IMAGE && !isLoading`` is split into one
:class:`ConditionIdentifier` per top-level operand. Operands that cannot be
used as a variant dimension (ternaries, function calls, template literals,
``.length`` style accessors) are marked computed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

COMPARISON_OPS: Tuple[str, ...] = ("==", "!=", ">=", "<=", ">", "<")
JS_PROPERTIES = frozenset({"length", "size"})

_OPENERS = "([{"
_CLOSERS = ")]}"
_FUNCTION_CALL_RE = re.compile(r"[a-zA-Z_$][a-zA-Z0-9_$]*\s*\(")
_TEMPLATE_RE = re.compile(r"`[^`]*`|\$\{")


@dataclass(frozen=True)
class ConditionIdentifier:
    path: Tuple[str, ...]
    raw_expression: str
    operator: Optional[str] = None
    compared_value: Optional[str] = None
    is_negated: bool = False
    is_computed: bool = False

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def is_boolean(self) -> bool:
        """Bare or negated identifier with no comparison."""
        return self.operator is None and not self.is_computed and bool(self.path)


def _depth_delta(char: str) -> int:
    if char in _OPENERS:
        return 1
    if char in _CLOSERS:
        return -1
    return 0


def split_logical(expression: str) -> List[str]:
    """Split on ``&&`` / ``||`` at bracket depth zero."""
    text = expression.strip()
    if not text:
        return []
    parts: List[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(text):
        depth += _depth_delta(text[i])
        if depth == 0 and text.startswith(("&&", "||"), i):
            parts.append(text[start:i].strip())
            i += 2
            start = i
            continue
        i += 1
    parts.append(text[start:].strip())
    return parts


def strip_outer_parens(text: str) -> str:
    result = text.strip()
    while result.startswith("(") and result.endswith(")"):
        depth = 0
        balanced = True
        for char in result[1:-1]:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth < 0:
                    balanced = False
                    break
        if not (balanced and depth == 0):
            break
        result = result[1:-1].strip()
    return result


def _has_ternary(text: str) -> bool:
    depth = 0
    for char in text:
        depth += _depth_delta(char)
        if depth == 0 and char in "?:":
            return True
    return False


def _has_function_call(text: str) -> bool:
    return _FUNCTION_CALL_RE.search(text) is not None


def _has_template_literal(text: str) -> bool:
    return _TEMPLATE_RE.search(text) is not None


def _find_operator(text: str) -> Optional[Tuple[str, int]]:
    depth = 0
    for index, char in enumerate(text):
        depth += _depth_delta(char)
        if depth != 0:
            continue
        for op in COMPARISON_OPS:
            if text.startswith(op, index):
                if text[:index].strip() and text[index + len(op):].strip():
                    return op, index
    return None


def _parse_path(text: str) -> Tuple[str, ...]:
    return tuple(segment.strip() for segment in text.strip().split(".") if segment.strip())


def _has_js_property(path: Tuple[str, ...]) -> bool:
    return any(segment in JS_PROPERTIES for segment in path)


def _tokenize_term(term: str, raw: Optional[str] = None) -> ConditionIdentifier:
    raw_expression = raw if raw is not None else term
    text = strip_outer_parens(term)
    negated = False

    if text.startswith("!"):
        rest = text[1:].strip()
        if rest.startswith("("):
            inner = strip_outer_parens(rest)
            if "&&" not in inner and "||" not in inner:
                negated = True
                text = inner
        else:
            negated = True
            text = rest

    if _has_ternary(text) or _has_function_call(text) or _has_template_literal(text):
        return ConditionIdentifier(path=(), raw_expression=raw_expression, is_computed=True)

    found = _find_operator(text)
    if found is not None:
        op, index = found
        left = text[:index].strip()
        right = text[index + len(op):].strip()
        path = _parse_path(left)
        computed = (
            _has_js_property(path)
            or _has_function_call(left)
            or _has_template_literal(left)
            or _has_template_literal(right)
        )
        return ConditionIdentifier(
            path=path,
            raw_expression=raw_expression,
            operator=op,
            compared_value=right,
            is_negated=negated,
            is_computed=computed,
        )

    path = _parse_path(text)
    return ConditionIdentifier(
        path=path,
        raw_expression=raw_expression,
        is_negated=negated,
        is_computed=_has_js_property(path) or _has_function_call(text),
    )


def _tokenize(expression: str, original: Optional[str] = None) -> List[ConditionIdentifier]:
    text = expression.strip()
    if not text:
        return []
    parts = split_logical(text)
    use_original = original is not None and len(parts) == 1 and original.strip() == text

    result: List[ConditionIdentifier] = []
    for part in parts:
        if not part:
            continue
        inner_parts = split_logical(strip_outer_parens(part))
        if len(inner_parts) > 1:
            # (a || b) flattens into its operands
            for inner in inner_parts:
                if inner:
                    result.extend(_tokenize(inner))
        else:
            result.append(_tokenize_term(part, original if use_original else None))
    return result


def tokenize_condition(expression: str) -> List[ConditionIdentifier]:
    """Tokenize an ``if`` expression into identifiers, left to right."""
    if not expression or not expression.strip():
        return []
    return _tokenize(expression.strip(), expression)


__all__ = [
    "COMPARISON_OPS",
    "JS_PROPERTIES",
    "ConditionIdentifier",
    "split_logical",
    "strip_outer_parens",
    "tokenize_condition",
]
