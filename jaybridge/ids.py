"""Deterministic, content-addressed ids for imported nodes."""

from __future__ import annotations

import hashlib
from typing import Iterable, List, Optional

from bs4 import Tag

from .dom import element_children, non_empty_attribute

ROUND_TRIP_ID_ATTRIBUTE = "data-figma-id"
DEFAULT_HASH_LENGTH = 16

_ANCHOR_ATTRIBUTES = ("id", "ref", "class", "data-testid")


def build_dom_path(element: Tag, root: Tag) -> str:
    """Element-only sibling indices from ``root`` down to ``element``.

    ``<body><div/><main><p/></main></body>`` gives ``body/1/0`` for the ``p``.
    """
    indices: List[str] = []
    current: Optional[Tag] = element
    while current is not None and current is not root:
        parent = current.parent
        if parent is None:
            break
        siblings = element_children(parent)
        index = next(i for i, sibling in enumerate(siblings) if sibling is current)
        indices.append(str(index))
        current = parent
    root_name = root.name or "root"
    return "/".join([root_name, *reversed(indices)])


def get_semantic_anchors(element: Tag) -> List[str]:
    """``id:``, ``ref:``, ``class:`` and ``data-testid:`` anchors present on ``element``."""
    anchors: List[str] = []
    for attribute in _ANCHOR_ATTRIBUTES:
        value = non_empty_attribute(element, attribute)
        if value:
            anchors.append(f"{attribute}:{value}")
    return anchors


def generate_node_id(
    dom_path: str,
    anchors: Iterable[str] = (),
    existing_id: Optional[str] = None,
    *,
    length: int = DEFAULT_HASH_LENGTH,
) -> str:
    """Return ``existing_id`` unchanged, or hash the path with sorted anchors."""
    if existing_id:
        return existing_id
    seed = "|".join([dom_path, *sorted(anchors)])
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:length]


def existing_round_trip_id(element: Tag) -> Optional[str]:
    return non_empty_attribute(element, ROUND_TRIP_ID_ATTRIBUTE)


__all__ = [
    "ROUND_TRIP_ID_ATTRIBUTE",
    "DEFAULT_HASH_LENGTH",
    "build_dom_path",
    "get_semantic_anchors",
    "generate_node_id",
    "existing_round_trip_id",
]
