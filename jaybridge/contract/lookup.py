"""Path lookups over contract tag trees."""

from __future__ import annotations

from typing import Optional, Sequence

from .models import ContractTag


def find_contract_tag(tags: Sequence[ContractTag], tag_path: Sequence[str]) -> Optional[ContractTag]:
    """Walk ``tag_path`` segment by segment through nested tags."""
    if not tag_path:
        return None
    head = next((tag for tag in tags if tag.tag == tag_path[0]), None)
    if head is None:
        return None
    if len(tag_path) == 1:
        return head
    if not head.tags:
        return None
    return find_contract_tag(head.tags, tag_path[1:])


def split_path(path: str) -> list[str]:
    return [segment for segment in path.strip().split(".") if segment]


def apply_repeater_context(path: str, repeater_stack: Sequence[Sequence[str]]) -> str:
    """Strip every active repeater prefix from a dotted ``path``, outermost first."""
    for repeater_path in repeater_stack:
        prefix = ".".join(repeater_path) + "."
        if path.startswith(prefix):
            path = path[len(prefix):]
    return path


__all__ = [
    "find_contract_tag",
    "split_path",
    "apply_repeater_context",
]
