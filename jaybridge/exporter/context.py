"""Conversion context and output fragments for the export direction."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, ConverterConfig
from ..contract.models import Plugin, ProjectPage
from ..diagnostics import Diagnostic
from ..vendor.document import NodeKind, VendorNode


@dataclass(frozen=True)
class ExportContext:
    """Immutable per-call state; recursive calls receive derived copies."""

    project_page: ProjectPage
    plugins: Tuple[Plugin, ...] = ()
    config: ConverterConfig = DEFAULT_CONFIG
    repeater_path_stack: Tuple[Tuple[str, ...], ...] = ()
    indent_level: int = 0
    component_set_index: Mapping[str, VendorNode] = field(default_factory=dict, compare=False)
    parent_kind: Optional[NodeKind] = None
    parent_layout_mode: Optional[str] = None

    @property
    def indent(self) -> str:
        return self.config.indent * self.indent_level

    def indent_at(self, extra: int) -> str:
        return self.config.indent * (self.indent_level + extra)

    def child_of(self, parent: VendorNode, levels: int = 1) -> "ExportContext":
        """Context for the children of ``parent``, ``levels`` deeper."""
        return replace(
            self,
            indent_level=self.indent_level + levels,
            parent_kind=parent.kind,
            parent_layout_mode=parent.layout_mode or "NONE",
        )

    def with_repeater(self, tag_path: Sequence[str]) -> "ExportContext":
        return replace(self, repeater_path_stack=self.repeater_path_stack + (tuple(tag_path),))


@dataclass(frozen=True)
class HtmlFragment:
    """Rendered HTML plus what was collected while rendering it."""

    html: str = ""
    font_families: Tuple[str, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()

    def __add__(self, other: "HtmlFragment") -> "HtmlFragment":
        fonts = self.font_families + tuple(f for f in other.font_families if f not in self.font_families)
        return HtmlFragment(self.html + other.html, fonts, self.diagnostics + other.diagnostics)

    @classmethod
    def concat(cls, fragments: Iterable["HtmlFragment"]) -> "HtmlFragment":
        result = cls()
        for fragment in fragments:
            result = result + fragment
        return result


__all__ = ["ExportContext", "HtmlFragment"]
