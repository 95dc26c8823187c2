"""
Import IR: the vendor-agnostic tree between parsed Jay HTML and the vendor
document adapter.

Nodes are built fresh on every import and never mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from ..bindings.models import IRBinding, LayerBinding
from ..contract.models import Contract, UsedComponent
from ..diagnostics import Diagnostic
from ..style.model import ImportIRStyle

IMPORT_IR_VERSION = "import-ir/v0"
SYNTHESIZED_SOURCE = "variant-synthesizer"


class IRKind(str, Enum):
    SECTION = "SECTION"
    FRAME = "FRAME"
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"


@dataclass(frozen=True)
class TextPayload:
    characters: str


@dataclass(frozen=True)
class ImagePayload:
    src: Optional[str] = None
    alt: Optional[str] = None


@dataclass(frozen=True)
class VariantPropertyDefinition:
    variant_options: Tuple[str, ...]
    type: str = "VARIANT"


@dataclass(frozen=True)
class ImportIRNode:
    id: str
    source_path: str
    kind: IRKind
    name: str = ""
    tag_name: Optional[str] = None
    visible: bool = True
    style: ImportIRStyle = field(default_factory=ImportIRStyle)
    text: Optional[TextPayload] = None
    image: Optional[ImagePayload] = None
    bindings: Tuple[IRBinding, ...] = ()
    children: Tuple["ImportIRNode", ...] = ()
    variant_properties: Optional[Dict[str, str]] = None
    component_property_definitions: Optional[Dict[str, VariantPropertyDefinition]] = None
    main_component_id: Optional[str] = None

    @property
    def layer_bindings(self) -> List[LayerBinding]:
        return [binding for binding in self.bindings if isinstance(binding, LayerBinding)]

    def walk(self) -> Iterator["ImportIRNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class ImportSource:
    kind: str
    file_path: str
    content_hash: str


@dataclass(frozen=True)
class HeadlessImport:
    """A ``<script type="application/jay-headless">`` declaration."""

    plugin: str
    contract: str
    key: str

    def as_used_component(self) -> UsedComponent:
        return UsedComponent(plugin=self.plugin, component_name=self.contract, key=self.key)


@dataclass(frozen=True)
class ImportIRDocument:
    page_name: str
    route: str
    source: ImportSource
    root: ImportIRNode
    page_contract: Optional[Contract] = None
    headless_imports: Tuple[HeadlessImport, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()
    version: str = IMPORT_IR_VERSION


__all__ = [
    "IMPORT_IR_VERSION",
    "SYNTHESIZED_SOURCE",
    "IRKind",
    "TextPayload",
    "ImagePayload",
    "VariantPropertyDefinition",
    "ImportIRNode",
    "ImportSource",
    "HeadlessImport",
    "ImportIRDocument",
]
