"""Binding records stored on vendor nodes and carried by the Import IR."""

from __future__ import annotations

import builtins
import json
from typing import Any, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..contract.models import PageContractPath
from ..diagnostics import Diagnostic, DiagnosticCode, warning
from ..vendor.metadata import LAYER_BINDINGS_KEY


class _BindingModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LayerBinding(_BindingModel):
    """Associates one UI position with one contract tag path."""

    page_contract_path: PageContractPath = Field(default_factory=PageContractPath)
    jay_page_section_id: str
    tag_path: Tuple[str, ...]
    attribute: Optional[str] = None
    property: Optional[str] = None

    @builtins.property
    def dotted_path(self) -> str:
        return ".".join(self.tag_path)


class VariantExpressionBinding(_BindingModel):
    """An ``if`` expression kept verbatim with its resolved references."""

    id: str
    expression: str
    references: Tuple[str, ...] = ()


IRBinding = Union[LayerBinding, VariantExpressionBinding]


def serialize_layer_bindings(bindings: Sequence[LayerBinding]) -> str:
    """JSON array text stored under the ``jay-layer-bindings`` metadata key."""
    payload = [binding.model_dump(by_alias=True, exclude_none=True, mode="json") for binding in bindings]
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def parse_layer_bindings(raw: Optional[str], node_id: Optional[str] = None) -> Tuple[List[LayerBinding], List[Diagnostic]]:
    """Decode a serialized bindings array; malformed input yields a warning."""
    if not raw:
        return [], []
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        return [], [warning(DiagnosticCode.BINDINGS_MALFORMED, f"{LAYER_BINDINGS_KEY} is not valid JSON: {exc}", node_id)]
    if not isinstance(data, list):
        return [], [warning(DiagnosticCode.BINDINGS_MALFORMED, f"{LAYER_BINDINGS_KEY} must be a JSON array", node_id)]

    bindings: List[LayerBinding] = []
    diagnostics: List[Diagnostic] = []
    for index, entry in enumerate(data):
        try:
            bindings.append(LayerBinding.model_validate(entry))
        except ValidationError as exc:
            diagnostics.append(
                warning(
                    DiagnosticCode.BINDINGS_MALFORMED,
                    f"Skipping binding #{index}: {exc.errors()[0]['msg']}",
                    node_id,
                )
            )
    return bindings, diagnostics


__all__ = [
    "LayerBinding",
    "VariantExpressionBinding",
    "IRBinding",
    "serialize_layer_bindings",
    "parse_layer_bindings",
]
