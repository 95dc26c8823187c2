"""
Contract models supplied by the surrounding system.

A contract is a tree of typed, named bindable points (tags) that a page or a
headless plugin component exposes. These models are read-only to the
converter: they are validated on the way in and never mutated.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_ENUM_RE = re.compile(r"^\s*enum\s*\((.*)\)\s*$", re.IGNORECASE)


class ContractTagType(str, Enum):
    """Kinds of bindable point a contract tag can represent."""
    DATA = "data"
    INTERACTIVE = "interactive"
    VARIANT = "variant"
    SUB_CONTRACT = "subContract"


_TYPE_ALIASES = {
    "data": ContractTagType.DATA,
    "interactive": ContractTagType.INTERACTIVE,
    "variant": ContractTagType.VARIANT,
    "subContract": ContractTagType.SUB_CONTRACT,
    "sub-contract": ContractTagType.SUB_CONTRACT,
    "subcontract": ContractTagType.SUB_CONTRACT,
}


def parse_tag_type(value: Any) -> ContractTagType:
    if isinstance(value, ContractTagType):
        return value
    text = str(value).strip()
    if text in _TYPE_ALIASES:
        return _TYPE_ALIASES[text]
    raise ValueError(f"unknown contract tag type '{text}'")


def parse_enum_values(data_type: Optional[str]) -> Tuple[str, ...]:
    """Return the members of an ``enum (A | B)`` data type, or ``()``."""
    if not data_type:
        return ()
    match = _ENUM_RE.match(data_type)
    if not match:
        return ()
    return tuple(part.strip() for part in match.group(1).split("|") if part.strip())


class _ContractModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class ContractTag(_ContractModel):
    """A single node of a contract tree."""

    tag: str
    types: Tuple[ContractTagType, ...] = Field(
        default=(ContractTagType.DATA,), validation_alias=AliasChoices("type", "types"), serialization_alias="type"
    )
    data_type: Optional[str] = Field(default=None, alias="dataType")
    element_type: Optional[str] = Field(default=None, alias="elementType")
    required: Optional[bool] = None
    repeated: bool = False
    track_by: Optional[str] = Field(default=None, alias="trackBy")
    phase: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple["ContractTag", ...] = ()

    @field_validator("types", mode="before")
    @classmethod
    def _normalize_types(cls, value: Any) -> Tuple[ContractTagType, ...]:
        if value is None:
            return (ContractTagType.DATA,)
        if isinstance(value, (list, tuple)):
            return tuple(parse_tag_type(item) for item in value)
        return (parse_tag_type(value),)

    @field_validator("data_type", mode="before")
    @classmethod
    def _stringify_data_type(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @property
    def is_data(self) -> bool:
        return ContractTagType.DATA in self.types

    @property
    def is_interactive(self) -> bool:
        return ContractTagType.INTERACTIVE in self.types

    @property
    def is_dual(self) -> bool:
        return self.is_data and self.is_interactive

    @property
    def is_variant(self) -> bool:
        return ContractTagType.VARIANT in self.types

    @property
    def is_repeater(self) -> bool:
        return self.repeated

    @property
    def is_boolean(self) -> bool:
        return (self.data_type or "").strip().lower() == "boolean"

    @property
    def enum_values(self) -> Tuple[str, ...]:
        return parse_enum_values(self.data_type)


class Contract(_ContractModel):
    name: str = ""
    tags: Tuple[ContractTag, ...] = ()


class PageContractPath(_ContractModel):
    """Identifies which contract a binding's tag path belongs to."""

    page_url: Optional[str] = Field(default=None, alias="pageUrl")
    plugin_name: Optional[str] = Field(default=None, alias="pluginName")
    component_name: Optional[str] = Field(default=None, alias="componentName")

    @property
    def is_plugin_contract(self) -> bool:
        return bool(self.plugin_name and self.component_name)


class UsedComponent(_ContractModel):
    """A headless plugin component instantiated on a page under ``key``."""

    plugin: Optional[str] = None
    component_name: str = Field(
        validation_alias=AliasChoices("componentName", "contract", "component_name"),
        serialization_alias="componentName",
    )
    key: str


class PluginContract(_ContractModel):
    name: str
    tags: Tuple[ContractTag, ...] = ()


class Plugin(_ContractModel):
    name: str
    contracts: Tuple[PluginContract, ...] = ()

    def find_contract(self, component_name: str) -> Optional[PluginContract]:
        for contract in self.contracts:
            if contract.name == component_name:
                return contract
        return None


class ProjectPage(_ContractModel):
    """The page being converted together with its contract and used components."""

    name: str = ""
    url: str = ""
    file_path: Optional[str] = Field(default=None, alias="filePath")
    contract: Optional[Contract] = None
    used_components: Tuple[UsedComponent, ...] = Field(default=(), alias="usedComponents")

    @property
    def contract_tags(self) -> Tuple[ContractTag, ...]:
        return self.contract.tags if self.contract else ()

    def find_used_component(self, component_name: str) -> Optional[UsedComponent]:
        for component in self.used_components:
            if component.component_name == component_name:
                return component
        return None


def find_plugin(plugins: List[Plugin], plugin_name: str) -> Optional[Plugin]:
    for plugin in plugins:
        if plugin.name == plugin_name:
            return plugin
    return None


__all__ = [
    "ContractTagType",
    "ContractTag",
    "Contract",
    "PageContractPath",
    "UsedComponent",
    "PluginContract",
    "Plugin",
    "ProjectPage",
    "find_plugin",
    "parse_enum_values",
    "parse_tag_type",
]
