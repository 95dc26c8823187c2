"""YAML loaders for contract files and page configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from ..errors import ContractError
from .models import Contract, ContractTag, ContractTagType, Plugin, PluginContract, ProjectPage, UsedComponent

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _load_yaml(text: str, source: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ContractError(f"Invalid YAML: {exc}", path=source) from exc


def _normalize_tag(raw: Mapping[str, Any], source: str) -> Dict[str, Any]:
    if not isinstance(raw, Mapping) or "tag" not in raw:
        raise ContractError(
            f"Contract tag entries must be mappings with a 'tag' key, got {raw!r}",
            path=source,
        )
    data = dict(raw)
    nested = data.get("tags") or []
    if not isinstance(nested, list):
        raise ContractError(f"Tag '{data['tag']}' has a non-list 'tags' entry", path=source)
    data["tags"] = [_normalize_tag(child, source) for child in nested]
    if data.get("type") is None:
        data["type"] = ContractTagType.SUB_CONTRACT.value if nested else ContractTagType.DATA.value
    return data


def _parse_tags(raw_tags: Any, source: str) -> List[ContractTag]:
    if raw_tags is None:
        return []
    if not isinstance(raw_tags, list):
        raise ContractError("Contract 'tags' must be a list", path=source)
    try:
        return [ContractTag.model_validate(_normalize_tag(raw, source)) for raw in raw_tags]
    except ValidationError as exc:
        raise ContractError(f"Invalid contract tag: {exc}", path=source) from exc


def parse_contract(text: str, source: str = "<contract>") -> Contract:
    """Parse the YAML text of a ``.jay-contract`` file."""
    data = _load_yaml(text, source)
    if data is None:
        return Contract()
    if not isinstance(data, Mapping):
        raise ContractError("Contract document must be a mapping", path=source)
    tags = _parse_tags(data.get("tags"), source)
    contract = Contract(name=str(data.get("name") or ""), tags=tuple(tags))
    logger.debug("Parsed contract '%s' with %d top-level tags", contract.name, len(contract.tags))
    return contract


def load_contract(path: PathLike) -> Contract:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContractError(f"Cannot read contract: {exc}", path=str(source)) from exc
    return parse_contract(text, str(source))


def parse_page_config(text: str, source: str = "page.conf.yaml") -> List[UsedComponent]:
    """Parse the ``used_components`` list of a ``page.conf.yaml`` file."""
    data = _load_yaml(text, source)
    if data is None:
        return []
    if not isinstance(data, Mapping):
        raise ContractError("Page configuration must be a mapping", path=source)
    entries = data.get("used_components") or data.get("usedComponents") or []
    if not isinstance(entries, list):
        raise ContractError("'used_components' must be a list", path=source)
    try:
        return [UsedComponent.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        raise ContractError(f"Invalid used component: {exc}", path=source) from exc


def load_page_config(path: PathLike) -> List[UsedComponent]:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContractError(f"Cannot read page configuration: {exc}", path=str(source)) from exc
    return parse_page_config(text, str(source))


def parse_plugins(text: str, source: str = "<plugins>") -> List[Plugin]:
    """Parse a YAML list of plugins, each with named contracts.

    Each contract entry either embeds its ``tags`` or names a ``path`` to a
    ``.jay-contract`` file resolved relative to ``source``.
    """
    data = _load_yaml(text, source)
    if data is None:
        return []
    entries = data.get("plugins") if isinstance(data, Mapping) else data
    if not isinstance(entries, list):
        raise ContractError("Plugin file must be a list of plugins", path=source)

    base_dir = Path(source).parent
    plugins: List[Plugin] = []
    for entry in entries:
        if not isinstance(entry, Mapping) or "name" not in entry:
            raise ContractError(f"Plugin entries need a 'name', got {entry!r}", path=source)
        contracts: List[PluginContract] = []
        for raw_contract in entry.get("contracts") or []:
            if not isinstance(raw_contract, Mapping) or "name" not in raw_contract:
                raise ContractError(
                    f"Plugin '{entry['name']}' has a contract without a 'name'", path=source
                )
            if raw_contract.get("path"):
                loaded = load_contract(base_dir / str(raw_contract["path"]))
                tags = loaded.tags
            else:
                tags = tuple(_parse_tags(raw_contract.get("tags"), source))
            contracts.append(PluginContract(name=str(raw_contract["name"]), tags=tags))
        plugins.append(Plugin(name=str(entry["name"]), contracts=tuple(contracts)))
    return plugins


def load_plugins(path: PathLike) -> List[Plugin]:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContractError(f"Cannot read plugins file: {exc}", path=str(source)) from exc
    return parse_plugins(text, str(source))


def build_project_page(
    url: str,
    *,
    name: str = "",
    contract: Optional[Contract] = None,
    used_components: Sequence[UsedComponent] = (),
    file_path: Optional[str] = None,
) -> ProjectPage:
    return ProjectPage(
        name=name or url,
        url=url,
        file_path=file_path,
        contract=contract,
        used_components=tuple(used_components),
    )


__all__ = [
    "parse_contract",
    "load_contract",
    "parse_page_config",
    "load_page_config",
    "parse_plugins",
    "load_plugins",
    "build_project_page",
]
