"""Page and plugin contracts: the typed binding points a page exposes."""

from .loader import (
    build_project_page,
    load_contract,
    load_page_config,
    load_plugins,
    parse_contract,
    parse_page_config,
    parse_plugins,
)
from .lookup import apply_repeater_context, find_contract_tag, split_path
from .models import (
    Contract,
    ContractTag,
    ContractTagType,
    PageContractPath,
    Plugin,
    PluginContract,
    ProjectPage,
    UsedComponent,
    find_plugin,
)

__all__ = [
    "Contract",
    "ContractTag",
    "ContractTagType",
    "PageContractPath",
    "Plugin",
    "PluginContract",
    "ProjectPage",
    "UsedComponent",
    "find_plugin",
    "find_contract_tag",
    "split_path",
    "apply_repeater_context",
    "parse_contract",
    "load_contract",
    "parse_page_config",
    "load_page_config",
    "parse_plugins",
    "load_plugins",
    "build_project_page",
]
