"""Shared pytest fixtures for jaybridge tests."""

import json

import pytest

from jaybridge.contract.loader import build_project_page, parse_contract
from jaybridge.contract.models import ContractTag, PageContractPath, Plugin, PluginContract, UsedComponent
from jaybridge.exporter.context import ExportContext
from tests.support import PAGE_URL, PRODUCT_CONTRACT, bind, node, solid


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: end-to-end conversions across both directions")


@pytest.fixture
def contract():
    return parse_contract(PRODUCT_CONTRACT, "product.jay-contract")


@pytest.fixture
def contract_tags(contract):
    return contract.tags


@pytest.fixture
def contract_path():
    return PageContractPath(page_url=PAGE_URL)


@pytest.fixture
def project_page(contract):
    return build_project_page(
        PAGE_URL,
        name="products",
        contract=contract,
        used_components=[UsedComponent(plugin="wix-stores", component_name="product-card", key="card")],
    )


@pytest.fixture
def plugins():
    return [
        Plugin(
            name="wix-stores",
            contracts=(
                PluginContract(
                    name="product-card",
                    tags=(ContractTag(tag="price", data_type="string"), ContractTag(tag="buy", types=("interactive",))),
                ),
            ),
        )
    ]


@pytest.fixture
def export_ctx(project_page, plugins):
    return ExportContext(project_page=project_page, plugins=tuple(plugins), indent_level=1, parent_layout_mode="VERTICAL")


@pytest.fixture
def page_document():
    """A page section with a vertical content frame, bound text and a repeater."""
    item_name = node(
        "4:2", "TEXT", "Item name", characters="Name", font_name={"family": "Inter", "style": "Regular"},
        bindings=bind("items.name"),
    )
    item_row = node(
        "4:1", "FRAME", "Item row", children=[item_name], layout_mode="HORIZONTAL",
        layout_sizing_horizontal="HUG", layout_sizing_vertical="HUG", width=300, height=40,
    )
    repeater = node(
        "3:1", "FRAME", "Items", children=[item_row], bindings=bind("items"),
        layout_mode="VERTICAL", layout_sizing_horizontal="HUG", layout_sizing_vertical="HUG",
        width=300, height=40, item_spacing=8,
    )
    title = node(
        "2:1", "TEXT", "Title", characters="Product", font_name={"family": "Roboto", "style": "Bold"},
        font_size=24, font_weight=700, bindings=bind("title"), fills=[solid(0.2, 0.2, 0.2)],
    )
    button = node(
        "2:2", "FRAME", "Add to cart", bindings=bind("addToCart"), layout_mode="HORIZONTAL",
        width=120, height=40, fills=[solid(0, 0, 1)], corner_radius=8,
        plugin_data={"semanticHtml": "button"},
        children=[node("2:3", "TEXT", "Label", characters="Add", font_name={"family": "Inter", "style": "Regular"})],
    )
    content = node(
        "1:2", "FRAME", "Content", children=[title, button, repeater],
        layout_mode="VERTICAL", width=1440, height=900, fills=[solid(1, 1, 1)],
    )
    return node(
        "1:1", "SECTION", "Products", children=[content],
        plugin_data={"jpage": "true", "urlRoute": PAGE_URL},
    )


@pytest.fixture
def page_document_json(page_document):
    return json.dumps(page_document.to_dict())
