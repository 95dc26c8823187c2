"""Builders for vendor nodes and serialized bindings used across tests."""

from jaybridge.bindings.models import LayerBinding, serialize_layer_bindings
from jaybridge.contract.models import PageContractPath
from jaybridge.vendor.document import VendorNode
from jaybridge.vendor.metadata import LAYER_BINDINGS_KEY

PAGE_URL = "/products"
SECTION_ID = "section-1"

PRODUCT_CONTRACT = """
name: product-page
tags:
  - tag: title
    type: data
    dataType: string
  - tag: imageUrl
    type: data
    dataType: string
  - tag: addToCart
    type: interactive
    elementType: HTMLButtonElement
  - tag: quantity
    type: [data, interactive]
    dataType: number
  - tag: isOnSale
    type: variant
    dataType: boolean
  - tag: mediaType
    type: variant
    dataType: enum (IMAGE | VIDEO)
  - tag: items
    repeated: true
    trackBy: id
    tags:
      - tag: id
      - tag: name
        dataType: string
      - tag: price
        dataType: number
      - tag: remove
        type: interactive
"""


def bind(*paths, attribute=None, property=None, plugin=None, component=None):
    """Serialized ``jay-layer-bindings`` value for a node's pluginData."""
    contract_path = PageContractPath(page_url=PAGE_URL, plugin_name=plugin, component_name=component)
    bindings = [
        LayerBinding(
            page_contract_path=contract_path,
            jay_page_section_id=SECTION_ID,
            tag_path=tuple(path.split(".")),
            attribute=attribute,
            property=property,
        )
        for path in paths
    ]
    return serialize_layer_bindings(bindings)


def node(node_id, kind, name="", *, children=(), bindings=None, plugin_data=None, **fields):
    """Build a :class:`VendorNode` from snake_case fields."""
    data = dict(plugin_data or {})
    if bindings is not None:
        data[LAYER_BINDINGS_KEY] = bindings
    return VendorNode(
        id=node_id,
        name=name or node_id,
        kind=kind,
        children=list(children),
        plugin_data=data or None,
        **fields,
    )


def solid(r, g, b, opacity=None):
    paint = {"type": "SOLID", "color": {"r": r, "g": g, "b": b}}
    if opacity is not None:
        paint["opacity"] = opacity
    return paint
