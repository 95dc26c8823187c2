"""
jaybridge: bidirectional conversion between design-tool documents and Jay
HTML pages.

* ``exporter`` turns a vendor page section into Jay HTML with ``{path}``
  bindings, ``forEach`` repeaters and ``if`` variants.
* ``importer`` parses Jay HTML into an intermediate tree, synthesizes
  component variants and repeaters, and adapts it into a vendor document.
* ``vendor.figma.FigmaVendor`` wraps both directions with logging.
"""

__version__ = "0.1.0"

from .compare import compare_semantic_equivalence
from .config import DEFAULT_CONFIG, ConverterConfig, load_config
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticSeverity
from .errors import (
    ContentFrameError,
    ContractError,
    ConfigError,
    JayBridgeError,
    NotAPageError,
    RepeaterConversionError,
    VariantSynthesisError,
)
from .exporter import build_jay_html, convert_to_body_html
from .importer import adapt_ir_to_vendor_document, build_import_ir, parse_jay_html
from .vendor import VendorNode, parse_vendor_document, validate_vendor_document
from .vendor.figma import FigmaVendor

__all__ = [
    "__version__",
    "ConverterConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "JayBridgeError",
    "NotAPageError",
    "ContentFrameError",
    "RepeaterConversionError",
    "VariantSynthesisError",
    "ContractError",
    "ConfigError",
    "VendorNode",
    "parse_vendor_document",
    "validate_vendor_document",
    "convert_to_body_html",
    "build_jay_html",
    "parse_jay_html",
    "build_import_ir",
    "adapt_ir_to_vendor_document",
    "compare_semantic_equivalence",
    "FigmaVendor",
]
