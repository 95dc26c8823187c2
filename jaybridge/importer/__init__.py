"""Jay HTML → Import IR → vendor document."""

from .adapter import adapt_ir_to_vendor_document
from .builder import build_import_ir, build_import_ir_from_document
from .html import ParsedJayHtml, parse_jay_html
from .ir import IRKind, ImportIRDocument, ImportIRNode

__all__ = [
    "ParsedJayHtml",
    "parse_jay_html",
    "IRKind",
    "ImportIRNode",
    "ImportIRDocument",
    "build_import_ir",
    "build_import_ir_from_document",
    "adapt_ir_to_vendor_document",
]
