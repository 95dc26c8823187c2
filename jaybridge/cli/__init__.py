"""
Command line interface for jaybridge.

Subcommands:

* ``export``   vendor document JSON → Jay HTML
* ``import``   Jay HTML → vendor document JSON
* ``validate`` conformance checks over a vendor document
* ``compare``  semantic round-trip comparison of two Jay HTML files
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .. import __version__
from .commands import cmd_compare, cmd_export, cmd_import, cmd_validate

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _configure_logging(args: argparse.Namespace) -> None:
    level_name = (getattr(args, "log_level", None) or os.getenv("JAYBRIDGE_LOG_LEVEL", "warning")).lower()
    logging.basicConfig(level=_LEVELS.get(level_name, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")


def _add_contract_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--contract", help="Path to the page .jay-contract file")
    parser.add_argument("--page-conf", dest="page_conf", help="Path to page.conf.yaml (used headless components)")
    parser.add_argument("--name", help="Page name (defaults to the route)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jaybridge",
        description="Convert between design-tool documents and Jay HTML pages",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a jaybridge.toml configuration file")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Logging level (or set JAYBRIDGE_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    export_parser = subparsers.add_parser("export", help="Vendor document JSON to Jay HTML")
    export_parser.add_argument("file", help="Vendor document JSON file")
    export_parser.add_argument("--route", help="Page route (defaults to the document's urlRoute)")
    export_parser.add_argument("--plugins", help="YAML file listing plugins and their contracts")
    export_parser.add_argument("--out", "-o", help="Output file (defaults to stdout)")
    export_parser.add_argument("--full-page", dest="full_page", action="store_true", help="Emit a complete document")
    export_parser.add_argument("--title", help="Page title for --full-page")
    _add_contract_arguments(export_parser)
    export_parser.set_defaults(func=cmd_export)

    import_parser = subparsers.add_parser("import", help="Jay HTML to vendor document JSON")
    import_parser.add_argument("file", help="Jay HTML file")
    import_parser.add_argument("--route", required=True, help="Page route, e.g. /products")
    import_parser.add_argument("--out", "-o", help="Output file (defaults to stdout)")
    _add_contract_arguments(import_parser)
    import_parser.set_defaults(func=cmd_import)

    validate_parser = subparsers.add_parser("validate", help="Check a vendor document for conformance")
    validate_parser.add_argument("file", help="Vendor document JSON file")
    validate_parser.set_defaults(func=cmd_validate)

    compare_parser = subparsers.add_parser("compare", help="Compare two Jay HTML files semantically")
    compare_parser.add_argument("source", help="Original Jay HTML")
    compare_parser.add_argument("actual", help="Round-tripped Jay HTML")
    compare_parser.set_defaults(func=cmd_compare)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Console entry point."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)
    _configure_logging(args)
    args.func(args)


__all__ = ["build_parser", "main"]
