"""Subcommand implementations for the jaybridge CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..compare import compare_semantic_equivalence
from ..config import ConverterConfig, load_config
from ..contract.loader import build_project_page, load_contract, load_page_config, load_plugins
from ..contract.models import Contract, Plugin, ProjectPage, UsedComponent
from ..diagnostics import format_diagnostics
from ..errors import JayBridgeError
from ..exporter.page import build_jay_html
from ..importer.html import parse_jay_html
from ..vendor.conformance import validate_vendor_document
from ..vendor.document import parse_vendor_document
from ..vendor.figma import FigmaVendor
from ..vendor.metadata import ROUTE_KEY
from .errors import handle_cli_exception


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise JayBridgeError(f"Cannot read {path}: {exc}", path=path) from exc


def _write_output(text: str, out: Optional[str]) -> None:
    if out:
        Path(out).write_text(text, encoding="utf-8")
        print(f"Wrote {out}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def _config(args: argparse.Namespace) -> ConverterConfig:
    explicit = Path(args.config) if getattr(args, "config", None) else None
    return load_config(Path.cwd(), explicit)


def _project_page(args: argparse.Namespace, route: str) -> ProjectPage:
    contract: Optional[Contract] = load_contract(args.contract) if getattr(args, "contract", None) else None
    used: List[UsedComponent] = load_page_config(args.page_conf) if getattr(args, "page_conf", None) else []
    return build_project_page(route, name=getattr(args, "name", None) or "", contract=contract, used_components=used)


def _print_diagnostics(diagnostics) -> None:
    for line in format_diagnostics(diagnostics):
        print(f"warning: {line}", file=sys.stderr)


def cmd_export(args: argparse.Namespace) -> None:
    """Vendor document JSON → Jay HTML body (or a full page with ``--full-page``)."""
    try:
        config = _config(args)
        document = parse_vendor_document(_read_text(args.file))
        route = args.route or document.metadata(ROUTE_KEY) or "/"
        project_page = _project_page(args, route)
        plugins: List[Plugin] = load_plugins(args.plugins) if args.plugins else []

        result = FigmaVendor(config).convert_to_body_html(document, route, project_page, plugins)
        _print_diagnostics(result.diagnostics)

        output = result.body_html
        if args.full_page:
            output = build_jay_html(
                result.body_html,
                result.font_families,
                headless_components=project_page.used_components,
                contract_yaml=_read_text(args.contract) if args.contract else None,
                title=args.title or document.name or None,
                config=config,
            )
        _write_output(output, args.out)
    except (JayBridgeError, ValidationError) as exc:
        handle_cli_exception(exc)


def cmd_import(args: argparse.Namespace) -> None:
    """Jay HTML page → vendor document JSON."""
    try:
        config = _config(args)
        parsed = parse_jay_html(_read_text(args.file))
        project_page = _project_page(args, args.route)
        result = FigmaVendor(config).convert_from_jay_html(parsed, args.route, project_page)
        _print_diagnostics(result.diagnostics)
        _write_output(result.document.to_json() + "\n", args.out)
    except (JayBridgeError, ValidationError) as exc:
        handle_cli_exception(exc)


def cmd_validate(args: argparse.Namespace) -> None:
    """Run the conformance checks over a vendor document JSON file."""
    try:
        data = json.loads(_read_text(args.file))
    except (JayBridgeError, json.JSONDecodeError) as exc:
        handle_cli_exception(exc)
    problems = validate_vendor_document(data)
    if problems:
        for problem in problems:
            print(problem)
        sys.exit(1)
    print("OK")


def cmd_compare(args: argparse.Namespace) -> None:
    """Report whether an exported page preserves the source page's bindings and text."""
    try:
        comparison = compare_semantic_equivalence(_read_text(args.source), _read_text(args.actual))
    except JayBridgeError as exc:
        handle_cli_exception(exc)
    for result in comparison.invariant_results:
        status = "PASS" if result.passed else result.severity.value
        suffix = f" ({result.details})" if result.details and not result.passed else ""
        print(f"[{status}] {result.name}{suffix}")
    if not comparison.equivalent:
        sys.exit(1)


__all__ = ["cmd_export", "cmd_import", "cmd_validate", "cmd_compare"]
