"""Tests for the jaybridge CLI."""

import json
from pathlib import Path

import pytest

from jaybridge.cli import build_parser, main
from jaybridge.cli.errors import cli_reraise_enabled, format_cli_error
from jaybridge.errors import JayBridgeError, NotAPageError
from tests.support import PRODUCT_CONTRACT

PAGE_HTML = """<html><body>
<div style="display: flex; flex-direction: column">
  <h1 ref="addToCart">{title}</h1>
  <p>Fresh products every day</p>
</div>
</body></html>
"""


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch, page_document_json) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JAYBRIDGE_RERAISE", raising=False)
    (tmp_path / "page.json").write_text(page_document_json, encoding="utf-8")
    (tmp_path / "product.jay-contract").write_text(PRODUCT_CONTRACT, encoding="utf-8")
    (tmp_path / "page.conf.yaml").write_text(
        "used_components:\n  - plugin: wix-stores\n    contract: product-card\n    key: card\n", encoding="utf-8"
    )
    (tmp_path / "page.jay-html").write_text(PAGE_HTML, encoding="utf-8")
    return tmp_path


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["export", "page.json"])
    assert args.command == "export"
    assert args.route is None
    assert args.full_page is False
    assert args.log_level is None


def test_no_command_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "usage: jaybridge" in capsys.readouterr().out


def test_export_body_to_stdout(workspace, capsys) -> None:
    main(["export", "page.json", "--contract", "product.jay-contract"])
    captured = capsys.readouterr()
    assert captured.out.startswith('  <div data-figma-id="1:2"')
    assert 'forEach="items" trackBy="id"' in captured.out
    assert captured.err == ""


def test_export_full_page_to_file(workspace, capsys) -> None:
    main(
        [
            "export", "page.json", "--contract", "product.jay-contract", "--page-conf", "page.conf.yaml",
            "--full-page", "--title", "Shop", "--out", "out.jay-html",
        ]
    )
    output = (workspace / "out.jay-html").read_text(encoding="utf-8")
    assert output.startswith("<!DOCTYPE html>")
    assert "<title>Shop</title>" in output
    assert 'plugin="wix-stores" contract="product-card" key="card"' in output
    assert "      name: product-page\n" in output
    assert "family=Roboto" in output
    assert "Wrote out.jay-html" in capsys.readouterr().err


def test_export_without_contract_reports_diagnostics(workspace, capsys) -> None:
    main(["export", "page.json"])
    err = capsys.readouterr().err
    assert "warning: CONTRACT_NOT_FOUND: Page contract not found" in err


def test_export_rejects_non_page(workspace, capsys) -> None:
    data = json.loads((workspace / "page.json").read_text(encoding="utf-8"))
    data["pluginData"] = {}
    (workspace / "page.json").write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["export", "page.json"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: Document \"Products\" is not marked as a Jay Page")
    assert "EXPORT_NOT_A_PAGE" in err


def test_reraise_environment_flag(workspace, monkeypatch) -> None:
    data = json.loads((workspace / "page.json").read_text(encoding="utf-8"))
    data["pluginData"] = {}
    (workspace / "page.json").write_text(json.dumps(data), encoding="utf-8")
    monkeypatch.setenv("JAYBRIDGE_RERAISE", "1")
    assert cli_reraise_enabled()
    with pytest.raises(NotAPageError):
        main(["export", "page.json"])


def test_export_invalid_document(workspace, capsys) -> None:
    (workspace / "broken.json").write_text('{"name": "no id"}', encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["export", "broken.json"])
    assert capsys.readouterr().err.startswith("error: ")


def test_missing_input_file(workspace, capsys) -> None:
    with pytest.raises(SystemExit):
        main(["export", "nope.json"])
    assert "Cannot read nope.json" in capsys.readouterr().err


def test_import_to_stdout(workspace, capsys) -> None:
    main(["import", "page.jay-html", "--route", "/products", "--name", "products", "--contract", "product.jay-contract"])
    document = json.loads(capsys.readouterr().out)
    assert document["type"] == "SECTION"
    assert document["name"] == "products"
    assert document["pluginData"] == {"jpage": "true", "urlRoute": "/products"}
    heading = document["children"][0]["children"][0]
    assert heading["type"] == "TEXT"
    assert json.loads(heading["pluginData"]["jay-layer-bindings"])[0]["tagPath"] == ["addToCart"]


def test_import_then_validate(workspace, capsys) -> None:
    main(["import", "page.jay-html", "--route", "/products", "--out", "imported.json"])
    capsys.readouterr()
    main(["validate", "imported.json"])
    assert capsys.readouterr().out == "OK\n"


def test_validate_reports_problems(workspace, capsys) -> None:
    (workspace / "bad.json").write_text(json.dumps({"id": "1", "type": "WIDGET"}), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", "bad.json"])
    assert excinfo.value.code == 1
    assert "unknown node type 'WIDGET'" in capsys.readouterr().out


def test_validate_rejects_invalid_json(workspace, capsys) -> None:
    (workspace / "bad.json").write_text("{", encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["validate", "bad.json"])
    assert capsys.readouterr().err.startswith("error: ")


def test_compare_equivalent(workspace, capsys) -> None:
    main(["compare", "page.jay-html", "page.jay-html"])
    out = capsys.readouterr().out
    assert '[PASS] ref="addToCart"' in out
    assert "[PASS] text binding {title}" in out
    assert "[PASS] nesting depth" in out


def test_compare_reports_failures(workspace, capsys) -> None:
    (workspace / "other.jay-html").write_text("<div>Fresh products every day</div>", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["compare", "page.jay-html", "other.jay-html"])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert '[HARD_FAIL] ref="addToCart" (ref missing from output)' in out


def test_format_cli_error() -> None:
    assert format_cli_error(JayBridgeError("boom", code="X")) == "error: boom (X)"
    assert format_cli_error(ValueError("bad")) == "error: bad"


def test_validate_rejects_non_object_document(workspace, capsys) -> None:
    (workspace / "list.json").write_text("[]", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", "list.json"])
    assert excinfo.value.code == 1
    assert "root: document must be a JSON object, got list" in capsys.readouterr().out


def test_import_reports_malformed_config(workspace, capsys) -> None:
    (workspace / "jaybridge.toml").write_text("indent = [", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["import", "page.jay-html", "--route", "/products"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: Cannot parse configuration")
    assert "CONFIG_INVALID" in err
