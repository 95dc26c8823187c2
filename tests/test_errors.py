from jaybridge.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSeverity, format_diagnostics, has_code, warning
from jaybridge.errors import ContractError, JayBridgeError, NotAPageError


def test_error_format_includes_metadata() -> None:
    err = JayBridgeError(
        "Repeater has no template",
        path="page.json",
        node_id="3:1",
        node_name="Items",
        code="EXPORT_INVALID_REPEATER",
        hint="Add a child frame to the repeater.",
    )
    formatted = err.format()
    assert "Repeater has no template" in formatted
    assert 'node "Items" (3:1)' in formatted
    assert "page.json" in formatted
    assert "EXPORT_INVALID_REPEATER" in formatted
    assert "Hint: Add a child frame" in formatted


def test_error_format_handles_missing_location() -> None:
    err = JayBridgeError("Something broke")
    formatted = err.format()
    assert formatted == "Something broke"


def test_subclass_codes_are_class_level() -> None:
    assert NotAPageError("x").format() == "x (EXPORT_NOT_A_PAGE)"
    assert ContractError("bad", path="a.yaml").code == "CONTRACT_INVALID"


def test_diagnostic_rendering() -> None:
    diag = warning(DiagnosticCode.BINDING_UNRESOLVED, "No tag 'foo'", node_id="1:2")
    assert diag.severity is DiagnosticSeverity.WARNING
    assert str(diag) == "BINDING_UNRESOLVED: No tag 'foo'"
    assert diag.to_dict() == {
        "severity": "warning",
        "code": "BINDING_UNRESOLVED",
        "message": "No tag 'foo'",
        "nodeId": "1:2",
    }
    info = Diagnostic(DiagnosticCode.VARIANT_NO_MATCH, "fallback", severity=DiagnosticSeverity.INFO)
    assert "nodeId" not in info.to_dict()
    assert format_diagnostics([diag, info]) == ["BINDING_UNRESOLVED: No tag 'foo'", "VARIANT_NO_MATCH: fallback"]
    assert has_code([diag, info], DiagnosticCode.VARIANT_NO_MATCH)
    assert not has_code([diag], DiagnosticCode.IMAGE_NO_SOURCE)
