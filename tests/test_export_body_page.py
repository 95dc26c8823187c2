"""Tests for page export: content frame selection, body HTML and full documents."""

import pytest

from jaybridge.contract.models import UsedComponent
from jaybridge.diagnostics import DiagnosticCode
from jaybridge.errors import ContentFrameError, NotAPageError
from jaybridge.exporter.body import build_component_set_index, convert_to_body_html, find_content_frame
from jaybridge.exporter.page import FONT_WEIGHTS, build_jay_html, google_fonts_url
from tests.support import node


def test_body_html_for_page(page_document, project_page, plugins) -> None:
    result = convert_to_body_html(page_document, project_page, plugins)
    first_line = result.body_html.splitlines()[0]
    assert first_line == (
        '  <div data-figma-id="1:2" data-figma-type="frame" style="position: absolute;top: 0px;left: 0px;'
        'width: 100%;height: 900px;background-color: #ffffff;display: flex;flex-direction: column;'
        'box-sizing: border-box;">'
    )
    assert "<section" not in result.body_html
    assert result.font_families == ("Roboto", "Inter")
    assert result.diagnostics == ()
    assert 'forEach="items"' in result.body_html


def test_document_must_be_a_page(page_document, project_page) -> None:
    with pytest.raises(NotAPageError) as excinfo:
        convert_to_body_html(page_document.model_copy(update={"plugin_data": {}}), project_page)
    assert "jpage" in excinfo.value.message


def test_section_without_children(project_page) -> None:
    section = node("1:1", "SECTION", "Empty", plugin_data={"jpage": "true", "urlRoute": "/"})
    with pytest.raises(ContentFrameError):
        convert_to_body_html(section, project_page)


def test_section_without_frames() -> None:
    section = node("1:1", "SECTION", "Loose", children=[node("2:1", "TEXT"), node("2:2", "RECTANGLE")])
    with pytest.raises(ContentFrameError) as excinfo:
        find_content_frame(section)
    assert "Found: TEXT, RECTANGLE" in excinfo.value.message


def test_first_of_several_frames_is_used() -> None:
    section = node("1:1", "SECTION", "Page", children=[node("2:0", "TEXT"), node("2:1", "FRAME"), node("2:2", "FRAME")])
    frame, diagnostics = find_content_frame(section)
    assert frame.id == "2:1"
    assert [d.code for d in diagnostics] == [DiagnosticCode.MULTIPLE_CONTENT_FRAMES]


def test_component_set_index() -> None:
    component_set = node("5:0", "COMPONENT_SET", children=[node("5:1", "COMPONENT"), node("5:2", "COMPONENT")])
    section = node("1:1", "SECTION", children=[node("2:1", "FRAME", children=[component_set])])
    index = build_component_set_index(section)
    assert set(index) == {"5:1", "5:2"}
    assert index["5:1"].id == "5:0"


def test_google_fonts_url() -> None:
    url = google_fonts_url(["Open Sans", "Roboto"])
    assert url == (
        f"https://fonts.googleapis.com/css2?family=Open+Sans:wght@{FONT_WEIGHTS}"
        f"&family=Roboto:wght@{FONT_WEIGHTS}&display=swap"
    )
    assert google_fonts_url([]) is None
    assert google_fonts_url(["Inter"], "https://fonts.example/css").startswith("https://fonts.example/css?family=Inter")


def test_build_jay_html() -> None:
    document = build_jay_html(
        "  <div>body</div>\n",
        ["Inter"],
        headless_components=[
            UsedComponent(plugin="wix-stores", component_name="product-card", key="card"),
            UsedComponent(component_name="local", key="local"),
        ],
        contract_yaml="name: page\ntags:\n  - tag: title\n",
        title="Shop & Co",
    )
    assert document.startswith("<!DOCTYPE html>\n<html lang=\"en\">\n<head>\n")
    assert '<link href="https://fonts.googleapis.com/css2?family=Inter:wght@' in document
    assert "&amp;display=swap" in document
    assert (
        '  <script type="application/jay-headless" plugin="wix-stores" contract="product-card" key="card"></script>\n'
        in document
    )
    assert 'contract="local"' not in document
    assert (
        '  <script type="application/jay-data">\n'
        "    data:\n"
        "      name: page\n"
        "      tags:\n"
        "        - tag: title\n"
        "  </script>\n"
    ) in document
    assert "<title>Shop &amp; Co</title>" in document
    assert document.endswith("<body>\n  <div>body</div>\n</body>\n</html>\n")


def test_build_jay_html_defaults() -> None:
    document = build_jay_html("")
    assert "fonts.googleapis" not in document
    assert '  <script type="application/jay-data">\n    data:\n  </script>\n' in document
    assert "<title>Page</title>" in document
    assert "box-sizing: border-box;" in document
