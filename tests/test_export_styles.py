"""Tests for vendor node to inline CSS helpers and the export context."""

from dataclasses import replace

import pytest

from jaybridge.diagnostics import DiagnosticCode, warning
from jaybridge.exporter.context import ExportContext, HtmlFragment
from jaybridge.exporter.styles import (
    auto_layout_styles,
    background_style,
    border_radius_style,
    common_styles,
    frame_size_styles,
    frame_styles,
    node_size_styles,
    overflow_styles,
    position_style,
    position_type,
    stroke_styles,
)
from jaybridge.vendor.document import NodeKind
from tests.support import node, solid


@pytest.fixture
def ctx(project_page):
    return ExportContext(project_page=project_page)


@pytest.mark.parametrize(
    ("fields", "parent_kind", "parent_layout", "expected"),
    [
        ({"layout_positioning": "ABSOLUTE"}, None, "VERTICAL", "absolute"),
        ({"scroll_behavior": "FIXED"}, None, "NONE", "fixed"),
        ({}, NodeKind.SECTION, "NONE", "absolute"),
        ({}, NodeKind.FRAME, "NONE", "absolute"),
        ({}, NodeKind.FRAME, "HORIZONTAL", "relative"),
        ({}, None, None, "static"),
    ],
)
def test_position_type(ctx, fields, parent_kind, parent_layout, expected) -> None:
    child_ctx = replace(ctx, parent_kind=parent_kind, parent_layout_mode=parent_layout)
    assert position_type(node("1", "RECTANGLE", **fields), child_ctx) == expected


def test_position_style(ctx) -> None:
    absolute = replace(ctx, parent_layout_mode="NONE")
    assert position_style(node("1", "RECTANGLE", x=5, y=7.5), absolute) == "position: absolute;top: 7.5px;left: 5px;"
    assert position_style(node("1", "COMPONENT", x=5, y=7), absolute) == ""
    assert position_style(node("1", "RECTANGLE"), ctx) == ""


def test_node_size_styles(ctx) -> None:
    in_section = replace(ctx, parent_kind=NodeKind.SECTION)
    assert node_size_styles(node("1", "FRAME", width=10, height=20), in_section) == "width: 100%;height: 20px;"
    assert node_size_styles(node("1", "RECTANGLE", width=10, height=20), ctx) == "width: 10px;height: 20px;"

    in_row = replace(ctx, parent_layout_mode="HORIZONTAL")
    growing_text = node(
        "1", "TEXT", layout_grow=1, layout_sizing_horizontal="FILL", layout_sizing_vertical="HUG", width=10, height=20
    )
    assert node_size_styles(growing_text, in_row) == "width: auto;height: fit-content;"
    fixed = node("1", "RECTANGLE", width=10, height=20, layout_sizing_horizontal="FILL")
    assert node_size_styles(fixed, in_row) == "width: 10px;height: 20px;"


def test_frame_size_styles(ctx) -> None:
    frame = node(
        "1", "FRAME", width=10, height=20, layout_sizing_horizontal="HUG", layout_sizing_vertical="FILL", min_width=5
    )
    assert frame_size_styles(frame, ctx) == "width: fit-content;height: 100%;min-width: 5px;"
    assert frame_size_styles(node("1", "FRAME", width=10, height=20), ctx) == "width: 10px;height: 20px;"


def test_background_style() -> None:
    assert background_style(node("1", "FRAME", fills=[solid(1, 0, 0)])) == "background-color: #ff0000;"
    assert background_style(node("1", "FRAME", fills=[solid(1, 0, 0, opacity=0.5)])) == "background-color: #ff000080;"
    hidden = dict(solid(1, 0, 0), visible=False)
    assert background_style(node("1", "FRAME", fills=[hidden, solid(0, 0, 1)])) == "background-color: #0000ff;"
    assert background_style(node("1", "FRAME", fills=[{"type": "IMAGE"}])) == ""


def test_stroke_styles() -> None:
    dashed = node("1", "FRAME", strokes=[solid(0, 0, 0)], stroke_weight=2, dash_pattern=[4, 4])
    assert stroke_styles(dashed) == "border: 2px dashed #000000;"
    assert stroke_styles(node("1", "FRAME", strokes=[solid(0, 0, 0)])) == "border: 1px solid #000000;"
    assert stroke_styles(node("1", "FRAME")) == ""


def test_border_radius_style() -> None:
    assert border_radius_style(node("1", "ELLIPSE")) == "border-radius: 50%;"
    assert border_radius_style(node("1", "RECTANGLE", corner_radius=4)) == "border-radius: 4px;"
    assert border_radius_style(node("1", "RECTANGLE", corner_radius=0)) == ""
    corners = node(
        "1", "FRAME", corner_radius="MIXED",
        top_left_radius=1, top_right_radius=2, bottom_right_radius=3, bottom_left_radius=4,
    )
    assert border_radius_style(corners) == "border-radius: 1px 2px 3px 4px;"
    assert border_radius_style(node("1", "TEXT", corner_radius=4)) == ""


def test_overflow_styles() -> None:
    assert overflow_styles(node("1", "FRAME", overflow_direction="BOTH")) == "overflow: auto;"
    assert overflow_styles(node("1", "FRAME", overflow_direction="VERTICAL")) == "overflow-y: auto;overflow-x: hidden;"
    assert overflow_styles(node("1", "FRAME")) == ""


def test_common_styles_effects_and_rotation() -> None:
    shadow = {
        "type": "DROP_SHADOW",
        "color": {"r": 0, "g": 0, "b": 0, "a": 0.25},
        "offset": {"x": 0, "y": 4},
        "radius": 8,
    }
    blur = {"type": "LAYER_BLUR", "radius": 2}
    styled = node("1", "FRAME", opacity=0.5, effects=[shadow, blur], rotation=45, width=10, height=20)
    assert common_styles(styled) == (
        "opacity: 0.5;"
        "box-shadow: 0px 4px 8px 0px rgba(0, 0, 0, 0.25);"
        "filter: blur(2px);"
        "transform: rotate(45deg);transform-origin: 5px 10px;"
    )
    assert common_styles(node("1", "FRAME", opacity=1)) == ""


def test_background_blur() -> None:
    styled = node("1", "FRAME", effects=[{"type": "BACKGROUND_BLUR", "radius": 6}])
    assert common_styles(styled) == "backdrop-filter: blur(6px);-webkit-backdrop-filter: blur(6px);"


def test_auto_layout_styles() -> None:
    row = node(
        "1", "FRAME", layout_mode="HORIZONTAL", layout_wrap="WRAP", item_spacing=8, padding_left=4,
        primary_axis_align_items="SPACE_BETWEEN", counter_axis_align_items="CENTER",
    )
    assert auto_layout_styles(row) == (
        "display: flex;flex-direction: row;flex-wrap: wrap;gap: 8px;padding-left: 4px;"
        "justify-content: space-between;align-items: center;"
    )
    assert auto_layout_styles(node("1", "FRAME", layout_mode="NONE")) == ""


def test_frame_styles_accepts_size_override(ctx) -> None:
    frame = node("1", "FRAME", width=10, height=20, layout_mode="VERTICAL")
    styles = frame_styles(frame, ctx, size="width: 100%;")
    assert styles == "width: 100%;display: flex;flex-direction: column;box-sizing: border-box;"


def test_child_of_derives_parent_state(ctx) -> None:
    parent = node("1", "FRAME", layout_mode="VERTICAL")
    child_ctx = ctx.child_of(parent, 2)
    assert child_ctx.indent_level == 2
    assert child_ctx.parent_kind is NodeKind.FRAME
    assert child_ctx.parent_layout_mode == "VERTICAL"
    assert ctx.child_of(node("2", "GROUP")).parent_layout_mode == "NONE"
    assert child_ctx.indent == "    "
    assert child_ctx.indent_at(1) == "      "
    assert ctx.with_repeater(["items"]).repeater_path_stack == (("items",),)


def test_html_fragment_combines_values() -> None:
    diagnostic = warning(DiagnosticCode.IMAGE_NO_SOURCE, "x")
    first = HtmlFragment("<a>", ("Inter",))
    second = HtmlFragment("</a>", ("Inter", "Roboto"), (diagnostic,))
    combined = HtmlFragment.concat([first, second])
    assert combined.html == "<a></a>"
    assert combined.font_families == ("Inter", "Roboto")
    assert combined.diagnostics == (diagnostic,)
    assert HtmlFragment.concat([]) == HtmlFragment()
