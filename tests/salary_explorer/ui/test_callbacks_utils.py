import dash
import pytest

from salary_explorer.core.explorer_state import ExplorerState
from salary_explorer.core.transform import ViewTransform
from salary_explorer.ui.callbacks.callbacks_utils import (
    brush_extent,
    figures_in_order,
    hovered_row_index,
    is_autorange_reset,
    is_resize,
    transform_from_relayout,
    try_parse_explorer_state,
)


def test_brush_extent_sorts_pixel_range():
    assert brush_extent({"range": {"x": [50, 10]}, "points": []}) == (10.0, 50.0)


@pytest.mark.parametrize("selected", [None, {}, {"points": []}, {"range": {"x": [1]}}])
def test_brush_extent_cleared(selected):
    assert brush_extent(selected) is None


def test_transform_from_relayout_box_zoom():
    relayout = {
        "xaxis.range[0]": 0,
        "xaxis.range[1]": 390,
        "yaxis.range[0]": 160,
        "yaxis.range[1]": 0,
    }

    t = transform_from_relayout(relayout, ViewTransform(), 780, 320)

    assert t == ViewTransform(k=2.0, tx=0.0, ty=0.0)


def test_transform_from_relayout_pan_composes_with_current():
    relayout = {"xaxis.range[0]": 10, "xaxis.range[1]": 790}

    t = transform_from_relayout(relayout, ViewTransform(k=2.0, tx=-100.0, ty=-40.0), 780, 320)

    assert t.k == 2.0
    assert t.tx == pytest.approx(-110.0)
    assert t.ty == pytest.approx(-40.0)


def test_transform_from_relayout_list_form_and_y_only():
    t = transform_from_relayout({"yaxis.range": [80, 240]}, ViewTransform(), 780, 320)

    assert t.k == pytest.approx(2.0)
    assert t.ty == pytest.approx(-160.0)
    assert t.tx == 0.0


def test_transform_from_relayout_without_axis_window():
    assert transform_from_relayout({"autosize": True}, ViewTransform(), 780, 320) is None
    assert transform_from_relayout(None, ViewTransform(), 780, 320) is None


def test_relayout_flags():
    assert is_resize({"autosize": True})
    assert not is_resize({"xaxis.range[0]": 1})
    assert not is_resize(None)
    assert is_autorange_reset({"xaxis.autorange": True, "yaxis.autorange": True})
    assert not is_autorange_reset({})


@pytest.mark.parametrize(
    "hover, expected",
    [
        ({"points": [{"customdata": 5}]}, 5),
        ({"points": [{"customdata": [7, "Analyst", 1.0, 0]}]}, 7),
        ({"points": [{"customdata": None}]}, None),
        ({"points": []}, None),
        (None, None),
    ],
)
def test_hovered_row_index(hover, expected):
    assert hovered_row_index(hover) == expected


def test_try_parse_explorer_state_falls_back_on_bad_data():
    assert try_parse_explorer_state(None) == ExplorerState()
    assert try_parse_explorer_state({"transforms": {"scatter": "oops"}}) == ExplorerState()


def test_figures_in_order_keeps_missing_views():
    out = figures_in_order(["a", "b", "c"], {"b": "fig-b"}, dash.no_update)

    assert out == [dash.no_update, "fig-b", dash.no_update]


def test_zoom_past_max_scale_keeps_view_still():
    current = ViewTransform(k=8.0, tx=-3000.0, ty=-1000.0)
    # 2x about the chart centre (390, 160)
    relayout = {"xaxis.range": [195, 585], "yaxis.range": [240, 80]}

    t = transform_from_relayout(relayout, current, 780, 320, (1.0, 8.0))

    assert t.k == 8.0
    assert t.tx == pytest.approx(-3000.0)
    assert t.ty == pytest.approx(-1000.0)


def test_zoom_partly_past_max_scale_keeps_window_centre():
    current = ViewTransform(k=4.0, tx=0.0, ty=0.0)
    # 4x requested about (390, 160), only 2x allowed
    relayout = {"xaxis.range": [292.5, 487.5], "yaxis.range": [120, 200]}

    t = transform_from_relayout(relayout, current, 780, 320, (1.0, 8.0))

    assert t.k == 8.0
    assert t.tx == pytest.approx(-390.0)
    assert t.ty == pytest.approx(-160.0)
    # The pixel under the gesture centre stays where it was
    assert 2 * 390 + t.tx == pytest.approx(390)
    assert 2 * 160 + t.ty == pytest.approx(160)


def test_zoom_out_below_min_scale_is_a_no_op():
    relayout = {"xaxis.range": [-390, 1170], "yaxis.range": [-160, 480]}

    t = transform_from_relayout(relayout, ViewTransform(), 780, 320, (1.0, 8.0))

    assert t == ViewTransform()
