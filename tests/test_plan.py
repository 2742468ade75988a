"""Tests for the per-draw render plan."""

import pytest

from canvas.plan import plan_frame
from models.geo import Rect
from models.params import Params
from models.styling import Colours

BOX = Rect(width=100, height=50)


def test_no_stroke_without_colour():
    plan = plan_frame(Params(), BOX)
    assert plan.stroke is None
    assert plan.fill is None
    assert plan.perimeter == pytest.approx(266.83, abs=0.01)


def test_fill_needs_flag_and_colour():
    assert plan_frame(Params(fill_colour=Colours.red), BOX).fill is None
    assert plan_frame(Params(is_filled=True), BOX).fill is None
    plan = plan_frame(Params(is_filled=True, fill_colour=Colours.red), BOX)
    assert plan.fill is not None
    assert plan.fill.colour == Colours.red


def test_stroke_gets_fitted_pattern():
    plan = plan_frame(Params(stroke_colour=Colours.black, phase=1.5), BOX)
    stroke = plan.stroke
    assert stroke is not None
    assert stroke.width == 1
    assert stroke.phase == 1.5
    assert stroke.fitted is not None
    assert stroke.fitted.repetitions == 44
    assert stroke.pattern == pytest.approx((3.032, 3.032, 0, 0), abs=1e-3)
    assert not stroke.is_solid


def test_zero_pattern_strokes_solid():
    params = Params(stroke_colour=Colours.black, first_dash_size=0, first_gap_size=0)
    stroke = plan_frame(params, BOX).stroke
    assert stroke is not None
    assert stroke.is_solid
    assert stroke.fitted is None


def test_plan_marks_clean():
    params = Params(stroke_colour=Colours.black)
    assert params.dirty
    plan_frame(params, BOX)
    assert not params.dirty
    params.corner_radius = 3
    assert params.dirty


def test_degenerate_bounds():
    plan = plan_frame(Params(stroke_colour=Colours.black), Rect(width=0, height=0))
    assert plan.perimeter == 0
    assert plan.stroke is not None
    assert plan.stroke.pattern == (0, 0, 0, 0)
