"""Tests for the rounded-rect outline builder."""

import math

import pytest

from models import rounded_rect
from models.geo import ArcTo, ClosePath, LineSegment, LineTo, MoveTo, Rect


def test_stroke_inset_rounds_up():
    assert rounded_rect.stroke_inset(1) == 2
    assert rounded_rect.stroke_inset(0) == 1
    assert rounded_rect.stroke_inset(2) == 2
    assert rounded_rect.stroke_inset(3) == 3


def test_example_geometry():
    """100x50, radius 10, stroke 1 → inset 2, 96x46 box, perimeter 266.83."""
    rr = rounded_rect.geometry(Rect(width=100, height=50), 10, 1)
    assert rr.inset == 2
    assert (rr.draw_box.x, rr.draw_box.y, rr.draw_box.width, rr.draw_box.height) == (2, 2, 96, 46)
    assert rr.radius == 10
    assert rr.perimeter == pytest.approx(266.83, abs=0.01)


def test_corner_centres():
    rr = rounded_rect.geometry(Rect(width=100, height=50), 10, 1)
    assert rr.a.as_tuple() == (12, 12)
    assert rr.b.as_tuple() == (88, 12)
    assert rr.c.as_tuple() == (88, 38)
    assert rr.d.as_tuple() == (12, 38)


def test_command_order():
    """move, arc, line, arc, line, arc, line, arc, close."""
    path, _ = rounded_rect.build(Rect(width=100, height=50), 10, 1)
    kinds = [type(c) for c in path.commands]
    assert kinds == [MoveTo, ArcTo, LineTo, ArcTo, LineTo, ArcTo, LineTo, ArcTo, ClosePath]
    arcs = [c for c in path.commands if isinstance(c, ArcTo)]
    assert [(a.start_deg, a.end_deg) for a in arcs] == [(180, 270), (270, 360), (0, 90), (90, 180)]
    assert all(a.clockwise for a in arcs)
    assert path.commands[0].p.as_tuple() == (2, 12)


@pytest.mark.parametrize(
    "w, h, radius, stroke",
    [
        (100, 50, 10, 1),
        (100, 50, 30, 1),
        (40, 300, 5, 7),
        (64, 64, 0, 2),
        (64, 64, 100, 0),
        (10, 10, 3, 20),
        (0, 0, 10, 1),
        (3.5, 200, 1, 1),
    ],
)
def test_segments_sum_to_perimeter(w, h, radius, stroke):
    """No segment is drawn twice: the pieces add up to the closed form."""
    path, perimeter = rounded_rect.build(Rect(width=w, height=h), radius, stroke)
    assert path.length() == pytest.approx(perimeter, abs=1e-9)


@pytest.mark.parametrize("radius", [0, 5, 22.9, 23, 24, 500])
def test_radius_clamp(radius):
    rr = rounded_rect.geometry(Rect(width=100, height=50), radius, 1)
    smaller = min(rr.draw_box.width, rr.draw_box.height)
    assert rr.radius <= smaller / 2
    if radius * 2 < smaller:
        assert rr.radius == radius
    else:
        assert rr.radius == smaller / 2


def test_zero_radius_is_plain_rectangle():
    path, perimeter = rounded_rect.build(Rect(width=50, height=30), 0, 1)
    assert perimeter == pytest.approx(2 * 46 + 2 * 26)
    lines = [s for s in path.segments() if isinstance(s, LineSegment)]
    assert sum(s.length for s in lines) == pytest.approx(perimeter)


def test_degenerate_box():
    """0x0 clamps to a zero-size draw box with radius 0 and perimeter 0."""
    rr = rounded_rect.geometry(Rect(width=0, height=0), 10, 1)
    assert rr.draw_box.width == 0
    assert rr.draw_box.height == 0
    assert rr.radius == 0
    assert rr.perimeter == 0


def test_stroke_wider_than_box():
    path, perimeter = rounded_rect.build(Rect(width=20, height=20), 4, 50)
    assert perimeter == 0
    assert path.length() == 0


def test_negative_inputs_clamp():
    rr = rounded_rect.geometry(Rect(width=100, height=50), -5, -3)
    assert rr.inset == 1
    assert rr.radius == 0


def test_arc_length_is_quarter_circle():
    path, _ = rounded_rect.build(Rect(width=100, height=50), 10, 1)
    arcs = [s for s in path.segments() if not isinstance(s, LineSegment)]
    assert len(arcs) == 4
    for arc in arcs:
        assert arc.length == pytest.approx(math.pi * 10 / 2)
