"""Tests for Tk view redraw scheduling (no display needed)."""

import pytest

pytest.importorskip("tkinter")

from canvas.painters import DashedRoundedRectView  # noqa: E402
from canvas.plan import plan_frame  # noqa: E402
from models.geo import Rect  # noqa: E402
from models.params import Params  # noqa: E402


def _view(params):
    view = DashedRoundedRectView.__new__(DashedRoundedRectView)
    view.params = params
    view._pending = None
    view._drawn = None
    view.scheduled = []

    def after_idle(func):
        view.scheduled.append(func)
        return f"after#{len(view.scheduled)}"

    view.after_idle = after_idle
    return view


def _mark_painted(view):
    """Stand in for the idle callback without touching Tk."""
    view._pending = None
    view._drawn = view.params.revision


def test_unchanged_params_skip_redraw():
    view = _view(Params())
    _mark_painted(view)
    view.request_redraw()
    assert view.scheduled == []


def test_force_always_schedules():
    view = _view(Params())
    _mark_painted(view)
    view.request_redraw(force=True)
    assert len(view.scheduled) == 1


def test_redraw_coalesced():
    params = Params()
    view = _view(params)
    params.phase = 1
    view.request_redraw()
    view.request_redraw()
    assert len(view.scheduled) == 1


def test_change_planned_elsewhere_still_redraws():
    """An export that plans the shared params first must not hide the change from the view."""
    params = Params(width=320, height=200)
    view = _view(params)
    _mark_painted(view)

    params.width, params.height = 400, 250
    plan_frame(params, Rect(width=params.width, height=params.height))
    assert not params.dirty

    view.request_redraw()
    assert len(view.scheduled) == 1
