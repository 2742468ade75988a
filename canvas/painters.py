"""Tk canvas painter for the dashed rounded rect."""

from __future__ import annotations

import logging
import tkinter as tk
from enum import StrEnum

from canvas.plan import RenderPlan, plan_frame
from models.dashing import dash_runs
from models.geo import Point, Rect
from models.params import Params

log = logging.getLogger(__name__)


class Layer_Type(StrEnum):
    fill = "fill"
    stroke = "stroke"

    def tags(self) -> tuple[str, ...]:
        return (self.value, f"layer:{self.value}")


def _flat(points: list[Point]) -> list[float]:
    out: list[float] = []
    for p in points:
        out += [p.x, p.y]
    return out


class DashedRoundedRectView(tk.Canvas):
    """Canvas showing one dashed rounded rect sized to the widget."""

    def __init__(self, master: tk.Misc | None = None, params: Params | None = None, **kw) -> None:
        """Create the view.

        Args;
            master: Parent widget.
            params: Configuration to draw; a default one is created when omitted.
        """
        kw.setdefault("highlightthickness", 0)
        super().__init__(master, **kw)
        self.params = params or Params()
        self._pending: str | None = None
        # params.revision at the last paint
        self._drawn: int | None = None
        self.bind("<Configure>", self._on_configure)

    # ---- redraw scheduling ----
    def request_redraw(self, *, force: bool = False) -> None:
        """Redraw on the next idle pass when params.revision moved past the one this view painted."""
        if self._pending is not None:
            return
        if not force and self.params.revision == self._drawn:
            return
        self._pending = self.after_idle(self._redraw)

    def _on_configure(self, _evt: tk.Event) -> None:
        self.request_redraw(force=True)

    def bounds(self) -> Rect:
        return Rect(x=0, y=0, width=max(0, self.winfo_width()), height=max(0, self.winfo_height()))

    def _redraw(self) -> None:
        self._pending = None
        self._drawn = self.params.revision
        self.paint(plan_frame(self.params, self.bounds()))

    # ---- painting ----
    def paint(self, plan: RenderPlan) -> None:
        """Replace the current drawing with the given plan."""
        for layer in Layer_Type:
            self.delete(layer.value)
        self.paint_fill(plan)
        self.paint_stroke(plan)

    def paint_fill(self, plan: RenderPlan) -> None:
        if plan.fill is None:
            return
        pts = plan.path.outline()
        if len(pts) < 3:
            return
        self.create_polygon(*_flat(pts), fill=plan.fill.colour.hex, outline="", tags=Layer_Type.fill.tags())

    def paint_stroke(self, plan: RenderPlan) -> None:
        stroke = plan.stroke
        if stroke is None or plan.perimeter <= 0:
            return
        width = max(1, round(stroke.width))
        capstyle = stroke.capstyle.value
        if stroke.is_solid:
            pts = plan.path.outline()
            if len(pts) >= 2:
                self.create_polygon(
                    *_flat(pts),
                    fill="",
                    outline=stroke.colour.hex,
                    width=width,
                    tags=Layer_Type.stroke.tags(),
                )
            return

        # Tk only dashes in whole pixels, so each dash is its own polyline
        runs = dash_runs(plan.path, stroke.pattern, stroke.phase)
        for run in runs:
            self.create_line(
                *_flat(run),
                fill=stroke.colour.hex,
                width=width,
                capstyle=capstyle,
                joinstyle=tk.ROUND,
                tags=Layer_Type.stroke.tags(),
            )
        log.debug(f"Painted {len(runs)} dashes along {plan.perimeter:.2f}px")
