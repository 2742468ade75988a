"""Rounded-rectangle outline that visits every perimeter point exactly once."""

from __future__ import annotations

import math
from dataclasses import dataclass

from models.geo import Path, Point, Rect


def stroke_inset(stroke_width: float) -> float:
    """Distance kept from the bounds so a centred stroke is never clipped."""
    return math.ceil(1 + max(0.0, stroke_width) / 2)


def effective_radius(corner_radius: float, draw_box: Rect) -> float:
    """Requested radius, or half the smaller side when the corners would overlap."""
    smaller = min(draw_box.width, draw_box.height)
    r = max(0.0, corner_radius)
    return r if r * 2 < smaller else smaller / 2


@dataclass(frozen=True, slots=True)
class RoundedRect:
    """
    Resolved geometry for one draw.

    Corner centres follow the layout
        A  B
        D  C
    each inset by `radius` from the matching corner of `draw_box`.
    """

    inset: float
    draw_box: Rect
    radius: float

    @property
    def a(self) -> Point:
        return Point(x=self.draw_box.min_x + self.radius, y=self.draw_box.min_y + self.radius)

    @property
    def b(self) -> Point:
        return Point(x=self.draw_box.max_x - self.radius, y=self.draw_box.min_y + self.radius)

    @property
    def c(self) -> Point:
        return Point(x=self.draw_box.max_x - self.radius, y=self.draw_box.max_y - self.radius)

    @property
    def d(self) -> Point:
        return Point(x=self.draw_box.min_x + self.radius, y=self.draw_box.max_y - self.radius)

    @property
    def perimeter(self) -> float:
        # four quarter arcs make one full circle
        r = self.radius
        return 2 * math.pi * r + 2 * self.draw_box.width + 2 * self.draw_box.height - 8 * r

    def path(self) -> Path:
        """Clockwise outline starting just left of A, ending with an implicit close."""
        r = self.radius
        a, b, c, d = self.a, self.b, self.c, self.d
        path = Path()
        path.move_to(a.x - r, a.y)
        path.arc(a, r, 180, 270)
        path.line_to(b.x, b.y - r)
        path.arc(b, r, 270, 360)
        path.line_to(c.x + r, c.y)
        path.arc(c, r, 0, 90)
        path.line_to(d.x, d.y + r)
        path.arc(d, r, 90, 180)
        return path.close()


def geometry(bounds: Rect, corner_radius: float, stroke_width: float) -> RoundedRect:
    inset = stroke_inset(stroke_width)
    draw_box = bounds.inset(inset).clamped()
    return RoundedRect(inset=inset, draw_box=draw_box, radius=effective_radius(corner_radius, draw_box))


def build(bounds: Rect, corner_radius: float, stroke_width: float) -> tuple[Path, float]:
    """
    Return the outline path and its exact length.

    Args;
        bounds: The layout box of the widget.
        corner_radius: Requested corner radius; clamped so corners never overlap.
        stroke_width: Stroke width; decides how far the outline is inset.
    """
    rr = geometry(bounds, corner_radius, stroke_width)
    return rr.path(), rr.perimeter
