"""Per-draw render plan: what a renderer fills and strokes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from models import rounded_rect
from models.dashing import SOLID, FittedPattern, fit_pattern
from models.geo import Path, Rect
from models.params import Params
from models.styling import CapStyle, Colour

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Fill:
    colour: Colour


@dataclass(frozen=True, slots=True)
class Stroke:
    colour: Colour
    width: float
    pattern: tuple[float, ...]
    phase: float
    capstyle: CapStyle = CapStyle.BUTT
    fitted: FittedPattern | None = None

    @property
    def is_solid(self) -> bool:
        return not self.pattern or sum(self.pattern) <= 0


@dataclass(frozen=True, slots=True)
class RenderPlan:
    path: Path
    perimeter: float
    fill: Fill | None = None
    stroke: Stroke | None = None


def plan_frame(params: Params, bounds: Rect) -> RenderPlan:
    """Compute the outline and final dash pattern for one redraw, then mark params clean."""
    path, perimeter = rounded_rect.build(bounds, params.corner_radius, params.stroke_width)

    fill = None
    if params.is_filled and params.fill_colour is not None:
        fill = Fill(params.fill_colour)

    stroke = None
    if params.stroke_colour is not None:
        fitted = fit_pattern(params.dash_pattern, perimeter)
        stroke = Stroke(
            colour=params.stroke_colour,
            width=params.stroke_width,
            pattern=fitted.pattern if fitted else SOLID,
            phase=params.phase,
            capstyle=params.capstyle,
            fitted=fitted,
        )
        if fitted:
            log.debug(f"Fitted {params.dash_pattern} to {fitted.repetitions} repeats (x{fitted.stretch_ratio:.4f})")

    params.mark_clean()
    return RenderPlan(path=path, perimeter=perimeter, fill=fill, stroke=stroke)
