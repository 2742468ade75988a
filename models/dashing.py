from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Final

from models.geo import FLATTEN_STEP, Path, Point
from models.styling import normalise_lengths

log = logging.getLogger(__name__)

# Empty pattern: stroke solid
SOLID: Final[tuple[float, ...]] = ()

MAX_SPANS = 200000
# Spans shorter than this are float drift at the seam
EPS = 1e-9


@dataclass(frozen=True, slots=True)
class FittedPattern:
    pattern: tuple[float, ...]
    repetitions: int
    stretch_ratio: float
    perimeter: float

    @property
    def pattern_length(self) -> float:
        return sum(self.pattern)


def fit_pattern(nominal: Sequence[float], perimeter: float) -> FittedPattern | None:
    """
    Stretch a dash pattern so a whole number of repeats spans the perimeter.
    Returns None when the pattern has no length (draw solid).
    """
    seq = normalise_lengths(nominal)
    pattern_length = sum(seq)
    if pattern_length <= 0:
        return None

    perimeter = max(0.0, float(perimeter))
    # halves round up
    repetitions = math.floor(perimeter / pattern_length + 0.5)
    if repetitions < 1:
        log.warning(f"Pattern of length {pattern_length:g} longer than perimeter {perimeter:g}; using one repeat")
        repetitions = 1

    ratio = perimeter / (pattern_length * repetitions)
    return FittedPattern(
        pattern=tuple(v * ratio for v in seq),
        repetitions=repetitions,
        stretch_ratio=ratio,
        perimeter=perimeter,
    )


def fit(nominal: Sequence[float], perimeter: float) -> tuple[float, ...]:
    """Fitted pattern lengths, or SOLID."""
    fitted = fit_pattern(nominal, perimeter)
    return fitted.pattern if fitted else SOLID


# --- Walking a pattern along a path -------------------------------------------


def iter_dash_spans(L: float, dash: Sequence[float] | None, phase: float = 0.0) -> Iterator[tuple[float, float, bool]]:
    """
    Yield (a, b, on) arc-length spans along [0, L] after applying dash+phase.
    Zero-length entries produce no span but still flip on/off.
    """
    if L <= 0:
        return
    seq = list(normalise_lengths(dash or ()))
    total = sum(seq)
    if not seq or total <= 0:  # solid
        yield 0.0, L, True
        return

    if len(seq) % 2 == 1:
        seq *= 2

    pos = -(phase % total)
    idx = 0
    while pos < L and idx < MAX_SPANS:
        seg_len = seq[idx % len(seq)]
        on = idx % 2 == 0
        a, b = max(0.0, pos), min(L, pos + seg_len)
        if b - a > EPS:
            yield a, b, on
        pos += seg_len
        idx += 1

    if pos < L:
        start = max(0.0, pos)
        log.warning(f"Dash pattern needs more than {MAX_SPANS} spans; stroking the last {L - start:g}px solid")
        yield start, L, True


def dash_runs(path: Path, dash: Sequence[float] | None, phase: float = 0.0, step: float = FLATTEN_STEP) -> list[list[Point]]:
    """Polylines for each visible dash of the pattern along the path."""
    L = path.length()
    runs: list[list[Point]] = []
    for a, b, on in iter_dash_spans(L, dash, phase):
        if not on:
            continue
        pts = path.points_between(a, b, step)
        if len(pts) >= 2:
            runs.append(pts)
    return runs
