from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, model_validator


class Model(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)


class LineStyle(StrEnum):
    SOLID = "solid"
    DASH = "dash"
    LONG = "long"
    SHORT = "short"
    DOT = "dot"
    DASH_DOT = "dashdot"
    DASH_DOT_DOT = "dashdotdot"


class CapStyle(StrEnum):
    ROUND = "round"
    BUTT = "butt"
    PROJECTING = "projecting"


# Base patterns defined in *stroke-width units*
# (i.e., multiply by actual stroke width to get the nominal pattern)
_BASE: Final[dict[LineStyle | None, tuple[float, ...]]] = {
    None: (),  # solid
    LineStyle.SOLID: (),
    LineStyle.DASH: (3, 3),
    LineStyle.LONG: (6, 3),
    LineStyle.SHORT: (2, 2),
    LineStyle.DOT: (0.5, 1.5),
    LineStyle.DASH_DOT: (3, 2, 0.5, 2),
    LineStyle.DASH_DOT_DOT: (3, 2, 0.5, 2, 0.5, 2),
}


def normalise_lengths(seq: Iterable[float]) -> tuple[float, ...]:
    """Coerce to floats and clamp negative lengths to zero."""
    return tuple(max(0.0, float(v)) for v in seq)


def scaled_pattern(style: LineStyle | None, width: float) -> tuple[float, ...]:
    """
    Return a nominal dash pattern scaled by stroke width.
    - style: key into _BASE
    - width: stroke width; hairlines (0) scale as 1
    """
    base = _BASE.get(style, _BASE[None])
    if not base:
        return ()
    w = max(1.0, float(width))
    return normalise_lengths(seg * w for seg in base)


def svg_dasharray(pattern: Iterable[float]) -> str | None:
    """
    SVG stroke-dasharray string, or None for solid.
    """
    pat = tuple(pattern)
    if not pat or sum(pat) <= 0:
        return None
    return ",".join(f"{x:.4f}".rstrip("0").rstrip(".") for x in pat)


class Colour(Model):
    red: int
    green: int
    blue: int
    alpha: int = 255

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def _clamp(self):
        def clamp(v: int) -> int:
            return 0 if v < 0 else 255 if v > 255 else v

        object.__setattr__(self, "red", clamp(self.red))
        object.__setattr__(self, "green", clamp(self.green))
        object.__setattr__(self, "blue", clamp(self.blue))
        object.__setattr__(self, "alpha", clamp(self.alpha))
        return self

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return self.red, self.green, self.blue, self.alpha

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


class Colours:
    black: ClassVar[Colour] = Colour(red=0, green=0, blue=0)
    transparent: ClassVar[Colour] = Colour(red=0, green=0, blue=0, alpha=0)
    red: ClassVar[Colour] = Colour(red=255, green=0, blue=0)
    blue: ClassVar[Colour] = Colour(red=0, green=0, blue=255)

