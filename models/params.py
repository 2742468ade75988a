from pathlib import Path
from typing import Any, Final

from pydantic import Field, PrivateAttr, field_validator

from models.styling import CapStyle, Colour, Colours, LineStyle, Model, normalise_lengths, scaled_pattern

# Changing any of these rebuilds dash_pattern, in this order
PATTERN_SIZE_FIELDS: Final[tuple[str, ...]] = (
    "first_dash_size",
    "first_gap_size",
    "second_dash_size",
    "second_gap_size",
)


class Params(Model):
    """
    Widget configuration.

    `dash_pattern` is the general way to set a pattern and may hold any number
    of dash/gap pairs. It starts out as
    [first_dash_size, first_gap_size, second_dash_size, second_gap_size] and is
    rebuilt from those four whenever one of them is assigned. Assigning
    `dash_pattern` directly does not touch the four sizes; whichever was
    written last is what gets drawn.
    """

    corner_radius: float = 10
    stroke_width: float = 1
    stroke_colour: Colour | None = None
    capstyle: CapStyle = CapStyle.BUTT
    is_filled: bool = False
    fill_colour: Colour | None = None
    first_dash_size: float = 3
    first_gap_size: float = 3
    second_dash_size: float = 0
    second_gap_size: float = 0
    dash_pattern: list[float] = Field(default_factory=list)
    phase: float = 0
    # export canvas
    width: int = 200
    height: int = 100
    bg_colour: Colour = Colours.transparent
    output_file: Path = Path("output.svg")

    _dirty: bool = PrivateAttr(default=True)
    # bumped on every field write; views compare it against what they last drew
    _revision: int = PrivateAttr(default=0)

    @field_validator(
        "corner_radius",
        "stroke_width",
        "first_dash_size",
        "first_gap_size",
        "second_dash_size",
        "second_gap_size",
        "width",
        "height",
    )
    @classmethod
    def _non_negative(cls, v: float) -> float:
        return v if v > 0 else type(v)(0)

    @field_validator("dash_pattern")
    @classmethod
    def _clean_pattern(cls, v: list[float]) -> list[float]:
        return list(normalise_lengths(v))

    def model_post_init(self, __context: Any) -> None:
        if "dash_pattern" not in self.model_fields_set:
            self.update_dash_pattern_from_sizes()
        self._dirty = True

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name in PATTERN_SIZE_FIELDS:
            self.update_dash_pattern_from_sizes()
        if name in type(self).model_fields:
            self._dirty = True
            self._revision += 1

    # ---- pattern ----
    def update_dash_pattern_from_sizes(self) -> None:
        """Replace dash_pattern with the four dash/gap sizes."""
        self.dash_pattern = [getattr(self, name) for name in PATTERN_SIZE_FIELDS]

    def apply_style(self, style: LineStyle) -> None:
        """Set dash_pattern from a named preset scaled by the stroke width."""
        self.dash_pattern = list(scaled_pattern(style, self.stroke_width))

    # ---- redraw bookkeeping ----
    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def revision(self) -> int:
        return self._revision

    def mark_clean(self) -> None:
        self._dirty = False
