import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated, Literal, Self

from pydantic import ConfigDict, Field

from models.styling import Model

# Longest chord used when flattening arcs for polyline renderers
FLATTEN_STEP = 2.0


class Point(Model):
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y


class Rect(Model):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def inset(self, d: float) -> Self:
        """Shrink by d on all sides. Width/height may go negative."""
        return self.model_copy(
            update={"x": self.x + d, "y": self.y + d, "width": self.width - 2 * d, "height": self.height - 2 * d}
        )

    def clamped(self) -> Self:
        """Clamp negative width/height to zero, keeping the origin."""
        return self.model_copy(update={"width": max(0.0, self.width), "height": max(0.0, self.height)})


# ---------------------------------------------------------------------------
# Path commands
# ---------------------------------------------------------------------------


class MoveTo(Model):
    kind: Literal["move"] = "move"
    p: Point


class LineTo(Model):
    kind: Literal["line"] = "line"
    p: Point


class ArcTo(Model):
    """Circular arc; angles in degrees, 0° pointing +x, y growing downward."""

    kind: Literal["arc"] = "arc"
    center: Point
    radius: float
    start_deg: float
    end_deg: float
    clockwise: bool = True

    def point_at(self, deg: float) -> Point:
        r = math.radians(deg)
        return Point(x=self.center.x + self.radius * math.cos(r), y=self.center.y + self.radius * math.sin(r))

    @property
    def start(self) -> Point:
        return self.point_at(self.start_deg)

    @property
    def end(self) -> Point:
        return self.point_at(self.end_deg)

    @property
    def sweep_deg(self) -> float:
        """Signed sweep, positive for clockwise on screen."""
        if self.clockwise:
            return (self.end_deg - self.start_deg) % 360 or (360.0 if self.end_deg != self.start_deg else 0.0)
        return -((self.start_deg - self.end_deg) % 360 or (360.0 if self.end_deg != self.start_deg else 0.0))


class ClosePath(Model):
    kind: Literal["close"] = "close"


PathCommand = Annotated[MoveTo | LineTo | ArcTo | ClosePath, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Segments (resolved commands with exact lengths)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineSegment:
    a: Point
    b: Point

    @property
    def length(self) -> float:
        return self.a.distance_to(self.b)

    def point(self, s: float) -> Point:
        L = self.length
        if L <= 0:
            return self.a
        t = s / L
        return Point(x=self.a.x + (self.b.x - self.a.x) * t, y=self.a.y + (self.b.y - self.a.y) * t)

    def sample(self, s0: float, s1: float, step: float) -> list[Point]:
        return [self.point(s0), self.point(s1)]


@dataclass(frozen=True, slots=True)
class ArcSegment:
    center: Point
    radius: float
    start_deg: float
    sweep_deg: float

    @property
    def length(self) -> float:
        return abs(math.radians(self.sweep_deg)) * self.radius

    def point(self, s: float) -> Point:
        L = self.length
        t = s / L if L > 0 else 0.0
        r = math.radians(self.start_deg + self.sweep_deg * t)
        return Point(x=self.center.x + self.radius * math.cos(r), y=self.center.y + self.radius * math.sin(r))

    def sample(self, s0: float, s1: float, step: float) -> list[Point]:
        n = max(1, math.ceil((s1 - s0) / step)) if step > 0 else 1
        return [self.point(s0 + (s1 - s0) * i / n) for i in range(n + 1)]


Segment = LineSegment | ArcSegment


class Path(Model):
    """Ordered sequence of path commands."""

    commands: list[PathCommand] = Field(default_factory=list)

    def move_to(self, x: float, y: float) -> Self:
        self.commands.append(MoveTo(p=Point(x=x, y=y)))
        return self

    def line_to(self, x: float, y: float) -> Self:
        self.commands.append(LineTo(p=Point(x=x, y=y)))
        return self

    def arc(self, center: Point, radius: float, start_deg: float, end_deg: float, *, clockwise: bool = True) -> Self:
        self.commands.append(
            ArcTo(center=center, radius=radius, start_deg=start_deg, end_deg=end_deg, clockwise=clockwise)
        )
        return self

    def close(self) -> Self:
        self.commands.append(ClosePath())
        return self

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], ClosePath)

    def segments(self) -> list[Segment]:
        out: list[Segment] = []
        start: Point | None = None
        cur: Point | None = None
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                start = cur = cmd.p
            elif isinstance(cmd, LineTo):
                if cur is None:
                    start = cur = cmd.p
                    continue
                out.append(LineSegment(cur, cmd.p))
                cur = cmd.p
            elif isinstance(cmd, ArcTo):
                a = cmd.start
                # an arc away from the current point is joined by a straight line
                if cur is None:
                    start = a
                elif cur.distance_to(a) > 1e-9:
                    out.append(LineSegment(cur, a))
                out.append(ArcSegment(cmd.center, cmd.radius, cmd.start_deg, cmd.sweep_deg))
                cur = cmd.end
            elif isinstance(cmd, ClosePath):
                if cur is not None and start is not None:
                    out.append(LineSegment(cur, start))
                    cur = start
        return out

    def length(self) -> float:
        return sum(seg.length for seg in self.segments())

    def points_between(self, a: float, b: float, step: float = FLATTEN_STEP) -> list[Point]:
        """Polyline following the path from arc length a to arc length b."""
        pts: list[Point] = []
        pos = 0.0
        for seg in self.segments():
            L = seg.length
            s0, s1 = max(a, pos), min(b, pos + L)
            if s1 >= s0 and (L > 0 or not pts):
                for p in seg.sample(s0 - pos, s1 - pos, step):
                    if not pts or pts[-1].distance_to(p) > 1e-9:
                        pts.append(p)
            pos += L
            if pos >= b:
                break
        return pts

    def outline(self, step: float = FLATTEN_STEP) -> list[Point]:
        return self.points_between(0.0, self.length(), step)

    def iter_svg(self) -> Iterator[str]:
        cur: Point | None = None
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                cur = cmd.p
                yield f"M {_num(cmd.p.x)} {_num(cmd.p.y)}"
            elif isinstance(cmd, LineTo):
                cur = cmd.p
                yield f"L {_num(cmd.p.x)} {_num(cmd.p.y)}"
            elif isinstance(cmd, ArcTo):
                s, e = cmd.start, cmd.end
                if cur is None:
                    yield f"M {_num(s.x)} {_num(s.y)}"
                elif cur.distance_to(s) > 1e-9:
                    yield f"L {_num(s.x)} {_num(s.y)}"
                cur = e
                large = 1 if abs(cmd.sweep_deg) > 180 else 0
                sweep = 1 if cmd.sweep_deg > 0 else 0
                r = _num(cmd.radius)
                yield f"A {r} {r} 0 {large} {sweep} {_num(e.x)} {_num(e.y)}"
            elif isinstance(cmd, ClosePath):
                yield "Z"

    def svg_d(self) -> str:
        return " ".join(self.iter_svg())


def _num(v: float) -> str:
    return f"{v:.4f}".rstrip("0").rstrip(".") or "0"
