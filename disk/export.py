from __future__ import annotations

import io
import logging
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from PIL import Image, ImageDraw

from canvas.plan import RenderPlan, plan_frame
from disk.formats import Formats
from models.dashing import dash_runs
from models.geo import Rect
from models.params import Params
from models.styling import CapStyle, Colour, svg_dasharray

log = logging.getLogger(__name__)


class RASTERISERS(StrEnum):
    pil = "pil"
    cairosvg = "cairosvg"


# Choose how rasters are produced (PIL draw or via SVG rasterisation)
RASTER_BACKEND = RASTERISERS.cairosvg


# -----------------------------------------------------------------------------
# SVG helpers
# -----------------------------------------------------------------------------


def _col_and_opacity(col: Colour, attr: str = "opacity") -> tuple[str, str]:
    """Return (svg_hex, extra_opacity_attr) for SVG emitters."""
    if col.alpha < 255:
        return col.hex, f' {attr}="{col.alpha / 255:.3f}"'
    return col.hex, ""


def _svg_cap(cap: CapStyle) -> str:
    # Tk: "butt" | "round" | "projecting"
    # SVG: "butt" | "round" | "square"
    return "square" if cap == CapStyle.PROJECTING else cap.value


def _svg_shape(plan: RenderPlan) -> str:
    """One <path> carrying both fill and stroke."""
    attrs = [f'd="{plan.path.svg_d()}"']
    if plan.fill is not None:
        fill, fop = _col_and_opacity(plan.fill.colour, "fill-opacity")
        attrs.append(f'fill="{fill}"{fop}')
    else:
        attrs.append('fill="none"')

    stroke = plan.stroke
    if stroke is not None and plan.perimeter > 0:
        col, sop = _col_and_opacity(stroke.colour, "stroke-opacity")
        attrs.append(f'stroke="{col}"{sop}')
        attrs.append(f'stroke-width="{stroke.width or 1:g}"')
        attrs.append(f'stroke-linecap="{_svg_cap(stroke.capstyle)}" stroke-linejoin="round"')
        arr = svg_dasharray(stroke.pattern)
        if arr:
            attrs.append(f'stroke-dasharray="{arr}"')
            if stroke.phase:
                attrs.append(f'stroke-dashoffset="{stroke.phase:g}"')
    return "<path " + " ".join(attrs) + "/>"


# -----------------------------------------------------------------------------
# PIL stroker
# -----------------------------------------------------------------------------


def _draw_plan(draw: ImageDraw.ImageDraw, plan: RenderPlan) -> None:
    if plan.fill is not None:
        pts = [p.as_tuple() for p in plan.path.outline()]
        if len(pts) >= 3:
            draw.polygon(pts, fill=plan.fill.colour.rgba)

    stroke = plan.stroke
    if stroke is None or plan.perimeter <= 0:
        return
    width = max(1, round(stroke.width))
    rgba = stroke.colour.rgba
    for run in dash_runs(plan.path, stroke.pattern, stroke.phase):
        draw.line([p.as_tuple() for p in run], fill=rgba, width=width, joint="curve")


# -----------------------------------------------------------------------------
# Exporter
# -----------------------------------------------------------------------------


class Exporter:
    """
    Public API:
        - Exporter.output(params) → Path
            Dispatches based on params.output_file suffix
    """

    supported: dict[Formats, Callable[[Params], Path]] = {}

    @classmethod
    def output(cls, params: Params) -> Path:
        fmt = Formats.check(params.output_file)
        func = cls.supported.get(fmt) if fmt else None
        if not fmt or not func:
            raise ValueError(f"Unsupported output type: {params.output_file.suffix}")
        path = func(params)
        log.info(f"Exported {fmt.value} to {path}")
        return path

    @classmethod
    def match_supported(cls) -> dict[Formats, Callable[[Params], Path]]:
        """Build the dispatch table from Formats → handler methods."""
        sups: dict[Formats, Callable[[Params], Path]] = {}
        for fmt in Formats:
            handler = getattr(cls, fmt.name, None)
            if not callable(handler):
                raise NotImplementedError(f"Exporter missing handler for '{fmt.name}'")
            sups[fmt] = handler  # pyright: ignore[reportArgumentType]
        cls.supported = sups
        return sups

    # ---------------- Internal helpers ----------------
    @staticmethod
    def _plan(params: Params) -> RenderPlan:
        return plan_frame(params, Rect(x=0, y=0, width=params.width, height=params.height))

    @staticmethod
    def _svg_string(params: Params) -> str:
        """Generate SVG markup as a single string."""
        W, H = params.width, params.height
        parts: list[str] = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{W}" height="{H}" viewBox="0 0 {W} {H}">']

        if params.bg_colour.alpha != 0:
            fill, op = _col_and_opacity(params.bg_colour)
            parts.append(f'<rect x="0" y="0" width="{W}" height="{H}" fill="{fill}"{op}/>')

        plan = Exporter._plan(params)
        if plan.fill is not None or plan.stroke is not None:
            parts.append(_svg_shape(plan))

        parts.append("</svg>")
        return "\n".join(parts)

    @staticmethod
    def _draw(params: Params) -> Image.Image:
        img = Image.new("RGBA", (params.width, params.height), params.bg_colour.rgba)
        _draw_plan(ImageDraw.Draw(img), Exporter._plan(params))
        return img

    # ---------------- Public handlers ----------------
    @staticmethod
    def svg(params: Params) -> Path:
        params.output_file.write_text(Exporter._svg_string(params), encoding="utf-8")
        return params.output_file

    @classmethod
    def png(cls, params: Params) -> Path:
        if RASTER_BACKEND is RASTERISERS.pil:
            cls._draw(params).save(params.output_file, **Formats.png.save_options())
        else:
            params.output_file.write_bytes(_rasterize_via_svg(params, Formats.png, cls._svg_string(params)))
        return params.output_file

    @classmethod
    def webp(cls, params: Params) -> Path:
        if RASTER_BACKEND is RASTERISERS.pil:
            cls._draw(params).save(params.output_file, **Formats.webp.save_options())
        else:
            params.output_file.write_bytes(_rasterize_via_svg(params, Formats.webp, cls._svg_string(params)))
        return params.output_file


# -----------------------------------------------------------------------------
# SVG → raster
# -----------------------------------------------------------------------------


def _rasterize_via_svg(params: Params, fmt: Formats, svg_text: str) -> bytes:
    # cairosvg loads libcairo on import
    import cairosvg

    png = cairosvg.svg2png(
        bytestring=svg_text.encode("utf-8"), output_width=params.width, output_height=params.height
    )
    if not isinstance(png, bytes):
        raise RuntimeError(f"Failed to rasterise SVG for {fmt.value} export")
    if fmt == Formats.png:
        return png

    img = Image.open(io.BytesIO(png)).convert("RGBA")
    buf = io.BytesIO()
    img.save(buf, **fmt.save_options())
    return buf.getvalue()


# Build the dispatch table immediately on import
Exporter.match_supported()
