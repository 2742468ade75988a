import enum
from pathlib import Path
from typing import Any


class Formats(enum.StrEnum):
    svg = enum.auto()
    png = enum.auto()
    webp = enum.auto()

    @classmethod
    def check(cls, path: Path) -> "Formats | None":
        """Format for a file suffix, case-insensitive; None when unsupported."""
        suf = path.suffix[1:].lower()
        return Formats(suf) if suf in {f.value for f in Formats} else None

    @property
    def is_raster(self) -> bool:
        return self is not Formats.svg

    def save_options(self) -> dict[str, Any]:
        """Keyword arguments for PIL.Image.save."""
        if not self.is_raster:
            raise ValueError(f"{self.value} is not a raster format")
        opts: dict[str, Any] = {"format": self.upper()}
        if self is Formats.webp:
            opts.update(lossless=True, method=6)
        return opts
