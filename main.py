"""Application entry point for Dashrect"""

import logging
import sys
import tkinter as tk

from canvas.painters import DashedRoundedRectView
from disk.export import Exporter
from models.params import Params
from models.styling import Colours

MIN_PYTHON: tuple[int, int] = (3, 11)

log = logging.getLogger(__name__)


def main() -> None:
    """Run the Dashrect demo window"""
    if sys.version_info < MIN_PYTHON:
        raise RuntimeError("Dashrect requires Python 3.11+")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = tk.Tk()
    root.title("Dashrect")
    params = Params(corner_radius=16, stroke_width=2, stroke_colour=Colours.black, width=320, height=200)
    view = DashedRoundedRectView(root, params=params, width=params.width, height=params.height, bg="white")
    view.pack(fill=tk.BOTH, expand=True)

    def export(_evt: tk.Event) -> None:
        bounds = view.bounds()
        params.width, params.height = round(bounds.width), round(bounds.height)
        try:
            Exporter.output(params)
        except (ValueError, RuntimeError, OSError) as xcp:
            log.error(f"Export failed: {xcp}")
        view.request_redraw()

    root.bind("<Control-s>", export)
    try:
        root.mainloop()
    except tk.TclError as xcp:
        if "application has been destroyed" not in str(xcp):
            raise


if __name__ == "__main__":
    main()
