"""Concrete painting surfaces for the two viewers.

These are the only places that know about matplotlib or terminal escape
sequences; everything upstream hands them finished grids or text.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

import numpy as np

from binstream.render.matrix import MatrixGrid

CLEAR_HOME = "\x1b[2J\x1b[H"


class MatplotlibSurface:
    """Waterfall image in a matplotlib figure with a status line as the title."""

    def __init__(self, ws_url: str, rows: int, figsize=(10, 6)) -> None:
        import matplotlib.pyplot as plt

        self._plt = plt
        self.ws_url = ws_url
        self.rows = rows
        self.bins: Optional[int] = None
        self.status = ""
        self.closed = False

        plt.ion()
        self.figure, self.ax = plt.subplots(figsize=figsize)
        self.figure.canvas.mpl_connect("close_event", self._on_close)
        self.ax.set_axis_off()
        blank = np.zeros((max(1, rows), 1, 3), dtype=np.uint8)
        self.image = self.ax.imshow(
            blank,
            origin="lower",
            aspect="auto",
            interpolation="nearest",
            extent=(-0.5, 0.5, -0.5, rows - 0.5),
        )
        self._refresh_title()
        self.figure.show()

    def _on_close(self, _event) -> None:
        self.closed = True

    def _refresh_title(self) -> None:
        bins = "?" if self.bins is None else str(self.bins)
        self.ax.set_title(f"{self.ws_url}   rows={self.rows}   bins={bins}   [{self.status}]", fontsize=9)

    def set_status(self, text: str) -> None:
        self.status = text
        self._refresh_title()
        self.figure.canvas.draw_idle()

    def show(self, grid: MatrixGrid) -> None:
        if grid.width != self.bins:
            self.bins = grid.width
            self._refresh_title()
        if grid.width == 0:
            self.image.set_data(np.zeros((grid.height, 1, 3), dtype=np.uint8))
        else:
            self.image.set_data(grid.colors)
        x0, x1 = grid.x_extent
        y0, y1 = grid.y_extent
        self.image.set_extent((x0, x1, y0, y1))
        self.ax.set_xlim(x0, x1)
        self.ax.set_ylim(y0, y1)
        self.figure.canvas.draw_idle()

    def pump(self) -> None:
        """Let the GUI backend process pending events without blocking."""
        self.figure.canvas.flush_events()


class TerminalWriter:
    """Repaint the whole terminal with each chart."""

    def __init__(self, out: TextIO = sys.stdout, clear: bool = True) -> None:
        self.out = out
        self.clear = clear

    def show(self, text: str) -> None:
        if self.clear:
            self.out.write(CLEAR_HOME)
        self.out.write(text + "\n")
        self.out.flush()

    def line(self, text: str) -> None:
        self.out.write(text + "\n")
        self.out.flush()
