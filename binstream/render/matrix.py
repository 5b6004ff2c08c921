"""Waterfall grid rendering.

``MatrixRenderer`` turns the history buffer and color scale into a
``MatrixGrid``: a fixed ``capacity`` x ``width`` block of RGB cells plus the
axis extents the surface should use. Rows that are not populated yet stay at
the background color so the display height is stable while the buffer fills.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import numpy as np

from binstream.render.color import ColorScale
from binstream.render.history import HistoryBuffer
from binstream.util.logging import get_logger

logger = get_logger(__name__)

Extent = Tuple[float, float]


@dataclass(frozen=True)
class MatrixGrid:
    """Painted cells, indexed ``colors[y, x]`` with ``y == 0`` the oldest row."""

    colors: np.ndarray
    populated_rows: int
    x_extent: Extent
    y_extent: Extent

    @property
    def width(self) -> int:
        return int(self.colors.shape[1])

    @property
    def height(self) -> int:
        return int(self.colors.shape[0])

    def color_at(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b = self.colors[y, x]
        return int(r), int(g), int(b)


class Surface(Protocol):
    def show(self, grid: MatrixGrid) -> None:
        ...


def axis_extents(width: int, capacity: int) -> Tuple[Extent, Extent]:
    return (-0.5, width - 0.5), (-0.5, capacity - 0.5)


class MatrixRenderer:
    """Paint a ``MatrixGrid`` from buffer state; optionally push it to a surface."""

    def __init__(
        self,
        surface: Optional[Surface] = None,
        background: Tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        self.surface = surface
        self.background = np.asarray(background, dtype=np.uint8)
        self._width: Optional[int] = None
        self._extents: Tuple[Extent, Extent] = ((-0.5, -0.5), (-0.5, -0.5))

    @property
    def extents(self) -> Tuple[Extent, Extent]:
        return self._extents

    def build(self, history: HistoryBuffer, scale: ColorScale) -> MatrixGrid:
        """Return the grid for the current state without touching the surface."""
        width = history.current_width()
        capacity = history.capacity
        if width != self._width or self._extents[1][1] != capacity - 0.5:
            if self._width is not None and width != self._width:
                logger.debug("Bin count changed %d -> %d; re-deriving axes", self._width, width)
            self._width = width
            self._extents = axis_extents(width, capacity)

        colors = np.empty((capacity, width, 3), dtype=np.uint8)
        colors[...] = self.background
        values = history.to_array()
        if values.size:
            colors[: values.shape[0]] = scale.map_array(values)
        x_extent, y_extent = self._extents
        return MatrixGrid(colors=colors, populated_rows=len(history), x_extent=x_extent, y_extent=y_extent)

    def render(self, history: HistoryBuffer, scale: ColorScale) -> MatrixGrid:
        grid = self.build(history, scale)
        if self.surface is not None:
            self.surface.show(grid)
        return grid
