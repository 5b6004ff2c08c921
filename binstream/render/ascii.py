"""Terminal line chart of a single frame, drawn with plotext."""

from __future__ import annotations

from typing import List, Sequence

import plotext as plt

from binstream.frame.types import BinFrame

DEFAULT_MAX_POINTS = 64
DEFAULT_HEIGHT = 15
# Columns reserved for plotext's y-axis labels
LABEL_COLUMNS = 12


def downsample(bins: Sequence[float], max_points: int = DEFAULT_MAX_POINTS) -> List[float]:
    """Every ``stride``-th bin from index 0, ``stride = max(1, len // max_points)``.

    Plain subsampling, not bucket averaging.
    """
    if max_points <= 0:
        raise ValueError("max_points must be positive")
    stride = max(1, len(bins) // max_points)
    return list(bins[::stride])


def format_centers(centers: Sequence[float]) -> str:
    lo = f"{centers[0]:.1f}" if centers else "?"
    hi = f"{centers[-1]:.1f}" if centers else "?"
    return f"Centers: {lo} Hz .. {hi} Hz"


class AsciiRenderer:
    """Render one frame at a time.

    The centers line comes from ``frame.centers``, which the decoder pins to the
    first centers of the session.
    """

    def __init__(self, max_points: int = DEFAULT_MAX_POINTS, height: int = DEFAULT_HEIGHT) -> None:
        if max_points <= 0:
            raise ValueError("max_points must be positive")
        self.max_points = max_points
        self.height = height

    def chart(self, series: Sequence[float]) -> str:
        plt.clf()
        plt.theme("clear")
        plt.plotsize(self.max_points + LABEL_COLUMNS, self.height)
        plt.plot(list(series))
        return plt.build()

    def render(self, frame: BinFrame) -> str:
        lines = [f"Audio log bins ({frame.width})"]
        series = downsample(frame.bins, self.max_points)
        if series:
            lines.append(self.chart(series))
        if frame.centers is not None:
            lines.append(format_centers(frame.centers))
        return "\n".join(lines)
