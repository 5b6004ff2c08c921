"""Per-viewer sessions: the consumers a ``StreamClient`` dispatches frames to.

Each session owns its own history and color scale, so several viewers (or
tests) can run side by side without sharing state.
"""

from __future__ import annotations

from typing import Optional, Protocol

from binstream.frame.types import BinFrame
from binstream.render.ascii import AsciiRenderer
from binstream.render.color import ColorScale
from binstream.render.history import DEFAULT_ROWS, HistoryBuffer
from binstream.render.matrix import MatrixGrid, MatrixRenderer, Surface


class FrameSink(Protocol):
    def accept(self, frame: BinFrame) -> None:
        ...


class TextSurface(Protocol):
    def show(self, text: str) -> None:
        ...


class WaterfallSession:
    """Graphical waterfall: buffer the row, update the scale, repaint the grid."""

    def __init__(self, rows: int = DEFAULT_ROWS, surface: Optional[Surface] = None) -> None:
        self.history = HistoryBuffer(rows)
        self.scale = ColorScale()
        self.renderer = MatrixRenderer(surface)
        self.last_grid: Optional[MatrixGrid] = None
        self.frames = 0

    def accept(self, frame: BinFrame) -> None:
        row = frame.to_row()
        self.scale.update(row.peak)
        self.history.push(row)
        self.last_grid = self.renderer.render(self.history, self.scale)
        self.frames += 1


class TerminalSession:
    """ASCII viewer: each frame replaces the previous chart on screen."""

    def __init__(
        self,
        surface: TextSurface,
        renderer: Optional[AsciiRenderer] = None,
        display_name: str = "",
        display_age: str = "",
    ) -> None:
        self.surface = surface
        self.renderer = renderer or AsciiRenderer()
        self.display_name = display_name
        self.display_age = display_age

    def banner(self) -> str:
        if not self.display_name:
            return ""
        age = f" ({self.display_age})" if self.display_age else ""
        return f"For {self.display_name}{age}\n\n"

    def accept(self, frame: BinFrame) -> None:
        self.surface.show(self.banner() + self.renderer.render(frame))
