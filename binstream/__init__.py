"""
binstream — live viewers for streamed spectral bin frames.

Frames arrive as JSON over a websocket, are decoded into ``BinFrame`` values
and handed to either the scrolling waterfall (matplotlib) or the terminal
ASCII chart. See ``binstream.cli`` for the command line.
"""
from __future__ import annotations

__version__ = "0.1.0"
