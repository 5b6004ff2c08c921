"""Frame value types and the channel payload decoder."""
from __future__ import annotations

from binstream.frame.decoder import FrameDecoder, coerce_number
from binstream.frame.types import BinFrame, BinRow

__all__ = ["BinFrame", "BinRow", "FrameDecoder", "coerce_number"]
