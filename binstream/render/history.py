"""Fixed-capacity FIFO of bin rows: the waterfall's state of record."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, NamedTuple

import numpy as np

from binstream.frame.types import BinRow

DEFAULT_ROWS = 200
DEFAULT_WIDTH = 64


class Cell(NamedTuple):
    x: int
    y: int
    value: float


class HistoryBuffer:
    """Oldest-first rows, never more than ``capacity`` of them.

    Rows keep the width they were captured with; readers see the buffer at the
    width of the newest row, padding narrower rows with zeros.
    """

    def __init__(self, capacity: int = DEFAULT_ROWS, default_width: int = DEFAULT_WIDTH) -> None:
        if int(capacity) <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = int(capacity)
        self._default_width = int(default_width)
        self._rows: Deque[BinRow] = deque()

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[BinRow]:
        return iter(self._rows)

    def push(self, row: BinRow) -> None:
        self._rows.append(row)
        while len(self._rows) > self.capacity:
            self._rows.popleft()

    def current_width(self) -> int:
        """Bin count of the newest row (``default_width`` while empty)."""
        if not self._rows:
            return self._default_width
        return self._rows[-1].width

    def rows(self) -> List[BinRow]:
        return list(self._rows)

    def to_cells(self) -> List[Cell]:
        width = self.current_width()
        return [
            Cell(x, y, row.value_at(x))
            for y, row in enumerate(self._rows)
            for x in range(width)
        ]

    def to_array(self) -> np.ndarray:
        """Rows as a ``(len(self), current_width())`` matrix, zero padded."""
        width = self.current_width()
        out = np.zeros((len(self._rows), width), dtype=np.float64)
        for y, row in enumerate(self._rows):
            n = min(width, row.width)
            if n:
                out[y, :n] = row.values[:n]
        return out

    def clear(self) -> None:
        self._rows.clear()
