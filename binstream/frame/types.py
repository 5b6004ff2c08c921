"""Value types passed between the decoder, the history buffer and the renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class BinRow:
    """One frame's bins as stored in the history buffer."""

    values: Tuple[float, ...]

    @property
    def width(self) -> int:
        return len(self.values)

    def value_at(self, index: int) -> float:
        """Return the bin at ``index`` or 0.0 when the row is narrower."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return 0.0

    @property
    def peak(self) -> float:
        """Largest bin, never below zero (an empty row peaks at 0)."""
        return max((0.0, *self.values))


@dataclass(frozen=True)
class BinFrame:
    """A decoded message: bin magnitudes plus the session's frequency centers, if known."""

    bins: Tuple[float, ...]
    centers: Optional[Tuple[float, ...]] = None

    @property
    def width(self) -> int:
        return len(self.bins)

    def to_row(self) -> BinRow:
        return BinRow(values=self.bins)
