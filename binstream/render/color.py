"""Adaptive magnitude-to-color scale for the waterfall.

The scale keeps a single peak value, ``color_max``, that jumps up to any
louder row immediately and decays by ``DECAY`` per frame otherwise. Values are
normalised against it on a soft log curve and mapped from blue (quiet) to red
(at or above the remembered peak).
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

DECAY = 0.98
FLOOR = 1e-6
SATURATION = 1.0
BRIGHTNESS = 0.95

RGB = Tuple[int, int, int]


def normalize(values: np.ndarray, color_max: float) -> np.ndarray:
    """Map magnitudes to ``t`` in [0, 1] with ``log10(1 + 9 * v / color_max)``."""
    values = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    ratio = np.maximum(values / color_max, 0.0)
    return np.clip(np.log10(1.0 + 9.0 * ratio) / math.log10(10.0), 0.0, 1.0)


def hsv_to_rgb(hue: np.ndarray, saturation: float = SATURATION, value: float = BRIGHTNESS) -> np.ndarray:
    """Sector-based HSV to RGB conversion; returns uint8 triples on the last axis.

    ``hue`` is in degrees, [0, 360).
    """
    hue = np.asarray(hue, dtype=np.float64)
    chroma = value * saturation
    hp = hue / 60.0
    x = chroma * (1.0 - np.abs(np.mod(hp, 2.0) - 1.0))
    zero = np.zeros_like(hp)
    c = np.full_like(hp, chroma)
    sector = np.floor(hp)
    conds = [sector == k for k in range(6)]
    r = np.select(conds, [c, x, zero, zero, x, c], default=0.0)
    g = np.select(conds, [x, c, c, x, zero, zero], default=0.0)
    b = np.select(conds, [zero, zero, x, c, c, x], default=0.0)
    m = value - chroma
    rgb = np.stack([r, g, b], axis=-1) + m
    # Math.round semantics: halves round up
    return np.floor(rgb * 255.0 + 0.5).astype(np.uint8)


def colors_for(values: np.ndarray, color_max: float) -> np.ndarray:
    """Vectorized value -> RGB mapping; output has an extra trailing axis of 3."""
    t = normalize(values, color_max)
    return hsv_to_rgb((1.0 - t) * 240.0)


class ColorScale:
    """Peak-hold color scale with multiplicative decay."""

    def __init__(self, decay: float = DECAY, floor: float = FLOOR) -> None:
        self.decay = decay
        self.floor = floor
        self.color_max = floor

    def update(self, row_max: float) -> float:
        """Fold one row's peak into the scale and return the new ``color_max``."""
        row_max = float(row_max)
        if not math.isfinite(row_max):
            row_max = 0.0
        self.color_max = max(self.color_max * self.decay, row_max, self.floor)
        return self.color_max

    def map_to_color(self, value: float, color_max: Optional[float] = None) -> RGB:
        scale = self.color_max if color_max is None else max(float(color_max), self.floor)
        r, g, b = colors_for(np.array([value], dtype=np.float64), scale)[0]
        return int(r), int(g), int(b)

    def map_array(self, values: np.ndarray) -> np.ndarray:
        return colors_for(values, self.color_max)

    def reset(self) -> None:
        self.color_max = self.floor
