"""Map a linear FFT magnitude spectrum onto log-spaced frequency bands."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

DEFAULT_SAMPLE_RATE = 48000
DEFAULT_FFT_SIZE = 2048
DEFAULT_BINS = 64
DEFAULT_MIN_HZ = 20.0


class LogBins:
    """Log-spaced bands from ``min_hz`` up to Nyquist.

    Invalid settings fall back to the defaults instead of raising.
    """

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        fft_size: int = DEFAULT_FFT_SIZE,
        bins: int = DEFAULT_BINS,
        min_hz: float = DEFAULT_MIN_HZ,
    ) -> None:
        self.sample_rate = int(sample_rate) if sample_rate > 0 else DEFAULT_SAMPLE_RATE
        self.fft_size = int(fft_size) if fft_size > 0 else DEFAULT_FFT_SIZE
        self.bins = int(bins) if bins > 0 else DEFAULT_BINS
        self.min_hz = float(min_hz) if min_hz > 0 else DEFAULT_MIN_HZ

    @property
    def nyquist(self) -> float:
        return 0.5 * self.sample_rate

    @property
    def hz_per_bin(self) -> float:
        return self.sample_rate / self.fft_size

    def edges_hz(self) -> List[Tuple[float, float]]:
        nyquist = self.nyquist
        lo_hz = min(max(1.0, self.min_hz), nyquist)
        hi_hz = max(lo_hz, nyquist)
        log_lo = math.log10(lo_hz)
        step = (math.log10(hi_hz) - log_lo) / self.bins

        edges: List[Tuple[float, float]] = []
        for i in range(self.bins):
            a = 10.0 ** (log_lo + step * i)
            b = min(10.0 ** (log_lo + step * (i + 1)), nyquist)
            edges.append((a, max(a, b)))
        return edges

    def centers_hz(self) -> List[float]:
        # geometric center suits log spacing
        return [math.sqrt(max(1e-6, lo) * max(1e-6, hi)) for lo, hi in self.edges_hz()]

    def compute(self, magnitude: Sequence[float]) -> np.ndarray:
        """Average the spectrum indices each band spans; ``magnitude`` covers 0..N/2."""
        mag = np.asarray(magnitude, dtype=np.float64)
        out = np.zeros(self.bins, dtype=np.float64)
        if mag.size == 0:
            return out
        hz_per_bin = self.hz_per_bin
        last = mag.size - 1
        for i, (lo, hi) in enumerate(self.edges_hz()):
            k_lo = max(0, int(math.floor(lo / hz_per_bin)))
            k_hi = min(last, int(math.ceil(hi / hz_per_bin)))
            if k_hi < k_lo:
                continue
            out[i] = float(np.mean(mag[k_lo : k_hi + 1]))
        return out
