"""FFT helpers for the demo producer."""

from __future__ import annotations

import numpy as np

METER_FLOOR_DB = -80.0


def magnitude_spectrum(frame: np.ndarray) -> np.ndarray:
    """Hann-windowed real FFT magnitudes for bins 0..N/2, normalised by 1/N."""
    frame = np.asarray(frame, dtype=np.float64)
    n = frame.size
    if n == 0:
        return np.zeros(1, dtype=np.float64)
    # np.hanning matches the symmetric 0.5 * (1 - cos(2*pi*i/(n-1))) window
    windowed = frame * np.hanning(n) if n > 1 else frame
    return np.abs(np.fft.rfft(windowed)) / n


def mag_to_meter(mag: np.ndarray, floor_db: float = METER_FLOOR_DB) -> np.ndarray:
    """Linear magnitude -> 0..1 meter over ``floor_db``..0 dBFS."""
    db = 20.0 * np.log10(np.maximum(np.asarray(mag, dtype=np.float64), 1e-9))
    clamped = np.clip(db, floor_db, 0.0)
    return (clamped - floor_db) / (0.0 - floor_db)
