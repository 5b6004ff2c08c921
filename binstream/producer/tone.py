"""Synthetic spectrum source: a sine tone sweeping up and down the audio band."""

from __future__ import annotations

import math
from typing import Dict, List

import numpy as np

from binstream.config import ProducerConfig
from binstream.dsp.fft import mag_to_meter, magnitude_spectrum
from binstream.dsp.logbins import LogBins


class ToneSweep:
    """Phase-continuous sine generator bouncing between ``low_hz`` and ``high_hz``."""

    def __init__(
        self,
        sample_rate: int,
        start_hz: float = 220.0,
        low_hz: float = 110.0,
        high_hz: float = 1760.0,
        step_hz: float = 0.5,
        amplitude: float = 0.2,
    ) -> None:
        self.sample_rate = sample_rate
        self.tone_hz = start_hz
        self.low_hz = low_hz
        self.high_hz = high_hz
        self.step_hz = step_hz
        self.amplitude = amplitude
        self.phase = 0.0
        self._direction = 1.0

    def _advance_tone(self) -> None:
        self.tone_hz += self._direction * self.step_hz
        if self.tone_hz > self.high_hz:
            self.tone_hz = self.high_hz
            self._direction = -1.0
        if self.tone_hz < self.low_hz:
            self.tone_hz = self.low_hz
            self._direction = 1.0

    def next_buffer(self, frames: int) -> np.ndarray:
        self._advance_tone()
        inc = 2.0 * math.pi * self.tone_hz / self.sample_rate
        phases = self.phase + inc * np.arange(frames, dtype=np.float64)
        self.phase = float((self.phase + inc * frames) % (2.0 * math.pi))
        return self.amplitude * np.sin(phases)


class SpectrumSource:
    """Produce ``{"bins": [...]}`` payload dicts from the tone sweep."""

    def __init__(self, config: ProducerConfig) -> None:
        self.config = config
        self.bands = LogBins(config.sample_rate, config.fft_size, config.bins, config.min_hz)
        self.tone = ToneSweep(self.bands.sample_rate)

    @property
    def centers(self) -> List[float]:
        return self.bands.centers_hz()

    def next_bins(self) -> List[float]:
        buf = self.tone.next_buffer(self.bands.fft_size)
        meters = mag_to_meter(self.bands.compute(magnitude_spectrum(buf)))
        return [round(float(v), 6) for v in meters]

    def next_payload(self, include_centers: bool = False) -> Dict[str, List[float]]:
        payload: Dict[str, List[float]] = {"bins": self.next_bins()}
        if include_centers:
            payload["centers"] = [round(c, 3) for c in self.centers]
        return payload
