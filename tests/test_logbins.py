import math

import numpy as np

from binstream.config import ProducerConfig
from binstream.dsp.fft import mag_to_meter, magnitude_spectrum
from binstream.dsp.logbins import LogBins
from binstream.producer.tone import SpectrumSource, ToneSweep


def _bands() -> LogBins:
    return LogBins(sample_rate=44100, fft_size=1024, bins=64)


def test_centers_are_geometric_means_of_log_edges() -> None:
    bands = _bands()
    centers = bands.centers_hz()
    assert len(centers) == 64
    assert centers == sorted(centers)
    assert centers[0] >= 20.0
    assert centers[-1] <= 44100 * 0.5 + 1.0

    f_min, f_max = 20.0, 44100 * 0.5
    for i, c in enumerate(centers):
        lo = f_min * (f_max / f_min) ** (i / 64)
        hi = f_min * (f_max / f_min) ** ((i + 1) / 64)
        assert math.isclose(c, math.sqrt(lo * hi), rel_tol=1e-5)


def test_compute_size_and_non_negative() -> None:
    mag = np.zeros(512)
    mag[10] = 1.0
    out = _bands().compute(mag)
    assert out.shape == (64,)
    assert np.all(out >= 0.0)


def test_single_tone_lands_only_in_covering_bands() -> None:
    bands = _bands()
    mag = np.zeros(512)
    k = int(math.floor(1000.0 * 1024 / 44100))
    mag[k] = 1.0
    out = bands.compute(mag)

    covering = set()
    for i, (lo, hi) in enumerate(bands.edges_hz()):
        k_lo = max(0, int(math.floor(lo / bands.hz_per_bin)))
        k_hi = min(mag.size - 1, int(math.ceil(hi / bands.hz_per_bin)))
        if k_lo <= k <= k_hi:
            covering.add(i)
    assert covering
    assert {i for i, v in enumerate(out) if v > 0.0} == covering


def test_invalid_settings_fall_back_to_defaults() -> None:
    bands = LogBins(sample_rate=0, fft_size=-1, bins=0, min_hz=-3)
    assert (bands.sample_rate, bands.fft_size, bands.bins, bands.min_hz) == (48000, 2048, 64, 20.0)


def test_compute_on_empty_spectrum_is_zero() -> None:
    assert np.all(_bands().compute([]) == 0.0)


def test_mag_to_meter_range() -> None:
    out = mag_to_meter(np.array([0.0, 1e-2, 1.0, 10.0]))
    assert out[0] == 0.0
    assert math.isclose(out[1], 0.5)
    assert out[2] == 1.0
    assert out[3] == 1.0


def test_magnitude_spectrum_shape() -> None:
    assert magnitude_spectrum(np.ones(2048)).shape == (1025,)


def test_tone_sweep_turns_around_at_the_top() -> None:
    tone = ToneSweep(48000, start_hz=1759.8, high_hz=1760.0)
    tone.next_buffer(16)
    assert tone.tone_hz == 1760.0
    tone.next_buffer(16)
    assert tone.tone_hz == 1759.5


def test_spectrum_source_payloads() -> None:
    source = SpectrumSource(ProducerConfig())
    first = source.next_payload(include_centers=True)
    second = source.next_payload()
    assert len(first["centers"]) == 64
    assert "centers" not in second
    bins = np.array(first["bins"])
    assert bins.shape == (64,)
    assert np.all((bins >= 0.0) & (bins <= 1.0))

    peak_hz = first["centers"][int(np.argmax(bins))]
    tone_hz = 220.5
    assert tone_hz / 1.5 <= peak_hz <= tone_hz * 1.5
