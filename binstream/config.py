"""
Configuration parsing for the binstream viewers and demo producer.

Every setting that comes from a query string or the environment is parsed
here; unparsable values fall back to the documented default rather than
raising.
"""
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qs

from binstream.render.history import DEFAULT_ROWS
from binstream.stream.client import DEFAULT_WS_URL


def _positive_int(val: Any, default: int) -> int:
    """Parse a positive number (fractions truncated, minimum 1); default on anything else."""
    if val is None or isinstance(val, bool):
        return default
    try:
        number = float(str(val).strip())
    except ValueError:
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return max(1, int(number))


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    """Parse an integer from environment, returning default on missing/invalid."""
    return _positive_int(environ.get(name) or None, default)


def _float_env(environ: Mapping[str, str], name: str, default: float) -> float:
    """Parse a float from environment, returning default on missing/invalid."""
    val = environ.get(name)
    if not val:
        return default
    try:
        number = float(val)
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def _str_setting(val: Optional[str], default: str) -> str:
    if val is None:
        return default
    val = val.strip()
    return val or default


# ---------------------------------------------------------------------------
# Graphical viewer
# ---------------------------------------------------------------------------
def parse_query(query: str) -> Dict[str, str]:
    """First value of every key in a browser-style query string."""
    parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items() if values}


@dataclass(frozen=True)
class ViewerConfig:
    ws_url: str = DEFAULT_WS_URL
    rows: int = DEFAULT_ROWS

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ViewerConfig":
        """Build from ``ws``/``rows`` options; other keys are ignored."""
        ws = options.get("ws")
        return cls(
            ws_url=_str_setting(ws if isinstance(ws, str) else None, DEFAULT_WS_URL),
            rows=_positive_int(options.get("rows"), DEFAULT_ROWS),
        )

    @classmethod
    def from_query(cls, query: str) -> "ViewerConfig":
        """Parse a browser-style query string such as ``?ws=ws://host:8787&rows=120``."""
        return cls.from_mapping(parse_query(query))


# ---------------------------------------------------------------------------
# Terminal viewer
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TerminalConfig:
    ws_url: str = DEFAULT_WS_URL
    display_name: str = ""
    display_age: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TerminalConfig":
        env = os.environ if environ is None else environ
        url = env.get("BINSTREAM_WS_URL") or env.get("WS_URL")
        name = env.get("BINSTREAM_DISPLAY_NAME", "").strip()
        raw_age = env.get("BINSTREAM_DISPLAY_AGE")
        age = ""
        if raw_age is not None and raw_age.strip():
            try:
                number = float(raw_age)
            except ValueError:
                number = math.nan
            if math.isfinite(number):
                age = f"{number:g}"
            else:
                age = "?"
        return cls(ws_url=_str_setting(url, DEFAULT_WS_URL), display_name=name, display_age=age)


# ---------------------------------------------------------------------------
# Demo producer
# ---------------------------------------------------------------------------
MIN_INTERVAL_MS = 10


@dataclass(frozen=True)
class ProducerConfig:
    host: str = "127.0.0.1"
    port: int = 8787
    interval_ms: int = 100
    sample_rate: int = 48000
    fft_size: int = 2048
    bins: int = 64
    min_hz: float = 20.0

    def __post_init__(self) -> None:
        if self.interval_ms < MIN_INTERVAL_MS:
            object.__setattr__(self, "interval_ms", MIN_INTERVAL_MS)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProducerConfig":
        env = os.environ if environ is None else environ
        return cls(
            host=_str_setting(env.get("BINSTREAM_PRODUCER_HOST"), "127.0.0.1"),
            port=_int_env(env, "BINSTREAM_PRODUCER_PORT", 8787),
            interval_ms=_int_env(env, "BINSTREAM_PRODUCER_INTERVAL_MS", 100),
            sample_rate=_int_env(env, "BINSTREAM_PRODUCER_SAMPLE_RATE", 48000),
            fft_size=_int_env(env, "BINSTREAM_PRODUCER_FFT", 2048),
            bins=_int_env(env, "BINSTREAM_PRODUCER_BINS", 64),
            min_hz=_float_env(env, "BINSTREAM_PRODUCER_MIN_HZ", 20.0),
        )
