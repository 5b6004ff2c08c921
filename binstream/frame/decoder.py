"""Turn raw channel payloads into typed frames.

Payloads are JSON objects of the form ``{"bins": [...], "centers": [...]}``.
Anything that does not look like that is dropped without raising; the drop is
only visible at DEBUG level.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Tuple, Union

from binstream.frame.types import BinFrame
from binstream.util.logging import get_logger

logger = get_logger(__name__)


def coerce_number(value: Any) -> float:
    """Return ``value`` as a finite float, or 0.0 when it cannot be read as one."""
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else 0.0
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _coerce_sequence(values: list) -> Tuple[float, ...]:
    return tuple(coerce_number(v) for v in values)


class FrameDecoder:
    """Decode channel payloads; remembers the first ``centers`` seen in the session."""

    def __init__(self) -> None:
        self.centers: Optional[Tuple[float, ...]] = None

    def decode(self, payload: Union[str, bytes, bytearray]) -> Optional[BinFrame]:
        if isinstance(payload, (bytes, bytearray)):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug("Dropping non UTF-8 payload (%d bytes)", len(payload))
                return None
        try:
            msg = json.loads(payload)
        except ValueError:
            logger.debug("Dropping payload that is not JSON")
            return None
        if not isinstance(msg, dict):
            logger.debug("Dropping JSON payload that is not an object")
            return None

        raw_centers = msg.get("centers")
        centers = _coerce_sequence(raw_centers) if isinstance(raw_centers, list) else None
        if self.centers is None and centers is not None:
            self.centers = centers

        raw_bins = msg.get("bins")
        if not isinstance(raw_bins, list):
            logger.debug("Dropping payload without a bins array")
            return None
        return BinFrame(bins=_coerce_sequence(raw_bins), centers=self.centers)
