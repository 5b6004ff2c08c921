"""Color scale, history buffer and the two renderers."""
from __future__ import annotations
