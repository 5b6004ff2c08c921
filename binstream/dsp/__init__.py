"""Spectrum helpers used by the demo producer."""
from __future__ import annotations
