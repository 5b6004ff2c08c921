"""Logging and exit-code helpers shared by the binstream commands."""
from __future__ import annotations
