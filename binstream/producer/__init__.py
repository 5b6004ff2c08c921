"""Synthetic spectrum producer for running the viewers end to end."""
from __future__ import annotations
