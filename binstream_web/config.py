"""
Configuration constants and environment parsing for the binstream web server.

All BINSTREAM_WEB_* environment variables are parsed here and exported as
module-level constants.
"""
from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    """Parse an integer from environment, returning default on missing/invalid."""
    val = os.getenv(name)
    if not val:
        return default
    try:
        return max(1, int(float(val)))
    except ValueError:
        return default


HOST: str = os.getenv("BINSTREAM_WEB_HOST", "127.0.0.1")
"""Interface the static server binds to."""

PORT: int = _int_env("BINSTREAM_WEB_PORT", _int_env("PORT", 8080))
"""Port the static server listens on."""

STATIC_ROOT: str = os.getenv(
    "BINSTREAM_WEB_ROOT",
    os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "static")),
)
"""Directory served; nothing outside it is reachable."""

DEFAULT_VIEW: str = "/waterfall/"
"""Where ``/`` redirects."""

DEFAULT_WS_URL: str = "ws://127.0.0.1:8787"
"""Channel URL advertised in the startup banner."""

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".png": "image/png",
    ".svg": "image/svg+xml",
}
"""Extension -> Content-Type; anything else is served as opaque binary."""

FALLBACK_CONTENT_TYPE: str = "application/octet-stream"
