"""
binstream web — static file server for the browser waterfall.

Usage:
    from binstream_web import create_app
    app = create_app(root="static")
    app.run(host="127.0.0.1", port=8080)
"""
from __future__ import annotations

__version__ = "0.1.0"

from binstream_web.app import create_app

__all__ = ["create_app", "__version__"]
