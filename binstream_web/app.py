"""
Application factory for the binstream static server.

Serves files from one root directory, redirects ``/`` to the default view and
disables caching on every response.
"""
from __future__ import annotations

from time import perf_counter
from typing import Optional

from flask import Flask, Response, redirect, request

from binstream_web.config import DEFAULT_VIEW, STATIC_ROOT
from binstream_web.static_files import Forbidden, content_type_for, read_file, resolve_path

TEXT_PLAIN = "text/plain; charset=utf-8"


def _send(code: int, body, content_type: str = TEXT_PLAIN) -> Response:
    return Response(body, status=code, content_type=content_type)


def create_app(root: Optional[str] = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, static_folder=None)
    app.config["STATIC_ROOT"] = root or STATIC_ROOT

    # ------------------------------------------------------------------
    # Request timing middleware
    # ------------------------------------------------------------------

    @app.before_request
    def log_request_start():
        request._start_time = perf_counter()

    @app.after_request
    def finish_response(response):
        response.headers["Cache-Control"] = "no-store"
        if hasattr(request, "_start_time"):
            duration_ms = (perf_counter() - request._start_time) * 1000
            # Log slow requests (>500ms) or errors at debug level
            if duration_ms > 500 or response.status_code >= 400:
                app.logger.debug(
                    "%s %s -> %d (%.1fms)",
                    request.method,
                    request.path,
                    response.status_code,
                    duration_ms,
                )
        return response

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    @app.get("/")
    def index():
        return redirect(DEFAULT_VIEW, code=302)

    @app.get("/<path:_rel>")
    def serve(_rel: str):
        try:
            path = resolve_path(app.config["STATIC_ROOT"], request.path)
        except Forbidden:
            return _send(403, "Forbidden")
        data = read_file(path)
        if data is None:
            return _send(404, "Not found")
        return _send(200, data, content_type_for(path))

    return app
