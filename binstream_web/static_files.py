"""
Request path -> file resolution for the static server.

Kept free of Flask so the traversal guard can be exercised on its own.
"""
from __future__ import annotations

import os
from typing import Optional

from binstream_web.config import CONTENT_TYPES, FALLBACK_CONTENT_TYPE


class Forbidden(Exception):
    """The request path resolves outside the served root."""


def resolve_path(root: str, request_path: str) -> str:
    """
    Map an already percent-decoded URL path to an absolute file path under ``root``.

    Directory requests (trailing slash) resolve to ``index.html``.

    Raises:
        Forbidden: If the normalised path escapes ``root``.
    """
    root_abs = os.path.abspath(root)
    rel = request_path or "/"
    if rel.endswith("/"):
        rel += "index.html"
    candidate = os.path.abspath(os.path.join(root_abs, rel.lstrip("/")))
    if candidate != root_abs and not candidate.startswith(root_abs + os.sep):
        raise Forbidden(request_path)
    return candidate


def content_type_for(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    return CONTENT_TYPES.get(ext, FALLBACK_CONTENT_TYPE)


def read_file(path: str) -> Optional[bytes]:
    """Return file contents, or None when it does not exist or is not a file."""
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError:
        return None
