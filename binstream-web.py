#!/usr/bin/env python3
"""
binstream web — Entry point.

Thin CLI shim that parses arguments and runs the static file server that
hosts the browser waterfall.

Run:
    python binstream-web.py --host 127.0.0.1 --port 8080

Environment:
    BINSTREAM_WEB_PORT    Port to listen on (fallback: PORT, default 8080)
    BINSTREAM_WEB_HOST    Interface to bind (default 127.0.0.1)
    BINSTREAM_WEB_ROOT    Directory to serve (default ./static)
"""
from __future__ import annotations

import argparse
import sys
from urllib.parse import quote


def parse_args():
    from binstream_web.config import HOST, PORT, STATIC_ROOT

    ap = argparse.ArgumentParser(
        description="binstream web — static server for the browser waterfall"
    )
    ap.add_argument("--root", default=STATIC_ROOT, help="Directory to serve (default: ./static)")
    ap.add_argument("--host", default=HOST, help=f"Host to bind the web server (default: {HOST})")
    ap.add_argument("--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})")
    return ap.parse_args()


def main():
    args = parse_args()

    from binstream.util.exit_codes import ExitCode
    from binstream_web import create_app
    from binstream_web.config import DEFAULT_VIEW, DEFAULT_WS_URL

    app = create_app(args.root)
    print(
        f"Viewer server: http://{args.host}:{args.port}{DEFAULT_VIEW}?ws={quote(DEFAULT_WS_URL, safe='')}",
        flush=True,
    )
    try:
        app.run(host=args.host, port=args.port, threaded=True)
    except OSError as exc:
        print(f"[web] failed to start: {exc}", file=sys.stderr, flush=True)
        sys.exit(ExitCode.SERVER_ERROR)


if __name__ == "__main__":
    main()
