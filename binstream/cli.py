#!/usr/bin/env python3
"""binstream command line: graphical viewer, terminal viewer and demo producer."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from binstream.config import ProducerConfig, TerminalConfig, ViewerConfig, parse_query
from binstream.producer.server import serve_demo
from binstream.render.ascii import AsciiRenderer
from binstream.render.session import TerminalSession, WaterfallSession
from binstream.render.surface import TerminalWriter
from binstream.stream.client import ConnectionState, ReconnectPolicy, StreamClient, TerminatePolicy
from binstream.util.exit_codes import ExitCode
from binstream.util.logging import configure_logging, get_logger

logger = get_logger(__name__)

GUI_PUMP_INTERVAL_S = 0.02


async def _pump_gui(surface, client: StreamClient) -> None:
    while not surface.closed:
        surface.pump()
        await asyncio.sleep(GUI_PUMP_INTERVAL_S)
    client.close()


async def run_view(config: ViewerConfig) -> int:
    """Graphical waterfall; keeps reconnecting until the window is closed."""
    from binstream.render.surface import MatplotlibSurface

    surface = MatplotlibSurface(config.ws_url, config.rows)
    session = WaterfallSession(config.rows, surface)
    client = StreamClient(
        config.ws_url,
        session,
        ReconnectPolicy(),
        on_status=lambda _state, detail: surface.set_status(detail),
    )
    pump = asyncio.create_task(_pump_gui(surface, client))
    try:
        return await client.run()
    finally:
        pump.cancel()


async def run_term(config: TerminalConfig, writer: Optional[TerminalWriter] = None) -> int:
    """One-shot ASCII session; ends on the first close or error."""
    writer = writer or TerminalWriter()
    session = TerminalSession(
        writer,
        AsciiRenderer(),
        display_name=config.display_name,
        display_age=config.display_age,
    )
    client: StreamClient

    def on_status(state: ConnectionState, _detail: str) -> None:
        if state is ConnectionState.CONNECTED:
            writer.line(f"Connected: {config.ws_url}")
        elif state is ConnectionState.DISCONNECTED:
            if client.last_error is not None:
                print(str(client.last_error) or type(client.last_error).__name__, file=sys.stderr, flush=True)
            else:
                writer.line("Disconnected")

    client = StreamClient(config.ws_url, session, TerminatePolicy(), on_status=on_status)
    return await client.run()


def run(args: argparse.Namespace) -> int:
    """Top-level CLI dispatcher."""
    configure_logging(level=args.log_level)
    try:
        if args.command == "view":
            options = parse_query(args.query) if args.query else {}
            if args.ws is not None:
                options["ws"] = args.ws
            if args.rows is not None:
                options["rows"] = args.rows
            return asyncio.run(run_view(ViewerConfig.from_mapping(options)))
        if args.command == "term":
            config = TerminalConfig.from_env()
            if args.ws is not None:
                config = TerminalConfig(args.ws, config.display_name, config.display_age)
            return asyncio.run(run_term(config))
        if args.command == "demo":
            base = ProducerConfig.from_env()
            config = ProducerConfig(
                host=args.host or base.host,
                port=args.port if args.port is not None else base.port,
                interval_ms=args.interval_ms if args.interval_ms is not None else base.interval_ms,
                sample_rate=base.sample_rate,
                fft_size=base.fft_size,
                bins=args.bins if args.bins is not None else base.bins,
                min_hz=base.min_hz,
            )
            asyncio.run(serve_demo(config))
            return ExitCode.SUCCESS
    except KeyboardInterrupt:
        return ExitCode.SUCCESS
    return ExitCode.INVALID_ARGS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(description="Live spectral bin viewers (waterfall and terminal) and demo producer")
    p.add_argument("--log-level", dest="log_level", default=None, help="Log level (default from BINSTREAM_LOG_LEVEL or INFO)")
    sub = p.add_subparsers(dest="command", required=True)

    view = sub.add_parser("view", help="Scrolling waterfall heatmap; reconnects forever")
    view.add_argument("--ws", default=None, help="Channel URL (default ws://127.0.0.1:8787)")
    view.add_argument("--rows", default=None, help="History rows (default 200; invalid values fall back)")
    view.add_argument("--query", default=None, help="Browser-style options, e.g. 'ws=ws://host:8787&rows=120'")

    term = sub.add_parser("term", help="ASCII chart of the latest frame; exits when the channel closes")
    term.add_argument("--ws", default=None, help="Channel URL (default BINSTREAM_WS_URL / WS_URL or ws://127.0.0.1:8787)")

    demo = sub.add_parser("demo", help="Serve a synthetic sweeping-tone spectrum")
    demo.add_argument("--host", default=None, help="Bind host (default 127.0.0.1)")
    demo.add_argument("--port", type=int, default=None, help="Bind port (default 8787)")
    demo.add_argument("--interval-ms", dest="interval_ms", type=int, default=None, help="Milliseconds between frames (default 100, minimum 10)")
    demo.add_argument("--bins", type=int, default=None, help="Log-spaced bands per frame (default 64)")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(run(parse_args(argv)))


if __name__ == "__main__":
    main()
