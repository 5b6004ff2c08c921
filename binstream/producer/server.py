"""Websocket server that streams the synthetic spectrum.

Each connection gets its own ``SpectrumSource`` and send loop; connections do
not share state.
"""

from __future__ import annotations

import asyncio
import json
from typing import Callable, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from binstream.config import ProducerConfig
from binstream.producer.tone import SpectrumSource
from binstream.util.logging import get_logger

logger = get_logger(__name__)


async def stream_spectrum(ws, config: ProducerConfig) -> None:
    """Send frames to one client until it goes away."""
    source = SpectrumSource(config)
    interval = config.interval_ms / 1000.0
    peer = getattr(ws, "remote_address", None)
    logger.info("Client connected: %s", peer)
    first = True
    try:
        while True:
            await ws.send(json.dumps(source.next_payload(include_centers=first)))
            first = False
            await asyncio.sleep(interval)
    except ConnectionClosed:
        pass
    logger.info("Client disconnected: %s", peer)


async def serve_demo(
    config: ProducerConfig,
    *,
    stop: Optional[asyncio.Future] = None,
    on_ready: Optional[Callable[[int], None]] = None,
) -> None:
    """Serve until ``stop`` resolves (forever when omitted)."""

    async def handler(ws) -> None:
        await stream_spectrum(ws, config)

    async with websockets.serve(handler, config.host, config.port) as server:
        port = server.sockets[0].getsockname()[1]
        logger.info("Producer listening on ws://%s:%d", config.host, port)
        if on_ready is not None:
            on_ready(port)
        if stop is None:
            stop = asyncio.get_running_loop().create_future()
        await stop
