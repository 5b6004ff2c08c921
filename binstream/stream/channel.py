"""Persistent websocket channel feeding text messages to a listener.

The channel reports ``on_open`` once the handshake completes, ``on_message``
for every message, ``on_error`` for transport failures, and always finishes
with ``on_close`` unless it was cancelled by ``close()``.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Union

import websockets
from websockets.exceptions import WebSocketException

from binstream.util.logging import get_logger

logger = get_logger(__name__)

CHANNEL_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)


class ChannelListener(Protocol):
    def on_open(self) -> None:
        ...

    def on_message(self, payload: Union[str, bytes]) -> None:
        ...

    def on_error(self, error: BaseException) -> None:
        ...

    def on_close(self) -> None:
        ...


class Channel(Protocol):
    def open(self) -> None:
        ...

    def close(self) -> None:
        ...


class WebSocketChannel:
    """One connection attempt; a new instance is created for every reconnect."""

    def __init__(self, url: str, listener: ChannelListener, *, open_timeout: float = 10.0) -> None:
        self.url = url
        self.listener = listener
        self.open_timeout = open_timeout
        self._task: Optional[asyncio.Task] = None

    def open(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._on_task_done)

    async def _run(self) -> None:
        try:
            async with websockets.connect(self.url, open_timeout=self.open_timeout) as ws:
                self.listener.on_open()
                async for message in ws:
                    self.listener.on_message(message)
        except CHANNEL_ERRORS as exc:
            self.listener.on_error(exc)
        self.listener.on_close()

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Channel task for %s failed", self.url, exc_info=exc)
            self.listener.on_close()

    def close(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is current:
            # Called from one of our own callbacks; cancel once it returns.
            task.get_loop().call_soon(task.cancel)
            return
        task.cancel()
