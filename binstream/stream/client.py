"""Connection lifecycle for the viewers.

``StreamClient`` drives one channel at a time through

    CONNECTING -> CONNECTED -> DISCONNECTED -> CONNECTING -> ...

and hands every decoded frame to its sink. What happens after a disconnect is
decided by a policy: ``ReconnectPolicy`` schedules a new attempt after a fixed
delay (graphical viewer), ``TerminatePolicy`` ends the session (terminal
viewer). At most one reconnect timer is pending at any time and it is revoked
when the client is closed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Union

from binstream.frame.decoder import FrameDecoder
from binstream.render.session import FrameSink
from binstream.stream.channel import Channel, ChannelListener, WebSocketChannel
from binstream.stream.scheduler import LoopScheduler, Scheduler, TimerHandle
from binstream.util.exit_codes import ExitCode
from binstream.util.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WS_URL = "ws://127.0.0.1:8787"
DEFAULT_RECONNECT_DELAY_S = 0.5


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class DisconnectPolicy(Protocol):
    def next_delay(self, error: Optional[BaseException]) -> Optional[float]:
        """Seconds until the next attempt, or None to end the session."""
        ...


@dataclass(frozen=True)
class ReconnectPolicy:
    delay_s: float = DEFAULT_RECONNECT_DELAY_S

    def __post_init__(self) -> None:
        if self.delay_s < 0:
            raise ValueError("delay_s must be >= 0")

    def next_delay(self, error: Optional[BaseException]) -> Optional[float]:
        return self.delay_s


@dataclass(frozen=True)
class TerminatePolicy:
    def next_delay(self, error: Optional[BaseException]) -> Optional[float]:
        return None


StatusCallback = Callable[[ConnectionState, str], None]
ChannelFactory = Callable[[str, ChannelListener], Channel]


class StreamClient:
    """Own the channel, decode its messages and dispatch frames to ``sink``."""

    def __init__(
        self,
        url: str,
        sink: FrameSink,
        policy: Optional[DisconnectPolicy] = None,
        *,
        decoder: Optional[FrameDecoder] = None,
        scheduler: Optional[Scheduler] = None,
        channel_factory: Optional[ChannelFactory] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> None:
        self.url = url
        self.sink = sink
        self.policy = policy or ReconnectPolicy()
        self.decoder = decoder or FrameDecoder()
        self.scheduler = scheduler or LoopScheduler()
        self._channel_factory = channel_factory or WebSocketChannel
        self._on_status = on_status

        self.state = ConnectionState.DISCONNECTED
        self.last_error: Optional[BaseException] = None
        self.exit_code: Optional[int] = None
        self.frames = 0
        self.dropped = 0
        self.attempts = 0

        self._channel: Optional[Channel] = None
        self._timer: Optional[TimerHandle] = None
        self._stopped = False
        self._done: Optional[asyncio.Future] = None

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    @property
    def reconnect_pending(self) -> bool:
        return self._timer is not None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def _set_state(self, state: ConnectionState, detail: str) -> None:
        self.state = state
        logger.info("%s: %s", self.url, detail)
        if self._on_status is not None:
            self._on_status(state, detail)

    def _close_channel(self) -> None:
        channel, self._channel = self._channel, None
        if channel is None:
            return
        try:
            channel.close()
        except Exception as exc:
            logger.warning("Closing channel to %s failed: %s", self.url, exc)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Start one connection attempt."""
        if self._stopped:
            return
        self.attempts += 1
        self._set_state(ConnectionState.CONNECTING, "connecting…")
        if self._stopped:
            return
        self._channel = self._channel_factory(self.url, self)
        self._channel.open()

    def _reconnect(self) -> None:
        self._timer = None
        self.connect()

    def _disconnect(self, error: Optional[BaseException]) -> None:
        if self._stopped or self.state is ConnectionState.DISCONNECTED:
            return
        self._channel = None
        self.last_error = error
        delay = self.policy.next_delay(error)
        label = "error" if error is not None else "disconnected"
        if delay is None:
            self._set_state(ConnectionState.DISCONNECTED, label)
            self._finish(ExitCode.CHANNEL_ERROR if error is not None else ExitCode.SUCCESS)
            return
        self._set_state(ConnectionState.DISCONNECTED, f"{label} (reconnecting…)")
        if self._stopped:
            return
        if self._timer is None:
            logger.debug("Reconnecting to %s in %.3fs", self.url, delay)
            self._timer = self.scheduler.call_later(delay, self._reconnect)

    def _finish(self, code: int) -> None:
        self._stopped = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self.exit_code is None:
            self.exit_code = code
        if self._done is not None and not self._done.done():
            self._done.set_result(self.exit_code)

    def close(self) -> None:
        """Tear the session down: revoke any pending reconnect and close the channel."""
        self._close_channel()
        self._finish(ExitCode.SUCCESS)

    async def run(self) -> int:
        """Connect and wait until the session ends; returns the exit code."""
        self._done = asyncio.get_running_loop().create_future()
        if self._stopped:
            self._done.set_result(self.exit_code)
        else:
            self.connect()
        try:
            return await self._done
        finally:
            self.close()

    # ------------------------------------------------------------------
    # Channel listener
    # ------------------------------------------------------------------

    def on_open(self) -> None:
        if self._stopped or self.state is not ConnectionState.CONNECTING:
            return
        self._set_state(ConnectionState.CONNECTED, "connected")

    def on_message(self, payload: Union[str, bytes]) -> None:
        if self._stopped or self.state is not ConnectionState.CONNECTED:
            return
        frame = self.decoder.decode(payload)
        if frame is None:
            self.dropped += 1
            return
        self.frames += 1
        self.sink.accept(frame)

    def on_error(self, error: BaseException) -> None:
        if self._stopped or self.state is ConnectionState.DISCONNECTED:
            return
        logger.warning("Channel error on %s: %s", self.url, error)
        self._close_channel()
        self._disconnect(error)

    def on_close(self) -> None:
        self._disconnect(None)
