"""Message channel, reconnect scheduling and the client state machine."""
from __future__ import annotations
