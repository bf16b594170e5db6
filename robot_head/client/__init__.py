"""Robot head client: connection management, loops and playback."""

from .loops import send_loop, receive_loop
from .session import ClientSession, SessionSummary
from .playback import PlaybackWorker
from .connection import ClientConnection, connect_with_retry

__all__ = [
    "ClientConnection",
    "ClientSession",
    "PlaybackWorker",
    "SessionSummary",
    "connect_with_retry",
    "receive_loop",
    "send_loop",
]
