"""Error helpers for rejecting WebSocket sessions."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from robot_head.protocol import encode_text
from robot_head.errors import UpgradeError
from robot_head.protocol import envelope as envelopes

logger = logging.getLogger(__name__)


async def reject_connection(ws: WebSocket, exc: UpgradeError) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        # If accept fails, nothing else to do.
        return
    with contextlib.suppress(Exception):
        await ws.send_text(encode_text(envelopes.error(exc.reason)))
    with contextlib.suppress(Exception):
        await ws.close(code=exc.close_code, reason=exc.reason)


__all__ = ["reject_connection"]
