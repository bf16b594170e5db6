"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from robot_head.state import RuntimeDeps
from robot_head.errors import UpgradeError
from robot_head.config.websocket import WS_CLOSE_UNAUTHORIZED_CODE, WS_CLOSE_TRY_AGAIN_LATER_CODE

from .channel import ServerConnection
from .errors import reject_connection
from .auth import authenticate_websocket
from .message_loop import serve

logger = logging.getLogger(__name__)


async def accept_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> ServerConnection:
    """Validate and upgrade an inbound request. Origin is not checked."""
    if not authenticate_websocket(ws, expected_api_key=runtime_deps.settings.auth.api_key):
        raise UpgradeError(
            "Authentication required. Provide valid API key via 'api_key' query parameter or 'X-API-Key' header.",
            close_code=WS_CLOSE_UNAUTHORIZED_CODE,
        )

    connections = runtime_deps.connections
    if not connections.accepting:
        raise UpgradeError("Server is shutting down.", close_code=WS_CLOSE_TRY_AGAIN_LATER_CODE)

    if not await connections.connect(ws):
        raise UpgradeError(
            "Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_TRY_AGAIN_LATER_CODE,
        )

    try:
        await ws.accept()
    except Exception as exc:
        with contextlib.suppress(Exception):
            await connections.disconnect(ws)
        raise UpgradeError(f"WebSocket upgrade failed: {exc}", close_code=WS_CLOSE_TRY_AGAIN_LATER_CODE) from exc
    return ServerConnection(ws)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    try:
        conn = await accept_connection(ws, runtime_deps)
    except UpgradeError as exc:
        logger.warning("WebSocket upgrade rejected: %s", exc.reason)
        await reject_connection(ws, exc)
        return

    connections = runtime_deps.connections
    logger.info("Client connected via WebSocket. Active: %s", connections.get_connection_count())
    replies = 0
    try:
        replies = await serve(conn, runtime_deps.pipeline, connections)
    finally:
        with contextlib.suppress(Exception):
            await connections.disconnect(ws)
        logger.info(
            "WebSocket connection closed after %d replies. Active: %s",
            replies,
            connections.get_connection_count(),
        )


__all__ = ["accept_connection", "handle_websocket_connection"]
