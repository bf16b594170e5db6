"""WebSocket authentication helpers."""

from __future__ import annotations

import hmac

from fastapi import WebSocket

from robot_head.config.websocket import WS_API_KEY_HEADER, WS_API_KEY_QUERY_PARAM


def get_api_key(ws: WebSocket) -> str:
    # Query param is easiest for WS clients.
    key = (ws.query_params.get(WS_API_KEY_QUERY_PARAM) or "").strip()
    if key:
        return key
    return (ws.headers.get(WS_API_KEY_HEADER) or "").strip()


def validate_api_key(api_key: str, expected: str) -> bool:
    if not expected:
        # No key configured: the endpoint is open to any client.
        return True
    return hmac.compare_digest(api_key.encode("utf-8"), expected.encode("utf-8"))


def authenticate_websocket(ws: WebSocket, *, expected_api_key: str) -> bool:
    return validate_api_key(get_api_key(ws), expected_api_key)


__all__ = ["authenticate_websocket", "get_api_key", "validate_api_key"]
