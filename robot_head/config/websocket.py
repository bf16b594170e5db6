"""WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws"

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_TIMESTAMP = "timestamp"
WS_KEY_DATA = "data"

# Audio payload keys
WS_KEY_AUDIO_TEXT = "text"
WS_KEY_AUDIO_DATA = "audio_data"
WS_KEY_AUDIO_DATA_ALIAS = "audio"
WS_KEY_MIME_TYPE = "mime_type"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_INVALID_PAYLOAD_CODE = 1007
WS_CLOSE_TRY_AGAIN_LATER_CODE = 1013
WS_CLOSE_UNAUTHORIZED_CODE = 4001

WS_CLOSE_SHUTDOWN_REASON = "server shutting down"
WS_CLOSE_INVALID_PAYLOAD_REASON = "malformed envelope"

# Auth transport
WS_API_KEY_QUERY_PARAM = "api_key"
WS_API_KEY_HEADER = "x-api-key"

__all__ = [
    "WS_API_KEY_HEADER",
    "WS_API_KEY_QUERY_PARAM",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_INVALID_PAYLOAD_CODE",
    "WS_CLOSE_INVALID_PAYLOAD_REASON",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_SHUTDOWN_REASON",
    "WS_CLOSE_TRY_AGAIN_LATER_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_ENDPOINT_PATH",
    "WS_KEY_AUDIO_DATA",
    "WS_KEY_AUDIO_DATA_ALIAS",
    "WS_KEY_AUDIO_TEXT",
    "WS_KEY_DATA",
    "WS_KEY_MIME_TYPE",
    "WS_KEY_TIMESTAMP",
    "WS_KEY_TYPE",
]
