"""URL helpers for reaching the server's /ws endpoint."""

from __future__ import annotations

from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

from robot_head.config.websocket import WS_ENDPOINT_PATH, WS_API_KEY_QUERY_PARAM


def ws_url(server: str, secure: bool) -> str:
    """Generate a WebSocket URL for the server endpoint.

    Accepts a bare ``host:port``, an ``http(s)://`` base URL or a full
    ``ws(s)://`` URL; the endpoint path is appended when missing.
    """
    server = (server or "").strip()
    if server.startswith(("ws://", "wss://")):
        parsed = urlparse(server)
        base_path = (parsed.path or "").rstrip("/")
        if not base_path.endswith(WS_ENDPOINT_PATH):
            base_path = f"{base_path}{WS_ENDPOINT_PATH}"
        return urlunparse((parsed.scheme, parsed.netloc, base_path, parsed.params, parsed.query, parsed.fragment))
    if server.startswith(("http://", "https://")):
        parsed = urlparse(server)
        scheme = "wss" if (parsed.scheme == "https" or secure) else "ws"
        base_path = parsed.path.rstrip("/")
        if not base_path.endswith(WS_ENDPOINT_PATH):
            base_path = f"{base_path}{WS_ENDPOINT_PATH}"
        return urlunparse((scheme, parsed.netloc, base_path, "", parsed.query, parsed.fragment))
    scheme = "wss" if secure else "ws"
    host = server.rstrip("/")
    return f"{scheme}://{host}{WS_ENDPOINT_PATH}"


def append_auth_query(url: str, api_key: str) -> str:
    parsed = urlparse(url)
    query_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query_params[WS_API_KEY_QUERY_PARAM] = api_key
    new_query = urlencode(query_params)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment))


def build_url(server: str, *, secure: bool = False, api_key: str = "") -> str:
    url = ws_url(server, secure)
    if not api_key:
        return url
    return append_auth_query(url, api_key)


__all__ = ["append_auth_query", "build_url", "ws_url"]
