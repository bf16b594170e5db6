from .channel import ServerConnection
from .message_loop import serve
from .manager import accept_connection, handle_websocket_connection

__all__ = ["ServerConnection", "accept_connection", "handle_websocket_connection", "serve"]
