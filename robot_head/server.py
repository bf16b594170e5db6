"""Main FastAPI server for the robot head voice assistant."""

from __future__ import annotations

import math
import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse, PlainTextResponse

from robot_head.state import RuntimeDeps
from robot_head.config.websocket import WS_ENDPOINT_PATH
from robot_head.runtime.logging import configure_logging
from robot_head.runtime.settings import load_settings
from robot_head.config.server import ROOT_BANNER, HEALTH_MESSAGE
from robot_head.runtime.dependencies import build_runtime_deps
from robot_head.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

DepsBuilder = Callable[[], Awaitable[RuntimeDeps]]


def create_app(deps_builder: DepsBuilder = build_runtime_deps) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info("Loading runtime dependencies...")
        runtime_deps = await deps_builder()
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                logger.info("Shutting down server...")
                await deps.connections.shutdown(deps.settings.server.shutdown_grace_s)
                await deps.shutdown()
                logger.info("Server exited")

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return ROOT_BANNER

    # Liveness probe used by container health checks.
    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return HEALTH_MESSAGE

    @app.websocket(WS_ENDPOINT_PATH)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


app = create_app()


def graceful_shutdown_timeout(grace_s: float) -> int:
    """Whole seconds for uvicorn, rounded up so a sub-second grace stays bounded."""
    return max(0, math.ceil(grace_s))


def main() -> None:
    configure_logging()
    settings = load_settings().server
    logger.info("Server running on %s:%s", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=graceful_shutdown_timeout(settings.shutdown_grace_s),
    )


__all__ = ["app", "create_app", "graceful_shutdown_timeout", "main"]


if __name__ == "__main__":
    main()
