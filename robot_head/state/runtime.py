"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from contextlib import AsyncExitStack
from dataclasses import field, dataclass

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from robot_head.state.settings import AppSettings
    from robot_head.pipeline import ResponsePipeline
    from robot_head.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    """Process-wide objects built once at startup and shared by every session.

    ``pipeline`` holds the single STT engine; everything per-connection is
    created inside the session handler instead.
    """

    connections: ConnectionManager
    pipeline: ResponsePipeline
    settings: AppSettings
    _resource_stack: AsyncExitStack = field(default_factory=AsyncExitStack)

    async def shutdown(self) -> None:
        try:
            await self._resource_stack.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
