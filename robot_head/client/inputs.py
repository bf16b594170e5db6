"""Input sources feeding the client's send loop."""

from __future__ import annotations

import sys
import asyncio
import logging
import threading
import contextlib
from typing import Any, TextIO
from collections.abc import Callable, Awaitable, AsyncIterator

from robot_head.config.client import CAPTURE_RETRY_DELAY_S

from .contracts import AudioCapture

logger = logging.getLogger(__name__)


async def stdin_lines(stream: TextIO | None = None) -> AsyncIterator[str]:
    """Yield each non-blank line typed on ``stream`` until EOF.

    Lines are read on a daemon thread so a blocked ``readline`` never holds
    up interpreter shutdown.
    """
    stream = stream if stream is not None else sys.stdin
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def _put(item: str | None) -> None:
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(queue.put_nowait, item)

    def _reader() -> None:
        try:
            for line in stream:
                _put(line)
        finally:
            _put(None)

    threading.Thread(target=_reader, name="stdin-reader", daemon=True).start()

    while True:
        line = await queue.get()
        if line is None:
            return
        text = line.rstrip("\r\n")
        if text.strip():
            yield text


async def microphone_chunks(
    capture: AudioCapture,
    seconds: float,
    *,
    retry_delay_s: float = CAPTURE_RETRY_DELAY_S,
    max_chunks: int | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> AsyncIterator[bytes]:
    """Yield fixed-length recordings; capture failures are retried after a pause."""
    produced = 0
    while max_chunks is None or produced < max_chunks:
        try:
            pcm = await asyncio.to_thread(capture, seconds)
        except Exception as exc:
            logger.warning("Failed to record audio: %s", exc)
            await sleep(retry_delay_s)
            continue
        if not pcm:
            continue
        produced += 1
        yield pcm


__all__ = ["microphone_chunks", "stdin_lines"]
