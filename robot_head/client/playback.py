"""Serialized audio playback worker.

The receive loop hands clips to :meth:`PlaybackWorker.submit` and moves on
immediately. One worker task renders them strictly in arrival order, so a
second reply never talks over the first and decoding latency never stalls
message intake.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from robot_head.protocol import AudioPayload

from .contracts import AudioPlayback

logger = logging.getLogger(__name__)


class PlaybackWorker:
    def __init__(
        self,
        playback: AudioPlayback,
        *,
        on_start: Callable[[AudioPayload], None] | None = None,
    ) -> None:
        self._playback = playback
        self._on_start = on_start
        self._queue: asyncio.Queue[AudioPayload | None] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self.played = 0
        self.failed = 0

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name="playback-worker")
        return self._task

    def submit(self, payload: AudioPayload) -> None:
        """Queue a clip for playback without waiting for it to render."""
        self.start()
        self._queue.put_nowait(payload)

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                if item is None:
                    return
                await self._play(item)
            finally:
                self._queue.task_done()

    async def _play(self, payload: AudioPayload) -> None:
        if self._on_start is not None:
            self._on_start(payload)
        try:
            await asyncio.to_thread(self._playback, payload.audio, payload.mime_type)
        except Exception:
            self.failed += 1
            logger.warning("Failed to play audio (%s)", payload.mime_type, exc_info=True)
            return
        self.played += 1

    async def stop(self, *, drain: bool = True) -> None:
        """Stop the worker; with ``drain`` queued clips finish playing first."""
        if self._task is None:
            return
        if drain and not self._task.done():
            self._queue.put_nowait(None)
        else:
            self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None


__all__ = ["PlaybackWorker"]
