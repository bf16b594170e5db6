"""Robot head client: connect, then talk by keyboard or microphone."""

from __future__ import annotations

import asyncio
import logging
import argparse

from robot_head.errors import ConnectError
from robot_head.runtime.logging import configure_logging
from robot_head.runtime.settings import load_client_settings

from .network import build_url
from .session import ClientSession
from .inputs import stdin_lines, microphone_chunks
from .playback import PlaybackWorker
from .connection import connect_with_retry, websocket_dialer
from .console import console_sink, announce_playback
from .devices import SoundDeviceCapture, SoundDevicePlayback

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Robot head voice client")
    p.add_argument("--server", default=None, help="host:port or ws://host:port or full URL")
    p.add_argument("--secure", action="store_true", help="Use WSS")
    p.add_argument("--api-key", type=str, default=None, help="API key (overrides ROBOT_HEAD_API_KEY env)")
    p.add_argument("--mode", choices=("text", "voice"), default="text", help="Type messages or speak them")
    p.add_argument("--record-seconds", type=float, default=None, help="Length of each voice recording")
    return p.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    settings = load_client_settings(server=args.server, secure=args.secure, api_key=args.api_key)
    url = build_url(settings.server, secure=settings.secure, api_key=settings.api_key)

    try:
        conn = await connect_with_retry(
            websocket_dialer(url),
            max_attempts=settings.connect_max_attempts,
            base_delay_s=settings.connect_base_delay_s,
        )
    except ConnectError as exc:
        logger.error("Websocket connection failed: %s", exc)
        return 1

    if args.mode == "voice":
        seconds = args.record_seconds or settings.record_seconds
        source = microphone_chunks(SoundDeviceCapture(settings.sample_format), seconds)
        print("Say something", flush=True)
    else:
        source = stdin_lines()
        print("Type messages (Ctrl+C to quit): ", flush=True)

    playback = PlaybackWorker(SoundDevicePlayback(pcm_format=settings.sample_format), on_start=announce_playback)
    session = ClientSession(conn, source=source, text_sink=console_sink, playback=playback)
    summary = await session.run()
    logger.info("Session ended: sent=%d received=%d", summary.sent, summary.received)
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        return asyncio.run(run(parse_args(argv)))
    except KeyboardInterrupt:
        return 130


__all__ = ["main", "parse_args", "run"]
