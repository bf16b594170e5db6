"""Terminal output for replies."""

from __future__ import annotations

from robot_head.protocol import MessageKind, AudioPayload


def console_sink(kind: MessageKind, text: str) -> None:
    if kind is MessageKind.AI_RESPONSE:
        print(f"\nRobot: {text}\n", flush=True)
    else:
        print(f"Server: {text}", flush=True)


def announce_playback(payload: AudioPayload) -> None:
    if payload.text:
        print(f"\nPlaying audio for: {payload.text}\n", flush=True)


__all__ = ["announce_playback", "console_sink"]
