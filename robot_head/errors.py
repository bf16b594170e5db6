"""Shared error types for the robot head protocol, server and client."""

from __future__ import annotations


class RobotHeadError(Exception):
    """Base class for every error raised by this package."""


class MalformedEnvelope(RobotHeadError):
    """Raised when a frame cannot be decoded into a valid envelope."""


class SessionTerminated(RobotHeadError):
    """Raised when a read or write failure ends a connection."""


class ConnectError(RobotHeadError):
    """Raised when the initial dial exhausts every retry attempt."""

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        super().__init__(f"failed to connect after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class UpgradeError(RobotHeadError):
    """Raised when an inbound WebSocket handshake is rejected."""

    def __init__(self, reason: str, *, close_code: int) -> None:
        super().__init__(reason)
        self.reason = reason
        self.close_code = close_code


class CollaboratorError(RobotHeadError):
    """Base class for failures of an external STT/LLM/TTS capability."""


class SttError(CollaboratorError):
    pass


class LlmError(CollaboratorError):
    pass


class TtsError(CollaboratorError):
    pass


__all__ = [
    "CollaboratorError",
    "ConnectError",
    "LlmError",
    "MalformedEnvelope",
    "RobotHeadError",
    "SessionTerminated",
    "SttError",
    "TtsError",
    "UpgradeError",
]
