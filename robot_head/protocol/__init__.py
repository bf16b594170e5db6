from .codec import decode, encode, encode_text
from .envelope import NO_RESPONSE, TEXT_KINDS, AudioPayload, Envelope, MessageKind

__all__ = [
    "AudioPayload",
    "Envelope",
    "MessageKind",
    "NO_RESPONSE",
    "TEXT_KINDS",
    "decode",
    "encode",
    "encode_text",
]
