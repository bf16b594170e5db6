"""Secrets and authentication configuration.

Provider keys come from the environment first, then from
``~/.api_keys/<name>`` files. A missing key is not fatal at startup; the
provider call that needs it fails instead.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

API_KEYS_DIRNAME = ".api_keys"


def read_key_file(filename: str, *, home: Path | None = None) -> str:
    base = home if home is not None else Path.home()
    path = base / API_KEYS_DIRNAME / filename
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return ""
    except OSError:
        logger.warning("could not read API key from %s", path, exc_info=True)
        return ""


def resolve_secret(env_name: str, filename: str, *, home: Path | None = None) -> str:
    value = (os.getenv(env_name) or "").strip()
    if value:
        return value
    return read_key_file(filename, home=home)


def get_openai_api_key() -> str:
    return resolve_secret("OPENAI_API_KEY", "openai_key")


def get_elevenlabs_api_key() -> str:
    return resolve_secret("ELEVENLABS_API_KEY", "elevenlabs_key")


def get_robot_head_api_key() -> str:
    # Empty means the /ws endpoint accepts any client.
    return (os.getenv("ROBOT_HEAD_API_KEY") or "").strip()


__all__ = [
    "get_elevenlabs_api_key",
    "get_openai_api_key",
    "get_robot_head_api_key",
    "read_key_file",
    "resolve_secret",
]
