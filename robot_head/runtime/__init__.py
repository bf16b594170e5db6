"""Runtime package.

Keep this module dependency-light: importing `robot_head.runtime.*` in unit
tests should not load the Whisper model.
"""

__all__: list[str] = []
