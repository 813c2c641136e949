"""Where Civilization VI keeps its saves and telemetry logs.

Only ``sys.platform`` picks the layout: Windows uses the Documents tree,
everything else is treated as the macOS Application Support layout.
"""

from __future__ import annotations

import sys
from pathlib import Path

_GAME = "Sid Meier's Civilization VI"


def _windows_root() -> Path:
    return Path.home() / "Documents" / "My Games" / _GAME


def _mac_root() -> Path:
    return Path.home() / "Library" / "Application Support" / _GAME


def saves_dir() -> Path:
    """Directory holding ``Single/``, ``Single/auto`` and ``Single/quick``."""
    if sys.platform == "win32":
        return _windows_root() / "Saves"
    return _mac_root() / _GAME / "Saves"


def logs_dir() -> Path:
    """Directory the game writes its CSV telemetry into."""
    if sys.platform == "win32":
        return _windows_root() / "Logs"
    return _mac_root() / "Firaxis Games" / _GAME / "Logs"


def user_options_path() -> Path:
    """UserOptions.txt, where ``GameHistoryLogLevel`` enables the CSV logs."""
    if sys.platform == "win32":
        return _windows_root() / "UserOptions.txt"
    return _mac_root() / "UserOptions.txt"
