"""Decoder for .Civ6Save files: header markers, roster heuristics, game data."""

from civ_intel.save.binary import SaveFormatError, decompress_game_data, read_marker_value
from civ_intel.save.models import (
    CivInfo,
    ContentSummary,
    GameState,
    HeaderCivs,
    MarkerType,
    MarkerValue,
    ModInfo,
    SaveFileInfo,
)
from civ_intel.save.parser import list_save_files, parse_save, parse_save_file

__all__ = [
    "CivInfo",
    "ContentSummary",
    "GameState",
    "HeaderCivs",
    "MarkerType",
    "MarkerValue",
    "ModInfo",
    "SaveFileInfo",
    "SaveFormatError",
    "decompress_game_data",
    "list_save_files",
    "parse_save",
    "parse_save_file",
    "read_marker_value",
]
