"""Assemble a GameState from a .Civ6Save and enumerate saves on disk."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from civ_intel.save import binary, header
from civ_intel.save.content import analyze_decompressed, identify_civ_from_cities
from civ_intel.save.models import (
    CivInfo,
    ContentSummary,
    GameState,
    MarkerType,
    MarkerValue,
    SaveFileInfo,
)
from civ_intel.save.tables import format_enum_value, format_leader_name

log = logging.getLogger(__name__)

SAVE_SUFFIX = ".Civ6Save"
SAVE_FILTERS = ("all", "autosave", "manual", "quicksave")
MAX_SCAN_DEPTH = 2

_AUTOSAVE_TURN_RE = re.compile(r"AutoSave_(\d+)")
_YEAR_TURN_RE = re.compile(r"(\d+)\s*(?:AD|BC)", re.IGNORECASE)
_LEADER_PREFIX_RE = re.compile(r"^([A-Z][A-Z_]+)")


def _marker(buffer: bytes, marker: bytes, expected: MarkerType) -> MarkerValue | None:
    """Read one header field; a truncated record counts as absent."""
    try:
        value = binary.read_marker_value(buffer, marker)
    except binary.SaveFormatError as e:
        log.debug("Ignoring unreadable marker %s: %s", marker.hex(), e)
        return None
    if value is None or value.type != expected:
        return None
    return value


def _turn_from_filename(name: str) -> int | None:
    m = _AUTOSAVE_TURN_RE.search(name)
    return int(m.group(1)) if m else None


def resolve_player(
    roster: list[CivInfo], content: ContentSummary | None
) -> tuple[CivInfo | None, list[CivInfo]]:
    """Pick the human civ out of the header roster.

    City names found in the game data win; otherwise the civ whose header
    marker was followed by "Player"; otherwise the first civ. Returns
    copies with is_human set on the player and cleared on every other civ.
    """
    player_idx: int | None = None
    if content and content.player_cities:
        token = identify_civ_from_cities(content.player_cities)
        if token:
            for i, civ in enumerate(roster):
                if civ.civilization.upper() == token or civ.token == token:
                    player_idx = i
                    break
    if player_idx is None:
        flagged = [i for i, civ in enumerate(roster) if civ.is_human]
        if len(flagged) == 1:
            player_idx = flagged[0]
    if player_idx is None and roster:
        log.debug("Could not identify human civ; assuming %s", roster[0].civilization)
        player_idx = 0
    if player_idx is None:
        return None, []

    player = replace(roster[player_idx], is_human=True)
    others = [
        replace(civ, is_human=False) for i, civ in enumerate(roster) if i != player_idx
    ]
    return player, others


def parse_save(buffer: bytes, filename: str = "") -> GameState:
    """Decode a save already read into memory.

    Raises SaveFormatError if the magic bytes are wrong. Every other
    field is best-effort and left as None when it can't be recovered.
    """
    binary.check_magic(buffer)
    text = header.header_text(buffer)

    turn: int | None = None
    turn_value = _marker(buffer, binary.GAME_TURN, MarkerType.INT)
    if turn_value is not None:
        turn = turn_value.data
    if not turn:
        turn = _turn_from_filename(filename) or turn

    game_speed = None
    speed_value = _marker(buffer, binary.GAME_SPEED, MarkerType.STRING)
    if speed_value is not None:
        game_speed = format_enum_value(speed_value.data.replace("GAMESPEED_", "", 1))

    map_size = None
    size_value = _marker(buffer, binary.MAP_SIZE, MarkerType.STRING)
    if size_value is not None:
        map_size = format_enum_value(size_value.data.replace("MAPSIZE_", "", 1))

    civs = header.extract_civs(text)
    roster = ([civs.player] if civs.player else []) + civs.ai_civs

    content: ContentSummary | None = None
    decompressed = binary.decompress_game_data(buffer)
    if decompressed is not None:
        content = analyze_decompressed(decompressed)

    player, others = resolve_player(roster, content)

    # Header city-states are more reliable than the data-segment scan
    city_states = civs.city_states or (content.city_states if content else [])

    return GameState(
        leader=player.leader if player else None,
        civilization=player.civilization if player else None,
        turn=turn,
        era=header.extract_era(text),
        difficulty=header.extract_difficulty(text),
        map_type=header.extract_map_type(text),
        map_size=map_size,
        game_speed=game_speed,
        game_version=header.extract_version(text),
        player=player,
        other_civs=tuple(others),
        city_states=tuple(city_states),
        mods=tuple(header.extract_mods(text)),
        content=content,
    )


def parse_save_file(path: str | Path) -> GameState:
    path = Path(path)
    return parse_save(path.read_bytes(), path.name)


# ---------------------------------------------------------------------------
# Save listing
# ---------------------------------------------------------------------------


def _save_info(path: Path) -> SaveFileInfo:
    stat = path.stat()
    turn = _turn_from_filename(path.name)
    m = _YEAR_TURN_RE.search(path.name)
    if m:
        turn = int(m.group(1))
    m = _LEADER_PREFIX_RE.match(path.name)
    return SaveFileInfo(
        name=path.name,
        path=str(path),
        modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
        size=stat.st_size,
        leader=format_leader_name(m.group(1)) if m else None,
        turn=turn,
    )


def _scan(directory: Path, depth: int = 0) -> list[tuple[float, SaveFileInfo]]:
    if depth > MAX_SCAN_DEPTH or not directory.is_dir():
        return []
    found: list[tuple[float, SaveFileInfo]] = []
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        log.debug("Cannot list %s: %s", directory, e)
        return []
    for entry in entries:
        if entry.is_dir():
            if not entry.name.startswith("."):
                found.extend(_scan(entry, depth + 1))
        elif entry.name.endswith(SAVE_SUFFIX):
            found.append((entry.stat().st_mtime, _save_info(entry)))
    return found


def _is_autosave(name: str) -> bool:
    return name.startswith("AutoSave")


def _is_quicksave(name: str) -> bool:
    return "quicksave" in name.lower()


def list_save_files(saves_dir: str | Path, filter: str = "all") -> list[SaveFileInfo]:
    """List single-player saves, newest first.

    ``filter`` is one of all/autosave/manual/quicksave. A missing directory
    yields an empty list.
    """
    if filter not in SAVE_FILTERS:
        raise ValueError(f"Unknown save filter {filter!r}; expected one of {SAVE_FILTERS}")
    single = Path(saves_dir) / "Single"
    if filter in ("all", "manual"):
        found = _scan(single)
    elif filter == "autosave":
        found = _scan(single / "auto")
    else:
        found = _scan(single / "quick")

    unique: dict[str, tuple[float, SaveFileInfo]] = {}
    for mtime, info in found:
        unique[info.path] = (mtime, info)
    ordered = [info for _, info in sorted(unique.values(), key=lambda x: x[0], reverse=True)]

    if filter == "autosave":
        return [s for s in ordered if _is_autosave(s.name)]
    if filter == "quicksave":
        return [s for s in ordered if _is_quicksave(s.name)]
    if filter == "manual":
        return [s for s in ordered if not _is_autosave(s.name) and not _is_quicksave(s.name)]
    return ordered
