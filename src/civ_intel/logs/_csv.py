"""Shared CSV plumbing for the telemetry loaders."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path

log = logging.getLogger(__name__)

# File names written by the game when GameHistoryLogLevel=1
PLAYER_STATS = "Player_Stats.csv"
PLAYER_SCORES = "Game_PlayerScores.csv"
DIPLOMACY = "AI_Diplomacy.csv"
DIPLOMACY_MODIFIERS = "DiplomacyModifiers.csv"
MILITARY = "AI_Military.csv"
COMBAT = "CombatLog.csv"
CITY_PRODUCTION = "City_BuildQueue.csv"
CITY_BUILD = "AI_CityBuild.csv"
TECH = "AI_Research.csv"
WORLD_CONGRESS = "World_Congress.csv"
GREAT_PEOPLE = "Game_GreatPeople.csv"


def read_rows(logs_dir: Path, filename: str, min_cols: int) -> list[list[str]]:
    """Data rows of ``filename`` with trimmed cells.

    The header row is dropped, as is any row shorter than ``min_cols``.
    A missing file reads as no rows.
    """
    path = Path(logs_dir) / filename
    if not path.is_file():
        log.debug("Log file not found: %s", path)
        return []
    with path.open(newline="", encoding="utf-8", errors="replace") as f:
        reader = csv.reader(f)
        next(reader, None)
        rows = [[cell.strip() for cell in row] for row in reader]
    kept = [row for row in rows if len(row) >= min_cols]
    if len(kept) != len(rows):
        log.debug("%s: skipped %d short rows", filename, len(rows) - len(kept))
    return kept


def to_int(value: str) -> int | None:
    """Leading integer of ``value`` (``"12.7"`` -> 12), or None."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def to_float(value: str) -> float | None:
    try:
        result = float(value)
    except ValueError:
        return None
    return None if result != result else result  # NaN


# ---------------------------------------------------------------------------
# Display-name helpers
# ---------------------------------------------------------------------------

_ENUM_PREFIX_RE = re.compile(
    r"^(UNIT_|BUILDING_|DISTRICT_|PROJECT_|TECH_|CIVIC_"
    r"|GREAT_PERSON_INDIVIDUAL_|GREAT_PERSON_CLASS_)"
)


def _title_words(name: str) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in name.split("_"))


def format_enum_name(name: str) -> str:
    """``UNIT_GIANT_DEATH_ROBOT`` -> ``Giant Death Robot``."""
    return _title_words(_ENUM_PREFIX_RE.sub("", name, count=1))


def format_city_name(loc_name: str) -> str:
    """``LOC_CITY_NAME_GEELONG`` -> ``Geelong``; ``LOC_CITY_HA_NOI`` -> ``Ha Noi``."""
    name = re.sub(r"^LOC_CITY_NAME_", "", loc_name)
    name = re.sub(r"^LOC_CITY_", "", name)
    name = re.sub(r"^NAME_", "", name)
    return _title_words(name)


def latest_turn(records) -> int | None:
    """Highest ``.turn`` among ``records``, or None for an empty list."""
    return max((r.turn for r in records), default=None)
