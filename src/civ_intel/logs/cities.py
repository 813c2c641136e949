"""City_BuildQueue.csv production and AI_CityBuild.csv founding advantages."""

from __future__ import annotations

import math
from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.logs._csv import format_city_name, format_enum_name
from civ_intel.logs.models import CityFoundingStats, CityProduction

NO_PRODUCTION_TURNS = 999


def turns_remaining(progress: float, needed: float, per_turn: float) -> int:
    if per_turn <= 0:
        return NO_PRODUCTION_TURNS
    return max(0, math.ceil((needed - progress) / per_turn))


def parse_city_production(logs_dir: Path) -> list[CityProduction]:
    production = []
    for row in _csv.read_rows(logs_dir, _csv.CITY_PRODUCTION, 7):
        turn = _csv.to_int(row[0])
        if turn is None:
            continue
        per_turn = _csv.to_float(row[2]) or 0.0
        progress = _csv.to_float(row[4]) or 0.0
        needed = _csv.to_float(row[5]) or 0.0
        production.append(
            CityProduction(
                turn=turn,
                city=row[1],
                city_display_name=format_city_name(row[1]),
                current_item=row[3],
                item_display_name=format_enum_name(row[3]),
                production_per_turn=per_turn,
                current_progress=progress,
                production_needed=needed,
                turns_remaining=turns_remaining(progress, needed, per_turn),
                overflow=_csv.to_float(row[6]) or 0.0,
            )
        )
    return production


def parse_city_founding_stats(logs_dir: Path) -> list[CityFoundingStats]:
    """First food/production advantage row per (player, city).

    Later rows for the same city are build decisions, and rows without
    numeric advantages aren't founding data at all.
    """
    stats: list[CityFoundingStats] = []
    seen: set[tuple[int, str]] = set()
    for row in _csv.read_rows(logs_dir, _csv.CITY_BUILD, 5):
        turn, player_id = _csv.to_int(row[0]), _csv.to_int(row[1])
        food, prod = _csv.to_float(row[3]), _csv.to_float(row[4])
        if turn is None or player_id is None or food is None or prod is None:
            continue
        key = (player_id, row[2])
        if key in seen:
            continue
        seen.add(key)
        stats.append(
            CityFoundingStats(
                turn=turn,
                player_id=player_id,
                city=row[2],
                city_display_name=format_city_name(row[2]),
                food_advantage=food,
                production_advantage=prod,
            )
        )
    return stats
