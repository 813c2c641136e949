"""AI_Research.csv technology rows."""

from __future__ import annotations

from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.logs._csv import format_enum_name
from civ_intel.logs.models import TechProgress
from civ_intel.logs.players import build_player_id_map, civ_name


def parse_tech_status(logs_dir: Path) -> list[TechProgress]:
    """Technology rows only; civic rows in the same file are skipped."""
    rows = _csv.read_rows(logs_dir, _csv.TECH, 7)
    if not rows:
        return []
    player_map = build_player_id_map(logs_dir)
    progress = []
    for row in rows:
        turn, player_id = _csv.to_int(row[0]), _csv.to_int(row[1])
        if turn is None or player_id is None or row[2] != "Tech":
            continue
        progress.append(
            TechProgress(
                turn=turn,
                civilization=civ_name(player_id, player_map),
                player_id=player_id,
                tech=format_enum_name(row[3]),
                status=row[5],
                turns_remaining=_csv.to_int(row[6]),
            )
        )
    return progress


def owned_tech_counts(progress: list[TechProgress]) -> list[tuple[str, int]]:
    """OWNED techs per civ on the latest turn, most first."""
    latest = _csv.latest_turn(progress)
    counts: dict[str, int] = {}
    for p in progress:
        if p.turn == latest and p.status == "OWNED":
            counts[p.civilization] = counts.get(p.civilization, 0) + 1
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
