"""AI_Military.csv posture rows and CombatLog.csv engagements."""

from __future__ import annotations

from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.logs._csv import format_enum_name
from civ_intel.logs.models import CombatRecord, MilitaryIntelligence
from civ_intel.logs.players import build_player_id_map, civ_name


def parse_explorers(cell: str) -> tuple[int, int]:
    """``"2:5"`` -> ``(2, 5)``; missing or malformed halves read as 0."""
    parts = cell.split(":")
    current = _csv.to_int(parts[0]) or 0
    desired = (_csv.to_int(parts[1]) or 0) if len(parts) > 1 else 0
    return current, desired


def parse_military_intel(logs_dir: Path) -> list[MilitaryIntelligence]:
    rows = _csv.read_rows(logs_dir, _csv.MILITARY, 9)
    if not rows:
        return []
    player_map = build_player_id_map(logs_dir)
    intel = []
    for row in rows:
        turn, player_id = _csv.to_int(row[0]), _csv.to_int(row[1])
        if turn is None or player_id is None:
            continue
        current, desired = parse_explorers(row[5])
        intel.append(
            MilitaryIntelligence(
                turn=turn,
                civilization=civ_name(player_id, player_map),
                player_id=player_id,
                regional_strength=_csv.to_int(row[2]) or 0,
                enemy_strength=_csv.to_int(row[3]) or 0,
                other_strength=_csv.to_int(row[4]) or 0,
                combat_desire=_csv.to_float(row[8]) or 0.0,
                favorite_tech=format_enum_name(row[7] or "NO_TECH"),
                current_explorers=current,
                desired_explorers=desired,
            )
        )
    return intel


def parse_combat_log(logs_dir: Path) -> list[CombatRecord]:
    rows = _csv.read_rows(logs_dir, _csv.COMBAT, 14)
    if not rows:
        return []
    player_map = build_player_id_map(logs_dir)
    records = []
    for row in rows:
        turn, attacker_id, defender_id = (_csv.to_int(c) for c in row[:3])
        if turn is None or attacker_id is None or defender_id is None:
            continue
        records.append(
            CombatRecord(
                turn=turn,
                attacker_civ=civ_name(attacker_id, player_map),
                defender_civ=civ_name(defender_id, player_map),
                attacker_id=attacker_id,
                defender_id=defender_id,
                attacker_unit=format_enum_name(row[5] or "UNKNOWN"),
                defender_unit=format_enum_name(row[6] or "UNKNOWN"),
                attacker_strength=_csv.to_int(row[9]),
                defender_strength=_csv.to_int(row[10]),
                attacker_damage=_csv.to_int(row[13]) or 0,
                defender_damage=_csv.to_int(row[12]) or 0,
            )
        )
    return records
