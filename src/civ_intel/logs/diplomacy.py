"""AI_Diplomacy.csv and DiplomacyModifiers.csv.

AI_Diplomacy rows are per (turn, player). Columns 4+ hold one cell per
partner, where column ``4 + k`` describes how the row's player regards
player ``k``:

    "-23:DIPLO_STATE_UNFRIENDLY"   score and state (most actions)
    "60.16:1:32.00"                threat, rank and trust ("Threat and Trust")
"""

from __future__ import annotations

import re
from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.logs.models import DiplomaticModifier, DiplomaticRelation
from civ_intel.logs.players import build_player_id_map, civ_name

THREAT_AND_TRUST = "Threat and Trust"
PARTNER_COL_OFFSET = 4

_STATE_RE = re.compile(r"(-?\d+):DIPLO_STATE_(\w+)")
_THREAT_RE = re.compile(r"([\d.]+):(\d+):([\d.]+)")


def parse_diplomacy(logs_dir: Path) -> list[DiplomaticRelation]:
    """Directed relations in file order; self-relations are dropped.

    Threat/trust come from the "Threat and Trust" row logged for the same
    turn and player; edges without one stay at zero.
    """
    rows = _csv.read_rows(logs_dir, _csv.DIPLOMACY, PARTNER_COL_OFFSET)
    if not rows:
        return []
    player_map = build_player_id_map(logs_dir)
    threat_trust = _threat_and_trust(rows)

    relations: list[DiplomaticRelation] = []
    for row in rows:
        turn, from_id = _csv.to_int(row[0]), _csv.to_int(row[1])
        if turn is None or from_id is None or row[2] == THREAT_AND_TRUST:
            continue
        for col in range(PARTNER_COL_OFFSET, len(row)):
            m = _STATE_RE.search(row[col])
            if not m:
                continue
            to_id = col - PARTNER_COL_OFFSET
            if to_id == from_id:
                continue
            threat, trust = threat_trust.get((turn, from_id, to_id), (0.0, 0.0))
            relations.append(
                DiplomaticRelation(
                    turn=turn,
                    from_civ=civ_name(from_id, player_map),
                    to_civ=civ_name(to_id, player_map),
                    from_player_id=from_id,
                    to_player_id=to_id,
                    state=m.group(2),
                    score=int(m.group(1)),
                    threat=threat,
                    trust=trust,
                )
            )
    return relations


def _threat_and_trust(rows: list[list[str]]) -> dict[tuple[int, int, int], tuple[float, float]]:
    """(turn, from, to) -> (threat, trust); a later row for the same key wins."""
    values: dict[tuple[int, int, int], tuple[float, float]] = {}
    for row in rows:
        turn, from_id = _csv.to_int(row[0]), _csv.to_int(row[1])
        if turn is None or from_id is None or row[2] != THREAT_AND_TRUST:
            continue
        for col in range(PARTNER_COL_OFFSET, len(row)):
            m = _THREAT_RE.search(row[col])
            if not m:
                continue
            threat, trust = _csv.to_float(m.group(1)), _csv.to_float(m.group(3))
            values[(turn, from_id, col - PARTNER_COL_OFFSET)] = (
                threat if threat is not None else 0.0,
                trust if trust is not None else 0.0,
            )
    return values


def parse_diplomacy_modifiers(logs_dir: Path) -> list[DiplomaticModifier]:
    rows = _csv.read_rows(logs_dir, _csv.DIPLOMACY_MODIFIERS, 7)
    if not rows:
        return []
    player_map = build_player_id_map(logs_dir)
    modifiers = []
    for row in rows:
        turn, player_id, opponent_id = (_csv.to_int(c) for c in row[:3])
        if turn is None or player_id is None or opponent_id is None:
            continue
        cooldown = _csv.to_int(row[9]) if len(row) > 9 else 0
        modifiers.append(
            DiplomaticModifier(
                turn=turn,
                player=civ_name(player_id, player_map),
                player_id=player_id,
                opponent=civ_name(opponent_id, player_map),
                opponent_id=opponent_id,
                modifier=row[3],
                action=row[4],
                value=_csv.to_float(row[5]) or 0.0,
                max_value=_csv.to_float(row[6]) or 0.0,
                cooldown_turns=cooldown or 0,
            )
        )
    return modifiers
