"""Map positional player indices to civilizations.

Most log files identify actors only by a player index. Player_Stats.csv
is the one file carrying civ names; the order in which civs first appear
there is taken to be the index order.
"""

from __future__ import annotations

from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.save.tables import civ_display_info


def strip_civ_prefix(raw: str) -> str:
    return raw.replace("CIVILIZATION_", "", 1)


def build_player_id_map(logs_dir: Path) -> dict[int, str]:
    """Player index -> civ token, in first-seen order of Player_Stats.csv."""
    index: dict[str, int] = {}
    for row in _csv.read_rows(logs_dir, _csv.PLAYER_STATS, 2):
        token = strip_civ_prefix(row[1])
        if token not in index:
            index[token] = len(index)
    return {pid: token for token, pid in index.items()}


def civ_name(player_id: int, player_map: dict[int, str]) -> str:
    """Display name for ``player_id``; unknown indices become ``Player N``."""
    token = player_map.get(player_id)
    if token is None:
        return f"Player {player_id}"
    return civ_display_info(token)[0]
