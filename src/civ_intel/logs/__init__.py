"""Loaders and aggregators for the game's CSV telemetry logs.

Every loader takes the logs directory and re-reads its file on each call.
A missing file yields an empty result; short or malformed rows are skipped.
"""

from civ_intel.logs.cities import parse_city_founding_stats, parse_city_production
from civ_intel.logs.diplomacy import parse_diplomacy, parse_diplomacy_modifiers
from civ_intel.logs.history import (
    analyze_trends,
    calculate_victory_progress,
    latest_full_civ_stats,
    latest_turn_stats,
    parse_game_history,
    parse_score_breakdown,
    stats_for_turn,
)
from civ_intel.logs.military import parse_combat_log, parse_military_intel
from civ_intel.logs.models import *  # noqa: F401,F403
from civ_intel.logs.overview import build_strategic_overview
from civ_intel.logs.players import build_player_id_map, civ_name
from civ_intel.logs.tech import owned_tech_counts, parse_tech_status
from civ_intel.logs.world import (
    parse_cultural_great_people,
    parse_great_people,
    parse_world_congress,
)
