"""Facade over the save decoder and log loaders.

Holds nothing but the two directories. Every method re-reads the files it
needs, so answers always reflect what the game has written so far.
"""

from __future__ import annotations

import logging
from pathlib import Path

from civ_intel import logs, paths
from civ_intel.logs import _csv
from civ_intel.logs.models import (
    CityFoundingStats,
    CityProduction,
    CivStatistics,
    CivTrend,
    CombatRecord,
    DiplomaticModifier,
    DiplomaticRelation,
    GameHistory,
    GreatPersonEvent,
    MilitaryIntelligence,
    ScoreBreakdown,
    StrategicOverview,
    TechProgress,
    VictoryProgress,
    WorldCongress,
)
from civ_intel.logs.overview import key_production
from civ_intel.save import GameState, SaveFileInfo, list_save_files, parse_save_file

log = logging.getLogger(__name__)


class CivIntel:
    def __init__(self, logs_dir: str | Path | None = None, saves_dir: str | Path | None = None):
        self.logs_dir = Path(logs_dir) if logs_dir else paths.logs_dir()
        self.saves_dir = Path(saves_dir) if saves_dir else paths.saves_dir()
        log.debug("Logs: %s, saves: %s", self.logs_dir, self.saves_dir)

    # ------------------------------------------------------------------
    # Saves
    # ------------------------------------------------------------------

    def list_saves(self, filter: str = "all") -> list[SaveFileInfo]:
        return list_save_files(self.saves_dir, filter)

    def resolve_save_path(self, save_path: str | Path) -> Path:
        """Absolute paths pass through; bare names are looked up under the saves dir."""
        path = Path(save_path).expanduser()
        if path.is_absolute() or path.exists():
            return path
        return self.saves_dir / path

    def game_state(self, save_path: str | Path) -> GameState:
        return parse_save_file(self.resolve_save_path(save_path))

    # ------------------------------------------------------------------
    # Empire statistics
    # ------------------------------------------------------------------

    def logging_enabled(self) -> bool:
        """True once the game has written Player_Stats.csv."""
        return (self.logs_dir / _csv.PLAYER_STATS).is_file()

    def history(self) -> GameHistory | None:
        return logs.parse_game_history(self.logs_dir)

    def latest_stats(self) -> list[CivStatistics]:
        return logs.latest_turn_stats(self.history())

    def latest_full_stats(self) -> list[CivStatistics]:
        return logs.latest_full_civ_stats(self.history())

    def stats_for_turn(self, turn: int) -> list[CivStatistics]:
        return logs.stats_for_turn(self.history(), turn)

    def victory_progress(self) -> list[VictoryProgress]:
        return logs.calculate_victory_progress(self.latest_full_stats())

    def trends(self, turns_back: int = 10) -> list[CivTrend]:
        if turns_back < 1:
            raise ValueError(f"turns_back must be positive, got {turns_back}")
        return logs.analyze_trends(self.history(), turns_back)

    def score_breakdown(self) -> list[ScoreBreakdown]:
        return logs.parse_score_breakdown(self.logs_dir)

    # ------------------------------------------------------------------
    # Diplomacy / military
    # ------------------------------------------------------------------

    def diplomacy(self) -> list[DiplomaticRelation]:
        return logs.parse_diplomacy(self.logs_dir)

    def diplomatic_modifiers(self) -> list[DiplomaticModifier]:
        return logs.parse_diplomacy_modifiers(self.logs_dir)

    def military_intel(self) -> list[MilitaryIntelligence]:
        return logs.parse_military_intel(self.logs_dir)

    def combat_log(self) -> list[CombatRecord]:
        return logs.parse_combat_log(self.logs_dir)

    # ------------------------------------------------------------------
    # Cities / tech / world
    # ------------------------------------------------------------------

    def city_production(self) -> list[CityProduction]:
        """Build queue entries from the latest logged turn."""
        production = logs.parse_city_production(self.logs_dir)
        latest = _csv.latest_turn(production)
        return [p for p in production if p.turn == latest]

    def strategic_production(self) -> list[CityProduction]:
        return key_production(self.city_production())

    def city_founding_stats(self) -> list[CityFoundingStats]:
        return logs.parse_city_founding_stats(self.logs_dir)

    def tech_status(self) -> list[TechProgress]:
        return logs.parse_tech_status(self.logs_dir)

    def world_congress(self) -> WorldCongress:
        return logs.parse_world_congress(self.logs_dir)

    def great_people(self) -> list[GreatPersonEvent]:
        return logs.parse_great_people(self.logs_dir)

    def cultural_great_people(self) -> list[GreatPersonEvent]:
        return logs.parse_cultural_great_people(self.logs_dir)

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def strategic_overview(self, player_civ: str | None = None) -> StrategicOverview | None:
        """None when no empire statistics have been logged yet."""
        stats = self.latest_full_stats()
        if not stats:
            return None
        return logs.build_strategic_overview(
            stats,
            self.diplomacy(),
            self.military_intel(),
            self.combat_log(),
            self.city_production(),
            player_civ,
        )
