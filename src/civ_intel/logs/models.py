"""Dataclasses for entities rebuilt from the CSV telemetry logs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def round_half_up(value: float) -> int:
    """Halves round up: 12.5 -> 13, -12.5 -> -12."""
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Per-turn empire statistics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CivStatistics:
    turn: int
    civilization: str
    leader: str
    raw_civ_name: str  # token without CIVILIZATION_, e.g. "GEORGIA"
    is_city_state: bool
    score: int
    cities: int
    population: int
    science_per_turn: int
    culture_per_turn: int
    gold_per_turn: int
    faith_per_turn: int
    production_per_turn: int
    food_per_turn: int
    land_units: int  # land + corps + armies
    naval_units: int
    gold_balance: int
    faith_balance: int
    techs_researched: int
    civics_researched: int
    tiles_owned: int
    tiles_improved: int

    @property
    def military_units(self) -> int:
        return self.land_units + self.naval_units


@dataclass(frozen=True)
class TurnData:
    turn: int
    civ_stats: list[CivStatistics] = field(default_factory=list)


@dataclass(frozen=True)
class GameHistory:
    turns: list[TurnData] = field(default_factory=list)  # ascending by turn
    civilizations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScoreBreakdown:
    turn: int
    player_id: int
    civilization: str
    total: int
    civics: int
    empire: int
    great_people: int
    religion: int
    tech: int
    wonder: int


@dataclass(frozen=True)
class Ranking:
    position: int  # 1-based
    value: int


@dataclass(frozen=True)
class VictoryProgress:
    civilization: str
    leader: str
    science: Ranking  # techs researched
    science_per_turn: int
    culture: Ranking  # culture per turn
    domination: Ranking  # land + naval units
    score: Ranking


@dataclass(frozen=True)
class MetricChange:
    start: int
    end: int
    change: int
    percent_change: int  # 0 when start <= 0


@dataclass(frozen=True)
class CountChange:
    start: int
    end: int
    change: int


@dataclass(frozen=True)
class CivTrend:
    civilization: str
    leader: str
    start_turn: int
    end_turn: int
    turns_analyzed: int
    score: MetricChange
    science: MetricChange
    culture: MetricChange
    gold: MetricChange
    military: MetricChange
    territory: MetricChange
    cities: CountChange
    techs: CountChange


# ---------------------------------------------------------------------------
# Diplomacy / military
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiplomaticRelation:
    """One directed edge: how ``from_civ`` regards ``to_civ``."""
    turn: int
    from_civ: str
    to_civ: str
    from_player_id: int
    to_player_id: int
    state: str  # e.g. "FRIENDLY", "DENOUNCED", "WAR"
    score: int
    threat: float = 0.0
    trust: float = 0.0


@dataclass(frozen=True)
class DiplomaticModifier:
    turn: int
    player: str
    player_id: int
    opponent: str
    opponent_id: int
    modifier: str
    action: str
    value: float
    max_value: float
    cooldown_turns: int = 0


@dataclass(frozen=True)
class MilitaryIntelligence:
    turn: int
    civilization: str
    player_id: int
    regional_strength: int
    enemy_strength: int
    other_strength: int
    combat_desire: float
    favorite_tech: str
    current_explorers: int
    desired_explorers: int


@dataclass(frozen=True)
class CombatRecord:
    turn: int
    attacker_civ: str
    defender_civ: str
    attacker_id: int
    defender_id: int
    attacker_unit: str
    defender_unit: str
    attacker_strength: int | None
    defender_strength: int | None
    attacker_damage: int  # damage the attacker took
    defender_damage: int  # damage dealt to the defender


# ---------------------------------------------------------------------------
# Cities / tech / world
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CityProduction:
    turn: int
    city: str
    city_display_name: str
    current_item: str
    item_display_name: str
    production_per_turn: float
    current_progress: float
    production_needed: float
    turns_remaining: int
    overflow: float = 0.0

    @property
    def percent_complete(self) -> int:
        if self.production_needed <= 0:
            return 100
        return round_half_up(self.current_progress / self.production_needed * 100)


@dataclass(frozen=True)
class CityFoundingStats:
    turn: int
    player_id: int
    city: str
    city_display_name: str
    food_advantage: float
    production_advantage: float


@dataclass(frozen=True)
class TechProgress:
    turn: int
    civilization: str
    player_id: int
    tech: str
    status: str  # e.g. "OWNED"
    turns_remaining: int | None


@dataclass(frozen=True)
class CongressVote:
    turn: int
    resolution: str
    player_id: int
    player: str
    votes: int
    target_option: int = 0


@dataclass(frozen=True)
class CongressResult:
    turn: int
    resolution: str
    winning_option: int
    vote_count: int


@dataclass(frozen=True)
class WorldCongress:
    votes: list[CongressVote] = field(default_factory=list)
    results: list[CongressResult] = field(default_factory=list)


@dataclass(frozen=True)
class GreatPersonEvent:
    turn: int
    event: str  # "Granted to Player", "Added to Present Timeline", ...
    individual: str
    display_name: str
    gp_class: str
    era: str
    cost: int | None
    recipient_id: int | None
    recipient: str | None


# ---------------------------------------------------------------------------
# Strategic overview
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StrategicThreat:
    civilization: str
    level: str  # HIGH | MEDIUM | LOW
    reason: str
    details: str


@dataclass(frozen=True)
class StrategicOpportunity:
    civilization: str
    state: str
    score: int
    suggestion: str


@dataclass(frozen=True)
class Conflict:
    pair: str  # "A vs B", names sorted
    battles: int


@dataclass(frozen=True)
class VictoryLeader:
    category: str  # Score | Science | Culture | Domination
    leader: str
    value: int
    player_position: int | None  # None when the player isn't ranked


@dataclass(frozen=True)
class StrategicOverview:
    turn: int
    player_civ: str
    threats: list[StrategicThreat] = field(default_factory=list)
    opportunities: list[StrategicOpportunity] = field(default_factory=list)
    conflicts: list[Conflict] = field(default_factory=list)
    victory_race: list[VictoryLeader] = field(default_factory=list)
    key_production: list[CityProduction] = field(default_factory=list)
