"""Empire statistics history: Player_Stats.csv joined with Game_PlayerScores.csv.

The two files share no key. Rows are joined by their position within a
turn: the n-th stats row of turn T takes the score logged for player n on
turn T. Everything downstream (victory ranking, trends, the strategy
brief) is built on that join.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.logs.models import (
    CivStatistics,
    CivTrend,
    CountChange,
    GameHistory,
    MetricChange,
    Ranking,
    ScoreBreakdown,
    TurnData,
    VictoryProgress,
    round_half_up,
)
from civ_intel.logs.players import build_player_id_map, civ_name, strip_civ_prefix
from civ_intel.save.tables import civ_display_info, is_history_city_state

log = logging.getLogger(__name__)

STATS_MIN_COLS = 20
SCORES_MIN_COLS = 9


@dataclass(frozen=True)
class PlayerStatsRow:
    turn: int
    civilization: str  # token, e.g. "GEORGIA"
    num_cities: int
    population: int
    techs: int
    civics: int
    land_units: int
    corps: int
    armies: int
    naval_units: int
    tiles_owned: int
    tiles_improved: int
    gold_balance: int
    faith_balance: int
    science_yield: int
    culture_yield: int
    gold_yield: int
    faith_yield: int
    production_yield: int
    food_yield: int


@dataclass(frozen=True)
class PlayerScoreRow:
    turn: int
    player_id: int
    score: int
    civics: int
    empire: int
    great_people: int
    religion: int
    tech: int
    wonder: int


def _ints(cells: list[str]) -> list[int]:
    return [_csv.to_int(c) or 0 for c in cells]


def load_player_stats(logs_dir: Path) -> list[PlayerStatsRow]:
    rows = []
    for r in _csv.read_rows(logs_dir, _csv.PLAYER_STATS, STATS_MIN_COLS):
        turn = _csv.to_int(r[0])
        if turn is None:
            continue
        rows.append(PlayerStatsRow(turn, strip_civ_prefix(r[1]), *_ints(r[2:20])))
    return rows


def load_player_scores(logs_dir: Path) -> list[PlayerScoreRow]:
    rows = []
    for r in _csv.read_rows(logs_dir, _csv.PLAYER_SCORES, SCORES_MIN_COLS):
        turn, player_id = _csv.to_int(r[0]), _csv.to_int(r[1])
        if turn is None or player_id is None:
            continue
        rows.append(PlayerScoreRow(turn, player_id, *_ints(r[2:9])))
    return rows


def _civ_statistics(s: PlayerStatsRow, score: int) -> CivStatistics:
    civilization, leader = civ_display_info(s.civilization)
    return CivStatistics(
        turn=s.turn,
        civilization=civilization,
        leader=leader,
        raw_civ_name=s.civilization,
        is_city_state=is_history_city_state(s.civilization),
        score=score,
        cities=s.num_cities,
        population=s.population,
        science_per_turn=s.science_yield,
        culture_per_turn=s.culture_yield,
        gold_per_turn=s.gold_yield,
        faith_per_turn=s.faith_yield,
        production_per_turn=s.production_yield,
        food_per_turn=s.food_yield,
        land_units=s.land_units + s.corps + s.armies,
        naval_units=s.naval_units,
        gold_balance=s.gold_balance,
        faith_balance=s.faith_balance,
        techs_researched=s.techs,
        civics_researched=s.civics,
        tiles_owned=s.tiles_owned,
        tiles_improved=s.tiles_improved,
    )


def parse_game_history(logs_dir: Path) -> GameHistory | None:
    """Per-turn statistics for every civ, turns ascending. None without logs."""
    raw_stats = load_player_stats(logs_dir)
    if not raw_stats:
        return None

    scores_by_turn: dict[int, dict[int, int]] = {}
    for sc in load_player_scores(logs_dir):
        scores_by_turn.setdefault(sc.turn, {})[sc.player_id] = sc.score

    by_turn: dict[int, list[PlayerStatsRow]] = {}
    civ_tokens: dict[str, None] = {}
    for s in raw_stats:
        by_turn.setdefault(s.turn, []).append(s)
        civ_tokens.setdefault(s.civilization)

    turns: list[TurnData] = []
    for turn, rows in sorted(by_turn.items()):
        turn_scores = scores_by_turn.get(turn, {})
        if turn_scores and len(turn_scores) != len(rows):
            log.warning(
                "Turn %d: %d stats rows but %d score rows; positional join may misattribute scores",
                turn, len(rows), len(turn_scores),
            )
        turns.append(
            TurnData(
                turn=turn,
                civ_stats=[
                    _civ_statistics(s, turn_scores.get(index, 0))
                    for index, s in enumerate(rows)
                ],
            )
        )
    return GameHistory(
        turns=turns,
        civilizations=[civ_display_info(t)[0] for t in civ_tokens],
    )


def latest_turn_stats(history: GameHistory | None) -> list[CivStatistics]:
    if not history or not history.turns:
        return []
    return history.turns[-1].civ_stats


def latest_full_civ_stats(history: GameHistory | None) -> list[CivStatistics]:
    """Major civs from the newest turn that logged more than one of them.

    The current turn is often partial (only the player's row has been
    written yet), so it is skipped in favour of the last complete one.
    """
    if not history or not history.turns:
        return []
    for turn_data in reversed(history.turns):
        majors = [s for s in turn_data.civ_stats if not s.is_city_state]
        if len(majors) > 1:
            return majors
    return [s for s in history.turns[-1].civ_stats if not s.is_city_state]


def stats_for_turn(history: GameHistory | None, turn: int) -> list[CivStatistics]:
    if not history:
        return []
    for turn_data in history.turns:
        if turn_data.turn == turn:
            return turn_data.civ_stats
    return []


# ---------------------------------------------------------------------------
# Victory progress
# ---------------------------------------------------------------------------


def _positions(values: list[int]) -> list[int]:
    """1-based rank of each value, descending; ties keep input order."""
    order = sorted(range(len(values)), key=lambda i: values[i], reverse=True)
    ranks = [0] * len(values)
    for pos, i in enumerate(order, start=1):
        ranks[i] = pos
    return ranks


def calculate_victory_progress(stats: list[CivStatistics]) -> list[VictoryProgress]:
    majors = [s for s in stats if not s.is_city_state]
    techs = [s.techs_researched for s in majors]
    culture = [s.culture_per_turn for s in majors]
    military = [s.military_units for s in majors]
    score = [s.score for s in majors]
    science_pos, culture_pos, military_pos, score_pos = (
        _positions(techs), _positions(culture), _positions(military), _positions(score)
    )
    return [
        VictoryProgress(
            civilization=s.civilization,
            leader=s.leader,
            science=Ranking(science_pos[i], techs[i]),
            science_per_turn=s.science_per_turn,
            culture=Ranking(culture_pos[i], culture[i]),
            domination=Ranking(military_pos[i], military[i]),
            score=Ranking(score_pos[i], score[i]),
        )
        for i, s in enumerate(majors)
    ]


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------


def metric_change(start: int, end: int) -> MetricChange:
    percent = round_half_up((end - start) / start * 100) if start > 0 else 0
    return MetricChange(start=start, end=end, change=end - start, percent_change=percent)


def _count_change(start: int, end: int) -> CountChange:
    return CountChange(start=start, end=end, change=end - start)


def analyze_trends(history: GameHistory | None, turns_back: int = 10) -> list[CivTrend]:
    """Start-vs-end deltas for each major civ over the last ``turns_back`` turns.

    The window is ``[max(1, latest - turns_back), latest]``; its endpoints
    are the earliest and latest turns actually present in the data. Civs
    missing at either endpoint are left out.
    """
    if not history or len(history.turns) < 2:
        return []
    latest = history.turns[-1]
    end_bound = latest.turn
    start_bound = max(1, end_bound - turns_back)
    window = [t for t in history.turns if start_bound <= t.turn <= end_bound]
    if len(window) < 2:
        return []
    first, last = window[0], window[-1]

    def find(turn_data: TurnData, civilization: str) -> CivStatistics | None:
        for s in turn_data.civ_stats:
            if s.civilization == civilization and not s.is_city_state:
                return s
        return None

    trends = []
    for civ in latest.civ_stats:
        if civ.is_city_state:
            continue
        start, end = find(first, civ.civilization), find(last, civ.civilization)
        if start is None or end is None:
            continue
        trends.append(
            CivTrend(
                civilization=civ.civilization,
                leader=civ.leader,
                start_turn=first.turn,
                end_turn=last.turn,
                turns_analyzed=last.turn - first.turn,
                score=metric_change(start.score, end.score),
                science=metric_change(start.science_per_turn, end.science_per_turn),
                culture=metric_change(start.culture_per_turn, end.culture_per_turn),
                gold=metric_change(start.gold_per_turn, end.gold_per_turn),
                military=metric_change(start.military_units, end.military_units),
                territory=metric_change(start.tiles_owned, end.tiles_owned),
                cities=_count_change(start.cities, end.cities),
                techs=_count_change(start.techs_researched, end.techs_researched),
            )
        )
    return trends


# ---------------------------------------------------------------------------
# Score breakdown
# ---------------------------------------------------------------------------


def parse_score_breakdown(logs_dir: Path) -> list[ScoreBreakdown]:
    """Score categories for each player on the latest logged turn, best first."""
    scores = load_player_scores(logs_dir)
    if not scores:
        return []
    latest = max(sc.turn for sc in scores)
    player_map = build_player_id_map(logs_dir)
    breakdown = [
        ScoreBreakdown(
            turn=sc.turn,
            player_id=sc.player_id,
            civilization=civ_name(sc.player_id, player_map),
            total=sc.score,
            civics=sc.civics,
            empire=sc.empire,
            great_people=sc.great_people,
            religion=sc.religion,
            tech=sc.tech,
            wonder=sc.wonder,
        )
        for sc in scores
        if sc.turn == latest
    ]
    breakdown.sort(key=lambda b: b.total, reverse=True)
    return breakdown
