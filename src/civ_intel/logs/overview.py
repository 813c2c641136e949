"""Strategic overview: threats, friends, wars, victory race, doomsday builds.

Pure synthesis over already-loaded records so it can be driven from any
source; ``CivIntel.strategic_overview`` feeds it fresh log reads.
"""

from __future__ import annotations

import logging

from civ_intel.logs._csv import latest_turn
from civ_intel.logs.models import (
    CityProduction,
    CivStatistics,
    CombatRecord,
    Conflict,
    DiplomaticRelation,
    MilitaryIntelligence,
    StrategicOpportunity,
    StrategicOverview,
    StrategicThreat,
    VictoryLeader,
)

log = logging.getLogger(__name__)

HIGH_DESIRE = 10
MEDIUM_DESIRE = 5
MEDIUM_STRENGTH = 500
CONFLICT_WINDOW = 3

HOSTILE_STATES = {"DENOUNCED": "MEDIUM", "UNFRIENDLY": "LOW"}
FRIENDLY_STATES = ("ALLIED", "FRIENDLY", "DECLARED_FRIEND")
STRATEGIC_ITEMS = (
    "Giant Death Robot",
    "Manhattan Project",
    "Moon Landing",
    "Exoplanet Expedition",
    "Launch Earth Satellite",
)
_LEVEL_ORDER = {"HIGH": 0, "MEDIUM": 1, "LOW": 2}


def _squash(name: str) -> str:
    return name.replace(" ", "").lower()


def is_strategic_item(item_display_name: str) -> bool:
    squashed = _squash(item_display_name)
    return any(_squash(item) in squashed for item in STRATEGIC_ITEMS)


def _same_civ(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def military_threats(
    intel: list[MilitaryIntelligence], player_civ: str
) -> list[StrategicThreat]:
    latest = latest_turn(intel)
    threats = []
    for mil in intel:
        if mil.turn != latest or _same_civ(mil.civilization, player_civ):
            continue
        details = f"Combat Desire: {mil.combat_desire:.1f}, Strength: {mil.regional_strength}"
        if mil.combat_desire > HIGH_DESIRE:
            threats.append(
                StrategicThreat(mil.civilization, "HIGH", "Extremely aggressive", details)
            )
        elif mil.combat_desire > MEDIUM_DESIRE and mil.regional_strength > MEDIUM_STRENGTH:
            threats.append(
                StrategicThreat(
                    mil.civilization, "MEDIUM", "Strong military with aggressive posture", details
                )
            )
    return threats


def diplomatic_threats(
    relations: list[DiplomaticRelation],
    player_civ: str,
    existing: list[StrategicThreat],
) -> list[StrategicThreat]:
    """Hostile stances toward the player; civs already flagged are kept as-is.

    Expects one turn of relations; the first hostile edge per partner counts.
    WAR is reported under conflicts, not here.
    """
    flagged = {t.civilization for t in existing}
    seen: set[str] = set()
    threats = []
    for rel in relations:
        if not _same_civ(rel.from_civ, player_civ):
            continue
        if rel.state not in HOSTILE_STATES and rel.state != "WAR":
            continue
        if rel.to_civ in seen:
            continue
        seen.add(rel.to_civ)
        if rel.to_civ in flagged or rel.state == "WAR":
            continue
        threats.append(
            StrategicThreat(
                rel.to_civ,
                HOSTILE_STATES[rel.state],
                "Hostile diplomatic stance",
                f"Status: {rel.state}, Score: {rel.score}",
            )
        )
    return threats


def opportunities(
    relations: list[DiplomaticRelation], player_civ: str
) -> list[StrategicOpportunity]:
    best: dict[str, DiplomaticRelation] = {}
    for rel in relations:
        if not _same_civ(rel.from_civ, player_civ) or rel.state not in FRIENDLY_STATES:
            continue
        current = best.get(rel.to_civ)
        if current is None or rel.score > current.score:
            best[rel.to_civ] = rel
    ranked = sorted(best.values(), key=lambda r: r.score, reverse=True)
    return [
        StrategicOpportunity(
            civilization=rel.to_civ,
            state=rel.state,
            score=rel.score,
            suggestion=(
                "Consider joint war or research agreement"
                if rel.state == "ALLIED"
                else "Could be upgraded to alliance"
            ),
        )
        for rel in ranked
    ]


def active_conflicts(records: list[CombatRecord]) -> list[Conflict]:
    latest = latest_turn(records)
    if latest is None:
        return []
    battles: dict[str, int] = {}
    for rec in records:
        if rec.turn >= latest - CONFLICT_WINDOW:
            pair = " vs ".join(sorted((rec.attacker_civ, rec.defender_civ)))
            battles[pair] = battles.get(pair, 0) + 1
    return [Conflict(pair, count) for pair, count in battles.items()]


def victory_race(stats: list[CivStatistics], player_civ: str) -> list[VictoryLeader]:
    majors = [s for s in stats if not s.is_city_state]
    if not majors:
        return []
    categories = (
        ("Score", lambda s: s.score),
        ("Science", lambda s: s.techs_researched),
        ("Culture", lambda s: s.culture_per_turn),
        ("Domination", lambda s: s.military_units),
    )
    race = []
    for category, metric in categories:
        ranked = sorted(majors, key=metric, reverse=True)
        position = next(
            (i for i, s in enumerate(ranked, start=1) if _same_civ(s.civilization, player_civ)),
            None,
        )
        race.append(VictoryLeader(category, ranked[0].leader, metric(ranked[0]), position))
    return race


def key_production(production: list[CityProduction]) -> list[CityProduction]:
    latest = latest_turn(production)
    return [
        p for p in production
        if p.turn == latest and is_strategic_item(p.item_display_name)
    ]


def build_strategic_overview(
    stats: list[CivStatistics],
    relations: list[DiplomaticRelation],
    intel: list[MilitaryIntelligence],
    combat: list[CombatRecord],
    production: list[CityProduction],
    player_civ: str | None = None,
) -> StrategicOverview:
    """Combine every log source into one situational summary.

    ``player_civ`` defaults to the first major civ in ``stats``.
    """
    if not player_civ:
        player_civ = next(
            (s.civilization for s in stats if not s.is_city_state), "Unknown"
        )
        log.debug("No player civ given; assuming %s", player_civ)

    latest = latest_turn(relations)
    relations = [r for r in relations if r.turn == latest]

    threats = military_threats(intel, player_civ)
    threats += diplomatic_threats(relations, player_civ, threats)
    threats.sort(key=lambda t: _LEVEL_ORDER[t.level])

    return StrategicOverview(
        turn=stats[0].turn if stats else 0,
        player_civ=player_civ,
        threats=threats,
        opportunities=opportunities(relations, player_civ),
        conflicts=active_conflicts(combat),
        victory_race=victory_race(stats, player_civ),
        key_production=key_production(production),
    )
