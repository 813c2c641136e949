from civ_intel.logs import build_strategic_overview
from civ_intel.logs.models import (
    CityProduction,
    CivStatistics,
    CombatRecord,
    DiplomaticRelation,
    MilitaryIntelligence,
)
from civ_intel.logs.overview import is_strategic_item


def _stats(civ, *, score=0, techs=0, culture=0, land=0, city_state=False):
    return CivStatistics(
        turn=40, civilization=civ, leader=f"{civ} Leader", raw_civ_name=civ.upper(),
        is_city_state=city_state, score=score, cities=1, population=1,
        science_per_turn=0, culture_per_turn=culture, gold_per_turn=0, faith_per_turn=0,
        production_per_turn=0, food_per_turn=0, land_units=land, naval_units=0,
        gold_balance=0, faith_balance=0, techs_researched=techs, civics_researched=0,
        tiles_owned=0, tiles_improved=0,
    )


def _intel(civ, desire, strength, turn=40):
    return MilitaryIntelligence(
        turn=turn, civilization=civ, player_id=0, regional_strength=strength,
        enemy_strength=0, other_strength=0, combat_desire=desire,
        favorite_tech="No Tech", current_explorers=0, desired_explorers=0,
    )


def _rel(to_civ, state, score, from_civ="Georgia", turn=40):
    return DiplomaticRelation(
        turn=turn, from_civ=from_civ, to_civ=to_civ, from_player_id=0,
        to_player_id=1, state=state, score=score,
    )


def _battle(turn, attacker, defender):
    return CombatRecord(
        turn=turn, attacker_civ=attacker, defender_civ=defender, attacker_id=0,
        defender_id=1, attacker_unit="Legion", defender_unit="Archer",
        attacker_strength=None, defender_strength=None, attacker_damage=0,
        defender_damage=0,
    )


def _build(item, turn=40):
    return CityProduction(
        turn=turn, city="LOC_CITY_NAME_ROME", city_display_name="Rome",
        current_item=item.upper(), item_display_name=item, production_per_turn=10,
        current_progress=50, production_needed=100, turns_remaining=5,
    )


STATS = [
    _stats("Georgia", score=300, techs=20, culture=30, land=4),
    _stats("Rome", score=500, techs=18, culture=12, land=15),
    _stats("Korea", score=200, techs=25, culture=8, land=2),
    _stats("Kabul", score=999, city_state=True),
]


def test_threat_levels_and_order():
    intel = [
        _intel("Korea", 6, 300),
        _intel("Rome", 12.5, 800),
        _intel("Georgia", 20, 900),
        _intel("Korea", 30, 900, turn=39),
    ]
    relations = [
        _rel("Korea", "UNFRIENDLY", -10),
        _rel("Rome", "DENOUNCED", -30),
        _rel("Korea", "DENOUNCED", -40),
    ]
    ov = build_strategic_overview(STATS, relations, intel, [], [], "Georgia")
    assert [(t.civilization, t.level) for t in ov.threats] == [("Rome", "HIGH"), ("Korea", "LOW")]


def test_medium_military_threat():
    ov = build_strategic_overview(STATS, [], [_intel("Rome", 7, 600)], [], [], "Georgia")
    assert [(t.civilization, t.level) for t in ov.threats] == [("Rome", "MEDIUM")]


def test_war_is_not_a_diplomatic_threat():
    relations = [_rel("Rome", "WAR", -80), _rel("Rome", "DENOUNCED", -50)]
    ov = build_strategic_overview(STATS, relations, [], [], [], "Georgia")
    assert ov.threats == []


def test_opportunities_best_score_per_partner():
    relations = [
        _rel("Rome", "FRIENDLY", 20),
        _rel("Rome", "ALLIED", 45),
        _rel("Korea", "DECLARED_FRIEND", 30),
        _rel("Georgia", "ALLIED", 90, from_civ="Korea"),
    ]
    ov = build_strategic_overview(STATS, relations, [], [], [], "georgia")
    assert [(o.civilization, o.state) for o in ov.opportunities] == [
        ("Rome", "ALLIED"),
        ("Korea", "DECLARED_FRIEND"),
    ]
    assert "joint war" in ov.opportunities[0].suggestion


def test_conflicts_within_three_turns():
    combat = [
        _battle(36, "Rome", "Korea"),
        _battle(37, "Rome", "Georgia"),
        _battle(40, "Georgia", "Rome"),
    ]
    ov = build_strategic_overview(STATS, [], [], combat, [], "Georgia")
    assert [(c.pair, c.battles) for c in ov.conflicts] == [("Georgia vs Rome", 2)]


def test_victory_race_positions():
    ov = build_strategic_overview(STATS, [], [], [], [], "Georgia")
    race = {v.category: v for v in ov.victory_race}
    assert (race["Score"].leader, race["Score"].player_position) == ("Rome Leader", 2)
    assert (race["Science"].leader, race["Science"].value) == ("Korea Leader", 25)
    assert race["Culture"].player_position == 1
    assert race["Domination"].value == 15


def test_unknown_player_has_no_position():
    ov = build_strategic_overview(STATS, [], [], [], [], "Atlantis")
    assert all(v.player_position is None for v in ov.victory_race)


def test_player_defaults_to_first_major():
    ov = build_strategic_overview(STATS, [], [], [], [])
    assert ov.player_civ == "Georgia"
    assert ov.turn == 40


def test_key_production_latest_turn_only():
    production = [
        _build("Giant Death Robot"),
        _build("Granary"),
        _build("Manhattan Project", turn=39),
    ]
    ov = build_strategic_overview(STATS, [], [], [], production, "Georgia")
    assert [p.item_display_name for p in ov.key_production] == ["Giant Death Robot"]


def test_strategic_item_ignores_spacing():
    assert is_strategic_item("Project Launch Earth Satellite")
    assert is_strategic_item("Giant  Death Robot")
    assert not is_strategic_item("Granary")


def test_diplomacy_uses_latest_turn_only():
    relations = [
        _rel("Rome", "FRIENDLY", 30, turn=10),
        _rel("Korea", "DENOUNCED", -40, turn=10),
        _rel("Rome", "WAR", -80),
        _rel("Korea", "DECLARED_FRIEND", 15),
    ]
    ov = build_strategic_overview(STATS, relations, [], [], [], "Georgia")
    assert ov.threats == []
    assert [(o.civilization, o.state, o.score) for o in ov.opportunities] == [
        ("Korea", "DECLARED_FRIEND", 15),
    ]


def test_stale_hostility_is_not_a_threat():
    relations = [_rel("Rome", "DENOUNCED", -50, turn=10), _rel("Rome", "FRIENDLY", 20)]
    ov = build_strategic_overview(STATS, relations, [], [], [], "Georgia")
    assert ov.threats == []
    assert [o.civilization for o in ov.opportunities] == ["Rome"]
