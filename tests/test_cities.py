from civ_intel.logs import (
    _csv,
    owned_tech_counts,
    parse_city_founding_stats,
    parse_city_production,
    parse_tech_status,
)
from civ_intel.logs.cities import NO_PRODUCTION_TURNS, turns_remaining

QUEUE_HEADER = ["Turn", "City", "Production", "Item", "Progress", "Needed", "Overflow"]
BUILD_HEADER = ["Turn", "Player", "City", "Food Advantage", "Production Advantage"]
RESEARCH_HEADER = ["Turn", "Player", "Type", "Name", "x", "Status", "Turns"]


def test_turns_remaining():
    assert turns_remaining(50, 100, 10) == 5
    assert turns_remaining(51, 100, 10) == 5
    assert turns_remaining(120, 100, 10) == 0
    assert turns_remaining(0, 100, 0) == NO_PRODUCTION_TURNS


def test_city_production(logs):
    logs.write(_csv.CITY_PRODUCTION, QUEUE_HEADER, [
        [40, "LOC_CITY_NAME_TBILISI", "12.5", "UNIT_GIANT_DEATH_ROBOT", "50", "100", "0"],
        [40, "LOC_CITY_KUTAISI", "0", "BUILDING_GRANARY", "10", "65", "2"],
    ])
    robot, granary = parse_city_production(logs.path)
    assert robot.city_display_name == "Tbilisi"
    assert robot.item_display_name == "Giant Death Robot"
    assert robot.turns_remaining == 4
    assert robot.percent_complete == 50
    assert granary.city_display_name == "Kutaisi"
    assert granary.turns_remaining == NO_PRODUCTION_TURNS
    assert granary.overflow == 2.0


def test_percent_complete_rounds_halves_up(logs):
    logs.write(_csv.CITY_PRODUCTION, QUEUE_HEADER, [
        [40, "LOC_CITY_NAME_TBILISI", "5", "BUILDING_MONUMENT", "5", "40", "0"],
    ])
    (monument,) = parse_city_production(logs.path)
    assert monument.percent_complete == 13


def test_founding_stats_first_row_per_city(logs):
    logs.write(_csv.CITY_BUILD, BUILD_HEADER, [
        [3, 0, "LOC_CITY_NAME_TBILISI", "-0.5", "1.25"],
        [9, 0, "LOC_CITY_NAME_TBILISI", "2", "2"],
        [4, 0, "LOC_CITY_NAME_KUTAISI", "BUILDING_MONUMENT", "1"],
        [5, 1, "LOC_CITY_NAME_TBILISI", "1", "1"],
    ])
    stats = parse_city_founding_stats(logs.path)
    assert [(s.player_id, s.city_display_name, s.turn) for s in stats] == [
        (0, "Tbilisi", 3),
        (1, "Tbilisi", 5),
    ]
    assert stats[0].food_advantage == -0.5


def test_owned_tech_counts_latest_turn(logs):
    logs.roster("GEORGIA", "ROME")
    logs.write(_csv.TECH, RESEARCH_HEADER, [
        [1, 0, "Tech", "TECH_POTTERY", "", "OWNED", "0"],
        [2, 0, "Tech", "TECH_POTTERY", "", "OWNED", "0"],
        [2, 0, "Tech", "TECH_MINING", "", "OWNED", "0"],
        [2, 0, "Civic", "CIVIC_CODE_OF_LAWS", "", "OWNED", "0"],
        [2, 1, "Tech", "TECH_POTTERY", "", "OWNED", "0"],
        [2, 1, "Tech", "TECH_WRITING", "", "RESEARCHING", "4"],
    ])
    progress = parse_tech_status(logs.path)
    assert all(p.tech != "Code Of Laws" for p in progress)
    assert progress[-1].turns_remaining == 4
    assert owned_tech_counts(progress) == [("Georgia", 2), ("Rome", 1)]
