from civ_intel import narrate as nr
from civ_intel.logs.models import (
    CityFoundingStats,
    CityProduction,
    CombatRecord,
    DiplomaticRelation,
    GreatPersonEvent,
    MilitaryIntelligence,
    Ranking,
    VictoryProgress,
    WorldCongress,
)
from civ_intel.save.models import CivInfo, GameState, ModInfo, SaveFileInfo


def test_saves_listing():
    saves = [
        SaveFileInfo("AutoSave_0042.Civ6Save", "/s/AutoSave_0042.Civ6Save", "2026-01-01T00:00:00+00:00", 10, None, 42),
        SaveFileInfo("TAMAR 120 AD.Civ6Save", "/s/TAMAR 120 AD.Civ6Save", "2026-01-01T00:00:00+00:00", 10, "Tamar", 120),
    ]
    text = nr.narrate_saves(saves, "all", "/s")
    assert text.startswith("Found 2 save file(s):")
    assert "1. AutoSave_0042.Civ6Save Turn 42" in text
    assert "2. TAMAR 120 AD.Civ6Save (Tamar) Turn 120" in text
    assert "   Path: /s/TAMAR 120 AD.Civ6Save" in text


def test_no_saves():
    assert nr.narrate_saves([], "quicksave", "/s") == (
        "No save files found with filter: quicksave\n\nSave directory: /s"
    )


def test_strategy_brief_unknowns_and_context():
    state = GameState(leader=None, civilization=None, turn=None)
    text = nr.narrate_strategy_brief(state, [], [], context="Allied with Rome")
    assert "- **Turn**: Unknown" in text
    assert "- **Speed**: Standard" in text
    assert text.endswith("## Player-Provided Context\nAllied with Rome")


def test_strategy_brief_lists_mods_and_civs():
    state = GameState(
        leader="Tamar",
        civilization="Georgia",
        turn=80,
        other_civs=(CivInfo("Trajan", "Rome", "ROME"),),
        mods=tuple(ModInfo(f"id{i}", f"Mod {i}") for i in range(7)),
    )
    text = nr.narrate_strategy_brief(state, [], [])
    assert "- **Trajan** of Rome" in text
    assert "- Mod 4" in text
    assert "- Mod 5" not in text
    assert "- ... and 2 more" in text
    assert "Player-Provided Context" not in text


def test_victory_progress_sorted_by_position():
    progress = [
        VictoryProgress("Georgia", "Tamar", Ranking(2, 10), 20, Ranking(1, 30), Ranking(2, 4), Ranking(2, 300)),
        VictoryProgress("Rome", "Trajan", Ranking(1, 12), 25, Ranking(2, 12), Ranking(1, 15), Ranking(1, 500)),
    ]
    text = nr.narrate_victory_progress(progress)
    science = text.split("## Science Victory")[1].split("##")[0]
    assert science.index("Trajan") < science.index("Tamar")


def test_diplomacy_latest_turn_and_wars():
    relations = [
        DiplomaticRelation(9, "Georgia", "Rome", 0, 1, "FRIENDLY", 20),
        DiplomaticRelation(10, "Georgia", "Rome", 0, 1, "WAR", -60, threat=70.0),
        DiplomaticRelation(10, "Rome", "Georgia", 1, 0, "WAR", -55),
    ]
    text = nr.narrate_diplomacy(relations)
    assert "# Diplomatic Status (Turn 10)" in text
    assert "friendly" not in text
    assert "High (70)" in text
    assert "## Active Wars\n- Georgia vs Rome" in text
    assert "## Rome (You)" in nr.narrate_diplomacy(relations, "rome")


def test_military_pressure():
    intel = [
        MilitaryIntelligence(5, "Rome", 1, 200, 500, 0, 11.0, "Gunpowder", 0, 1),
        MilitaryIntelligence(5, "Korea", 2, 900, 600, 0, 2.0, "No Tech", 1, 1),
    ]
    text = nr.narrate_military(intel)
    assert "| Rome | 200 | 11.0 | HIGH | 0/1 |" in text
    assert "**Rome**: Targeting Gunpowder" in text
    assert "Korea**: Targeting" not in text
    assert "(CRITICAL)" in text
    assert "(Defending)" in text


def test_combat_outcomes():
    records = [
        CombatRecord(7, "Rome", "Georgia", 1, 0, "Legion", "Archer", 40, 25, 5, 30),
        CombatRecord(7, "Georgia", "Rome", 0, 1, "Archer", "Legion", 25, 40, 20, 3),
    ]
    text = nr.narrate_combat_log(records)
    assert "(successful)" in text
    assert "(repelled)" in text
    assert text.count("- Georgia vs Rome") == 1


def test_city_status_splits_on_food():
    founding = [
        CityFoundingStats(3, 0, "LOC_CITY_NAME_TBILISI", "Tbilisi", -0.5, 1.0),
        CityFoundingStats(6, 0, "LOC_CITY_NAME_KUTAISI", "Kutaisi", 1.5, 1.0),
        CityFoundingStats(6, 1, "LOC_CITY_NAME_ROME", "Rome", -2.0, 1.0),
    ]
    production = [
        CityProduction(20, "LOC_CITY_NAME_TBILISI", "Tbilisi", "BUILDING_GRANARY", "Granary", 5, 10, 65, 11),
    ]
    text = nr.narrate_city_status(production, founding)
    assert "| Tbilisi | T3 | -0.50 | Granary | 11 |" in text
    assert "| Kutaisi | T6 | +1.50 | - | - |" in text
    assert "Rome" not in text
    assert "- **Total cities**: 2" in text
    assert nr.narrate_city_status([], founding, player_id=7).startswith("No city data")


def test_empty_states():
    assert nr.narrate_world_congress(WorldCongress()).startswith("No World Congress data available")
    assert nr.narrate_great_people([]) == "No Great People data available."
    assert nr.narrate_city_production([], []) == "No city production data available."
    assert nr.narrate_tech_status([], None) == "No technology data available."
    assert nr.narrate_trends([]).startswith("No trend data available")


def test_cultural_tally_counts_works():
    events = [
        GreatPersonEvent(20, "Granted to Player", "GP_HOMER", "Homer", "Writer", "Classical", 180, 1, "Rome"),
        GreatPersonEvent(22, "Great Person Activated", "GP_HOMER", "Homer", "Writer", "Classical", None, None, None),
        GreatPersonEvent(23, "Added to Present Timeline", "GP_BACH", "Bach", "Musician", "Industrial", 900, None, None),
    ]
    text = nr.narrate_cultural_great_people(events)
    assert "| Rome | 0 | 1 | 0 | 1 | 1 |" in text
    assert "- T20: Writer **Homer** -> Rome" in text
    assert "**Bach** (Musician, Industrial)" in text
