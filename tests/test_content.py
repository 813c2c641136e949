from civ_intel.save.content import (
    MAX_TECHS,
    analyze_decompressed,
    clean_wonder_name,
    format_great_person_name,
    identify_civ_from_cities,
    is_wonder,
)

GAME_DATA = (
    b"TECH_POTTERY TECH_POTTERY_BOOST TECH_MINING TECH_POTTERY "
    b"CIVIC_CODE_OF_LAWS BUILDING_PYRAMIDS_NAME BUILDING_PYRAMIDS_QUOTE BUILDING_GRANARY "
    b"GREAT_PERSON_INDIVIDUAL_ADA_LOVELACE_NAME CIVILIZATION_KABUL CIVILIZATION_VIETNAM "
    b"HANOI \xff\xfe"
)


def test_entities_first_seen_and_deduplicated():
    summary = analyze_decompressed(GAME_DATA)
    assert summary.technologies == ["Pottery", "Mining"]
    assert summary.civics == ["Code Of Laws"]
    assert summary.wonders == ["Pyramids"]
    assert summary.great_people == ["Ada Lovelace"]
    assert summary.city_states == ["Kabul"]
    assert summary.player_cities == ["Hanoi"]


def test_tech_cap():
    data = " ".join(f"TECH_{chr(65 + i)}{chr(65 + j)}" for i in range(5) for j in range(5))
    assert len(analyze_decompressed(data.encode()).technologies) == MAX_TECHS


def test_wonder_helpers():
    assert is_wonder("BUILDING_HANGING_GARDENS_DESCRIPTION")
    assert not is_wonder("BUILDING_LIBRARY")
    assert clean_wonder_name("BUILDING_HANGING_GARDENS_DESCRIPTION") == "Hanging Gardens"


def test_great_person_name():
    assert format_great_person_name("GREAT_PERSON_INDIVIDUAL_HILDEGARD_OF_BINGEN_NAME") == (
        "Hildegard Of Bingen"
    )


def test_identify_civ_from_cities():
    assert identify_civ_from_cities(["Atlantis", "Tbilisi"]) == "GEORGIA"
    assert identify_civ_from_cities(["Atlantis"]) is None
