from civ_intel.logs import _csv, parse_cultural_great_people, parse_great_people, parse_world_congress

GP_HEADER = ["Turn", "Event", "Individual", "Class", "Era", "Cost", "Recipient"]


def test_world_congress(logs):
    logs.roster("GEORGIA", "ROME")
    logs.write(_csv.WORLD_CONGRESS, ["Turn", "Action", "Resolution", "a", "b", "c"], [
        [50, "VOTES", "WC_RES_MERCENARY_COMPANIES", 0, 3],
        [50, "VOTES", "WC_RES_MERCENARY_COMPANIES", 1, 2],
        [50, "OPTIONS", "WC_RES_MERCENARY_COMPANIES", 1, "", 2],
        [51, "RESOLUTION DECIDED", "WC_RES_MERCENARY_COMPANIES", 2, 5],
    ])
    congress = parse_world_congress(logs.path)
    georgia, rome = congress.votes
    assert (georgia.player, georgia.votes, georgia.target_option) == ("Georgia", 3, 0)
    assert (rome.player, rome.votes, rome.target_option) == ("Rome", 2, 2)
    (result,) = congress.results
    assert (result.turn, result.winning_option, result.vote_count) == (51, 2, 5)


def test_world_congress_missing(tmp_path):
    congress = parse_world_congress(tmp_path)
    assert congress.votes == []
    assert congress.results == []


def _write_great_people(logs):
    logs.roster("GEORGIA", "ROME")
    logs.write(_csv.GREAT_PEOPLE, GP_HEADER, [
        [20, "Granted to Player", "GREAT_PERSON_INDIVIDUAL_HOMER", "GREAT_PERSON_CLASS_WRITER", "ERA_CLASSICAL", "180", "1"],
        [21, "Added to Present Timeline", "GREAT_PERSON_INDIVIDUAL_ADA_LOVELACE", "GREAT_PERSON_CLASS_ENGINEER", "ERA_INDUSTRIAL", "600", "-1"],
        [22, "Great Person Activated", "GREAT_PERSON_INDIVIDUAL_HOMER", "GREAT_PERSON_CLASS_WRITER", "ERA_CLASSICAL", "", "1"],
    ])


def test_great_people(logs):
    _write_great_people(logs)
    homer, ada, activated = parse_great_people(logs.path)
    assert homer.display_name == "Homer"
    assert homer.gp_class == "Writer"
    assert homer.recipient == "Rome"
    assert homer.cost == 180
    assert ada.recipient_id is None
    assert ada.recipient is None
    assert activated.cost is None


def test_cultural_great_people(logs):
    _write_great_people(logs)
    cultural = parse_cultural_great_people(logs.path)
    assert [e.display_name for e in cultural] == ["Homer", "Homer"]
