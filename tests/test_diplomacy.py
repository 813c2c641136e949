import dataclasses

import pytest

from civ_intel.logs import _csv, parse_diplomacy, parse_diplomacy_modifiers

DIPLO_HEADER = ["Game Turn", "Player", "Action", "Extra", "P0", "P1", "P2"]


@pytest.fixture
def relations(logs):
    logs.roster("GEORGIA", "ROME", "KOREA")
    logs.write(_csv.DIPLOMACY, DIPLO_HEADER, [
        [10, 0, "Update", "", "0:DIPLO_STATE_NEUTRAL", "-23:DIPLO_STATE_DENOUNCED", "12:DIPLO_STATE_FRIENDLY"],
        [10, 1, "Update", "", "40:DIPLO_STATE_DECLARED_FRIEND", "", "-5:DIPLO_STATE_WAR"],
        [10, 0, "Threat and Trust", "", "", "60.16:1:32.00", "5.5:3:80.25"],
        [11, 0, "Update", "", "", "-30:DIPLO_STATE_DENOUNCED", ""],
        [11, 0, "Threat and Trust", "", "", "70.50:1:12.00", ""],
        ["bad", 0, "Update", "", "", "1:DIPLO_STATE_NEUTRAL", ""],
    ])
    return parse_diplomacy(logs.path)


def _edge(relations, turn, from_civ, to_civ):
    return next(
        r for r in relations if (r.turn, r.from_civ, r.to_civ) == (turn, from_civ, to_civ)
    )


def test_self_relations_excluded(relations):
    assert all(r.from_player_id != r.to_player_id for r in relations)


def test_relations_are_directed(relations):
    assert _edge(relations, 10, "Georgia", "Rome").state == "DENOUNCED"
    assert _edge(relations, 10, "Georgia", "Rome").score == -23
    assert _edge(relations, 10, "Rome", "Georgia").state == "DECLARED_FRIEND"
    assert _edge(relations, 10, "Rome", "Georgia").score == 40
    assert _edge(relations, 10, "Rome", "Korea").state == "WAR"
    assert len(relations) == 5


def test_threat_and_trust_match_their_own_turn(relations):
    first = _edge(relations, 10, "Georgia", "Rome")
    assert first.threat == pytest.approx(60.16)
    assert first.trust == pytest.approx(32.0)
    later = _edge(relations, 11, "Georgia", "Rome")
    assert later.threat == pytest.approx(70.5)
    assert later.trust == pytest.approx(12.0)
    assert _edge(relations, 10, "Georgia", "Korea").trust == pytest.approx(80.25)


def test_unmatched_relations_keep_zero(relations):
    rome = _edge(relations, 10, "Rome", "Georgia")
    assert (rome.threat, rome.trust) == (0.0, 0.0)


def test_later_threat_row_leaves_earlier_turn_alone(logs):
    logs.roster("GEORGIA", "ROME")
    logs.write(_csv.DIPLOMACY, DIPLO_HEADER[:6], [
        [10, 0, "Update", "", "", "-23:DIPLO_STATE_DENOUNCED"],
        [20, 0, "Threat and Trust", "", "", "60.00:1:10.00"],
    ])
    (rel,) = parse_diplomacy(logs.path)
    assert rel.turn == 10
    assert (rel.threat, rel.trust) == (0.0, 0.0)


def test_relations_are_immutable(relations):
    with pytest.raises(dataclasses.FrozenInstanceError):
        relations[0].threat = 1.0


def test_missing_file(tmp_path):
    assert parse_diplomacy(tmp_path) == []
    assert parse_diplomacy_modifiers(tmp_path) == []


def test_modifiers(logs):
    logs.roster("GEORGIA", "ROME")
    header = ["Turn", "Player", "Opponent", "Modifier", "Action", "Value", "Max", "x", "y", "Cooldown"]
    logs.write(_csv.DIPLOMACY_MODIFIERS, header, [
        [7, 0, 1, "Denounced us", "Add", "-12", "-20", "", "", "5"],
        [7, 1, 0, "Shared religion", "Add", "6.5", "10"],
        [7, 1],
    ])
    first, second = parse_diplomacy_modifiers(logs.path)
    assert (first.player, first.opponent) == ("Georgia", "Rome")
    assert first.value == -12.0
    assert first.cooldown_turns == 5
    assert second.value == 6.5
    assert second.cooldown_turns == 0
