from builders import score_row, stats_row
from civ_intel.logs import (
    analyze_trends,
    build_player_id_map,
    calculate_victory_progress,
    civ_name,
    latest_full_civ_stats,
    latest_turn_stats,
    parse_game_history,
    parse_score_breakdown,
    stats_for_turn,
)
from civ_intel.logs.history import metric_change


def test_player_ids_in_first_seen_order(logs):
    logs.stats([stats_row(1, c) for c in ("GEORGIA", "ROME", "GEORGIA", "KOREA", "ROME")])
    assert build_player_id_map(logs.path) == {0: "GEORGIA", 1: "ROME", 2: "KOREA"}


def test_civ_name_fallbacks():
    assert civ_name(0, {0: "OTTOMAN"}) == "Ottoman Empire"
    assert civ_name(0, {0: "MOHENJO_DARO"}) == "Mohenjo-Daro"
    assert civ_name(3, {}) == "Player 3"


def test_missing_logs(tmp_path):
    assert parse_game_history(tmp_path) is None
    assert latest_turn_stats(None) == []
    assert build_player_id_map(tmp_path) == {}


def test_scores_joined_by_position(logs):
    logs.stats([
        stats_row(12, "GEORGIA", culture=18, land=3, corps=1, armies=1, naval=2),
        stats_row(12, "ROME", culture=9),
    ])
    logs.scores([score_row(12, 0, 900), score_row(12, 1, 450)])
    georgia, rome = latest_turn_stats(parse_game_history(logs.path))
    assert (georgia.civilization, georgia.leader) == ("Georgia", "Tamar")
    assert georgia.culture_per_turn == 18
    assert georgia.score == 900
    assert georgia.land_units == 5
    assert georgia.military_units == 7
    assert rome.score == 450


def test_missing_scores_default_to_zero(logs):
    logs.stats([stats_row(1, "GEORGIA")])
    assert latest_turn_stats(parse_game_history(logs.path))[0].score == 0


def test_malformed_rows_skipped(logs):
    logs.stats([
        stats_row(1, "GEORGIA"),
        ["x", "CIVILIZATION_ROME"] + [0] * 18,
        [2, "CIVILIZATION_ROME"],
    ])
    history = parse_game_history(logs.path)
    assert [t.turn for t in history.turns] == [1]


def test_city_states_flagged(logs):
    logs.stats([stats_row(1, "GEORGIA"), stats_row(1, "KABUL"), stats_row(1, "FREE_CITIES")])
    stats = latest_turn_stats(parse_game_history(logs.path))
    assert [s.is_city_state for s in stats] == [False, True, True]


def test_latest_full_turn_skips_partial_turn(logs):
    logs.stats([
        stats_row(3, "GEORGIA"),
        stats_row(3, "ROME"),
        stats_row(3, "KABUL"),
        stats_row(4, "GEORGIA"),
    ])
    history = parse_game_history(logs.path)
    assert [s.civilization for s in latest_full_civ_stats(history)] == ["Georgia", "Rome"]
    assert [s.turn for s in stats_for_turn(history, 4)] == [4]
    assert stats_for_turn(history, 99) == []


def test_victory_ties_keep_log_order(logs):
    logs.stats([
        stats_row(5, "GEORGIA", techs=10, culture=4, land=2),
        stats_row(5, "ROME", techs=10, culture=7, land=2),
        stats_row(5, "KOREA", techs=12, culture=1, land=9),
        stats_row(5, "KABUL", techs=50),
    ])
    progress = calculate_victory_progress(latest_turn_stats(parse_game_history(logs.path)))
    by_civ = {p.civilization: p for p in progress}
    assert set(by_civ) == {"Georgia", "Rome", "Korea"}
    assert by_civ["Korea"].science.position == 1
    assert by_civ["Georgia"].science.position == 2
    assert by_civ["Rome"].science.position == 3
    assert by_civ["Rome"].culture.position == 1
    assert by_civ["Korea"].domination.value == 9


def test_trend_window_endpoints(logs):
    logs.stats([stats_row(t, "GEORGIA", science=t * 2, tiles=t) for t in (1, 5, 9, 15)])
    logs.scores([score_row(t, 0, t * 10) for t in (1, 5, 9, 15)])
    (trend,) = analyze_trends(parse_game_history(logs.path), turns_back=10)
    assert (trend.start_turn, trend.end_turn) == (5, 15)
    assert trend.turns_analyzed == 10
    assert trend.score.start == 50
    assert trend.score.end == 150
    assert trend.score.percent_change == 200
    assert trend.science.change == 20


def test_trend_needs_two_turns(logs):
    logs.stats([stats_row(1, "GEORGIA")])
    assert analyze_trends(parse_game_history(logs.path)) == []


def test_trend_skips_civs_missing_at_start(logs):
    logs.stats([
        stats_row(1, "GEORGIA"),
        stats_row(2, "GEORGIA"),
        stats_row(2, "ROME"),
    ])
    trends = analyze_trends(parse_game_history(logs.path))
    assert [t.civilization for t in trends] == ["Georgia"]


def test_percent_change_from_zero():
    assert metric_change(0, 12).percent_change == 0
    assert metric_change(8, 6).percent_change == -25


def test_percent_change_rounds_halves_up():
    assert metric_change(8, 9).percent_change == 13
    assert metric_change(8, 7).percent_change == -12


def test_score_breakdown_latest_turn_best_first(logs):
    logs.roster("GEORGIA", "ROME")
    logs.scores([
        score_row(1, 0, 10),
        score_row(2, 0, 30, tech=12, empire=18),
        score_row(2, 1, 45, wonder=20),
    ])
    breakdown = parse_score_breakdown(logs.path)
    assert [(b.civilization, b.total) for b in breakdown] == [("Rome", 45), ("Georgia", 30)]
    assert breakdown[1].tech == 12
