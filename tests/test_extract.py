from datetime import datetime, timedelta, timezone

from fairplay.analytics import (
    extract_assignments,
    extract_player_games,
    prepare_games,
    team_player_ids,
)
from fairplay.models import GameLineup, LineupInning, LineupSlot


OPENING_DAY = datetime(2025, 4, 1, 17, 0, tzinfo=timezone.utc)


def _inning(number, slots):
    return LineupInning(
        inning=number,
        positions=[LineupSlot(position=position, player_id=player_id) for player_id, position in slots.items()],
    )


def _lineup(game_id, day, innings, *, lineup_id=None, team_id="t1"):
    return GameLineup(
        lineup_id=lineup_id or f"l-{game_id}",
        game_id=game_id,
        team_id=team_id,
        game_date=OPENING_DAY + timedelta(days=day),
        innings=[_inning(number, slots) for number, slots in innings],
    )


def test_assignments_are_ordered_by_date_game_and_inning():
    lineups = [
        _lineup("g2", 2, [(2, {"p1": "C"}), (1, {"p1": "P"})]),
        _lineup("g1", 0, [(1, {"p1": "SS"}), (2, {"p1": "2B"})]),
        _lineup("g0", 2, [(1, {"p1": "LF"})]),
    ]

    assignments = extract_assignments(lineups, "p1", "2025")

    assert [(a.game_id, a.inning, a.position) for a in assignments] == [
        ("g1", 1, "SS"),
        ("g1", 2, "2B"),
        ("g0", 1, "LF"),
        ("g2", 1, "P"),
        ("g2", 2, "C"),
    ]
    assert assignments == sorted(assignments, key=lambda a: a.sort_key)


def test_unlisted_innings_count_as_bench_in_games_the_player_appears_in():
    lineups = [
        _lineup("g1", 0, [(1, {"p1": "P", "p2": "C"}), (2, {"p2": "P"}), (3, {"p1": "1B", "p2": "BN"})]),
        _lineup("g2", 1, [(1, {"p2": "C"})]),
    ]

    records = extract_player_games(lineups, "p1", "2025")

    assert [record.game_id for record in records] == ["g1"]
    assert records[0].positions == ("P", "BN", "1B")


def test_malformed_innings_are_skipped_without_dropping_the_game(caplog):
    lineups = [
        GameLineup(
            lineup_id="l-bad",
            game_id="g1",
            team_id="t1",
            game_date=OPENING_DAY,
            innings=[
                _inning(1, {"p1": "P"}),
                _inning(2, {"p1": "XX"}),
                _inning(None, {"p1": "C"}),
                _inning(3, {"p1": "SS"}),
                _inning(3, {"p1": "LF"}),
                LineupInning(
                    inning=4,
                    positions=[LineupSlot(position="CF", player_id="p1"), LineupSlot(position="RF", player_id="p1")],
                ),
                _inning(5, {"p1": "2B"}),
            ],
        ),
        _lineup("g2", 1, [(1, {"p1": "RF"})]),
    ]

    with caplog.at_level("WARNING"):
        records = extract_player_games(lineups, "p1", "2025")

    assert [record.positions for record in records] == [("P", "2B"), ("RF",)]
    assert "unknown position code" in caplog.text
    assert "duplicate inning index 3" in caplog.text
    assert "missing inning index" in caplog.text
    assert "listed more than once" in caplog.text


def test_other_seasons_are_ignored():
    lineups = [
        _lineup("g1", 0, [(1, {"p1": "P"})]),
        GameLineup(
            lineup_id="l-old",
            game_id="g-old",
            team_id="t1",
            game_date=datetime(2024, 6, 1, tzinfo=timezone.utc),
            innings=[_inning(1, {"p1": "C"})],
        ),
    ]

    assert [record.game_id for record in extract_player_games(lineups, "p1", "2025")] == ["g1"]
    assert [record.game_id for record in extract_player_games(lineups, "p1", "2024")] == ["g-old"]


def test_duplicate_lineups_for_a_game_keep_the_most_complete_one():
    lineups = [
        _lineup("g1", 0, [(1, {"p1": "P"}), (2, {"p1": "C"})], lineup_id="full"),
        _lineup("g1", 0, [(1, {"p1": "SS"})], lineup_id="partial"),
    ]

    games = prepare_games(lineups, "2025")

    assert len(games) == 1
    assert games[0].lineup_id == "full"


def test_team_player_ids_lists_everyone_in_valid_innings():
    lineups = [
        _lineup("g1", 0, [(1, {"p2": "P", "p1": "C"}), (2, {"p3": "ZZ"})]),
        _lineup("g2", 1, [(1, {"p4": "BN"})]),
    ]

    assert team_player_ids(prepare_games(lineups, "2025")) == ["p1", "p2", "p4"]


def test_no_lineups_yields_no_games():
    assert extract_player_games([], "p1", "2025") == []
