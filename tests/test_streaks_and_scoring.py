import pytest

from fairplay.analytics import (
    bench_streak,
    consecutive_bench,
    needs_infield,
    needs_outfield,
    same_position_streak,
    variety_score,
)
from fairplay.config import FIELD_POSITIONS


@pytest.mark.parametrize(
    ("positions", "expected"),
    [
        ([], 0),
        (["BN"], 1),
        (["P", "BN", "BN"], 2),
        (["BN", "BN", "P"], 0),
        (["BN", "BN", "BN"], 3),
    ],
)
def test_consecutive_bench_counts_trailing_run(positions, expected):
    assert consecutive_bench(positions) == expected


def test_bench_streak_tracks_longest_run():
    streak = bench_streak(["BN", "BN", "BN", "P", "BN", "C", "BN", "BN"])
    assert streak.current == 2
    assert streak.max == 3


def test_same_position_streak_reports_most_recent_run():
    streak = same_position_streak(["SS", "SS", "SS", "LF", "LF"])
    assert streak.position == "LF"
    assert streak.count == 2


def test_bench_breaks_same_position_run():
    streak = same_position_streak(["C", "C", "BN", "C"])
    assert streak.position == "C"
    assert streak.count == 1

    ended_on_bench = same_position_streak(["C", "C", "BN"])
    assert ended_on_bench.position is None
    assert ended_on_bench.count == 0

    assert same_position_streak([]).position is None


def test_variety_score_ignores_bench_and_dh():
    assert variety_score({"BN": 10, "DH": 4}) == 0
    assert variety_score({"P": 1}) == 11
    assert variety_score({"P": 1, "C": 0, "BN": 3}) == 11
    assert variety_score({code: 1 for code in FIELD_POSITIONS}) == 100


def test_variety_score_never_drops_as_positions_are_added():
    counts: dict[str, int] = {}
    previous = variety_score(counts)
    for code in FIELD_POSITIONS:
        counts[code] = 1
        score = variety_score(counts)
        assert score >= previous
        previous = score
    assert previous == 100


def test_needs_flags_require_minimum_sample():
    assert needs_infield({"infield": 10.0}, 12) is True
    assert needs_infield({"infield": 0.0}, 2) is False
    assert needs_infield({"infield": 20.0}, 12) is False
    assert needs_outfield({"outfield": 19.9}, 3) is True
    assert needs_outfield({}, 3) is True
