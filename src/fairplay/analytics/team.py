"""Team-level fair-play rollup over stored player histories."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import mean, pvariance
from typing import Dict, Iterable, List, Sequence

from fairplay.config import WINDOW_SIZES
from fairplay.models import PlayerPositionHistory, TimeframeMetrics

_ATTENTION_LIMIT = 3
_BENCH_WEIGHT = 0.6
_VARIETY_WEIGHT = 0.4
_PLAYING_TIME_WEIGHT = 0.6
# Bench percentage points from the team average before a player is flagged.
_IMBALANCE_MARGIN = 15.0


@dataclass(frozen=True)
class TeamFairPlaySummary:
    """Balance of playing time across a team for one metrics window."""

    team_id: str
    season: str
    window: str
    player_count: int
    bench_time_variance: float
    variety_variance: float
    fair_play_score: float
    most_bench: tuple[str, ...]
    least_variety: tuple[str, ...]
    needs_infield: tuple[str, ...]
    needs_outfield: tuple[str, ...]
    average_bench_percentage: float
    overplayed: tuple[str, ...]
    underplayed: tuple[str, ...]
    inequality_score: float
    fair_play_ratios: Dict[str, float]


def fair_play_ratio(metrics: TimeframeMetrics) -> float:
    """Per-player blend of playing time and position variety, 0-100."""

    return round(
        _PLAYING_TIME_WEIGHT * metrics.playing_time_percentage + _VARIETY_WEIGHT * metrics.variety_score,
        1,
    )


def _variance(values: Sequence[float]) -> float:
    return round(pvariance(values), 2) if values else 0.0


def _balance(variance: float) -> float:
    return max(0.0, 100.0 - variance * 2)


def summarize_team(
    team_id: str,
    season: str,
    histories: Iterable[PlayerPositionHistory],
    *,
    window: str = "season",
) -> TeamFairPlaySummary:
    """Summarize how evenly bench time and position variety are spread.

    Players with no innings in the window are left out of the variance and
    ranking so that an unused roster spot does not skew the score.
    Raises KeyError for an unknown window name.
    """

    if window not in {name for name, _ in WINDOW_SIZES}:
        raise KeyError(f"Unknown metrics window {window!r}")

    entries: List[tuple[str, TimeframeMetrics]] = []
    for history in sorted(histories, key=lambda item: item.player_id):
        metrics = history.metrics.window(window)
        if metrics.total_innings > 0:
            entries.append((history.player_id, metrics))

    bench = [metrics.bench_percentage for _, metrics in entries]
    variety = [float(metrics.variety_score) for _, metrics in entries]
    bench_variance = _variance(bench)
    variety_variance = _variance(variety)
    if entries:
        score = round(_BENCH_WEIGHT * _balance(bench_variance) + _VARIETY_WEIGHT * _balance(variety_variance), 1)
    else:
        score = 0.0

    average_bench = round(mean(bench), 1) if bench else 0.0
    overplayed = [
        player_id for player_id, metrics in entries if metrics.bench_percentage < average_bench - _IMBALANCE_MARGIN
    ]
    underplayed = [
        player_id for player_id, metrics in entries if metrics.bench_percentage > average_bench + _IMBALANCE_MARGIN
    ]

    most_bench = sorted(entries, key=lambda item: (-item[1].bench_percentage, item[0]))
    least_variety = sorted(entries, key=lambda item: (item[1].variety_score, item[0]))

    return TeamFairPlaySummary(
        team_id=team_id,
        season=season,
        window=window,
        player_count=len(entries),
        bench_time_variance=bench_variance,
        variety_variance=variety_variance,
        fair_play_score=score,
        most_bench=tuple(player_id for player_id, _ in most_bench[:_ATTENTION_LIMIT]),
        least_variety=tuple(player_id for player_id, _ in least_variety[:_ATTENTION_LIMIT]),
        needs_infield=tuple(player_id for player_id, metrics in entries if metrics.needs_infield),
        needs_outfield=tuple(player_id for player_id, metrics in entries if metrics.needs_outfield),
        average_bench_percentage=average_bench,
        overplayed=tuple(overplayed),
        underplayed=tuple(underplayed),
        inequality_score=min(100.0, round(bench_variance * 2, 1)),
        fair_play_ratios={player_id: fair_play_ratio(metrics) for player_id, metrics in entries},
    )
