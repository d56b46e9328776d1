"""Season and trailing-window position metrics for one player."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Mapping, Sequence

from fairplay.config import POSITION_CODES, WINDOW_SIZES, iter_position_groups
from fairplay.models import HistoryMetrics, TimeframeMetrics

from .extract import PlayerGameRecord
from .scoring import needs_infield, needs_outfield, variety_score
from .streaks import bench_streak, consecutive_bench, same_position_streak


def largest_remainder_percentages(counts: Mapping[str, int]) -> Dict[str, float]:
    """Percentages to one decimal that always total exactly 100.0.

    Each bucket is rounded on its own first; whatever is left over from 100.0
    is then added to the single largest bucket (the first one in key order on
    a tie). All buckets are 0.0 when the counts are empty.
    """

    total = sum(counts.values())
    if total <= 0:
        return {key: 0.0 for key in counts}
    percentages = {key: round(100.0 * value / total, 1) for key, value in counts.items()}
    residual = round(100.0 - sum(percentages.values()), 1)
    if residual:
        largest = max(counts, key=lambda key: counts[key])
        percentages[largest] = round(percentages[largest] + residual, 1)
    return percentages


def _ordered(records: Sequence[PlayerGameRecord]) -> List[PlayerGameRecord]:
    return sorted(records, key=lambda record: (record.game_date, record.game_id))


def window_slices(records: Sequence[PlayerGameRecord]) -> Dict[str, List[PlayerGameRecord]]:
    """Each window's games in chronological order; trailing slices of the season."""

    ordered = _ordered(records)
    slices: Dict[str, List[PlayerGameRecord]] = {}
    for name, size in WINDOW_SIZES:
        slices[name] = list(ordered) if size is None else ordered[-size:]
    return slices


def window_game_ids(records: Sequence[PlayerGameRecord]) -> Dict[str, List[str]]:
    """Each window's game ids, newest first."""

    return {
        name: [record.game_id for record in reversed(games)]
        for name, games in window_slices(records).items()
    }


def compute_timeframe(records: Sequence[PlayerGameRecord]) -> TimeframeMetrics:
    """Metrics for one window; records must already be in chronological order."""

    positions = [assignment.position for record in records for assignment in record.assignments]
    tally = Counter(positions)
    position_counts = {code: tally.get(code, 0) for code in POSITION_CODES}
    type_counts = {
        group.name: sum(position_counts[code] for code in POSITION_CODES if code in group.codes)
        for group in iter_position_groups()
    }
    total_innings = len(positions)
    type_percentages = largest_remainder_percentages(type_counts)
    bench_percentage = type_percentages["bench"]
    playing_time = round(100.0 - bench_percentage, 1) if total_innings else 0.0

    return TimeframeMetrics(
        position_counts=position_counts,
        position_percentages=largest_remainder_percentages(position_counts),
        position_type_counts=type_counts,
        position_type_percentages=type_percentages,
        bench_percentage=bench_percentage,
        playing_time_percentage=playing_time,
        variety_score=variety_score(position_counts),
        consecutive_bench=consecutive_bench(positions),
        bench_streak=bench_streak(positions),
        same_position_streak=same_position_streak(positions),
        needs_infield=needs_infield(type_percentages, total_innings),
        needs_outfield=needs_outfield(type_percentages, total_innings),
        total_innings=total_innings,
        games_played=len(records),
    )


def compute_metrics(records: Sequence[PlayerGameRecord]) -> HistoryMetrics:
    slices = window_slices(records)
    return HistoryMetrics(
        season=compute_timeframe(slices["season"]),
        last5_games=compute_timeframe(slices["last5Games"]),
        last3_games=compute_timeframe(slices["last3Games"]),
        last_game=compute_timeframe(slices["lastGame"]),
    )
