"""Pure fair-play computations over a player's position stream."""

from .extract import (
    PlayerGameRecord,
    PositionAssignment,
    PreparedGame,
    extract_assignments,
    extract_player_games,
    player_games,
    prepare_games,
    team_player_ids,
)
from .scoring import needs_infield, needs_outfield, variety_score
from .streaks import bench_streak, consecutive_bench, same_position_streak
from .team import TeamFairPlaySummary, fair_play_ratio, summarize_team
from .windows import (
    compute_metrics,
    compute_timeframe,
    largest_remainder_percentages,
    window_game_ids,
    window_slices,
)

__all__ = [
    "PlayerGameRecord",
    "PositionAssignment",
    "PreparedGame",
    "TeamFairPlaySummary",
    "bench_streak",
    "compute_metrics",
    "compute_timeframe",
    "consecutive_bench",
    "extract_assignments",
    "extract_player_games",
    "fair_play_ratio",
    "largest_remainder_percentages",
    "needs_infield",
    "needs_outfield",
    "player_games",
    "prepare_games",
    "same_position_streak",
    "summarize_team",
    "team_player_ids",
    "variety_score",
    "window_game_ids",
    "window_slices",
]
