"""Canonical records shared across the source, analytics and persistence layers."""

from .history import (
    BenchStreak,
    HistoryMetrics,
    PlayerPositionHistory,
    SamePositionStreak,
    TimeframeMetrics,
    history_id,
)
from .lineup import GameLineup, LineupInning, LineupSlot, season_for

__all__ = [
    "BenchStreak",
    "GameLineup",
    "HistoryMetrics",
    "LineupInning",
    "LineupSlot",
    "PlayerPositionHistory",
    "SamePositionStreak",
    "TimeframeMetrics",
    "history_id",
    "season_for",
]
