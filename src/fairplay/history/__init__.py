"""Snapshot recompute orchestration."""

from .service import PositionHistoryService, build_history, lineup_players

__all__ = ["PositionHistoryService", "build_history", "lineup_players"]
