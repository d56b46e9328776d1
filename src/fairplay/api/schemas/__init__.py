"""Pydantic models for API I/O."""

from .history import LineupEventRequest, RecomputeRequest, TeamFairPlayResponse

__all__ = [
    "LineupEventRequest",
    "RecomputeRequest",
    "TeamFairPlayResponse",
]
