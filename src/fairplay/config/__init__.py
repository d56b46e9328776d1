"""Configuration helpers for positions, policy constants and runtime settings."""

from .positions import (
    BENCH,
    DESIGNATED_HITTER,
    FIELD_POSITIONS,
    NEEDS_MIN_INNINGS,
    NEEDS_THRESHOLD_PERCENT,
    POSITION_CODES,
    POSITION_TYPES,
    WINDOW_SIZES,
    PositionGroup,
    get_position_group,
    get_position_type,
    is_position_code,
    iter_position_groups,
)

__all__ = [
    "BENCH",
    "DESIGNATED_HITTER",
    "FIELD_POSITIONS",
    "NEEDS_MIN_INNINGS",
    "NEEDS_THRESHOLD_PERCENT",
    "POSITION_CODES",
    "POSITION_TYPES",
    "WINDOW_SIZES",
    "PositionGroup",
    "get_position_group",
    "get_position_type",
    "is_position_code",
    "iter_position_groups",
]
