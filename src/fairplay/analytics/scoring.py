"""Variety score and the "needs more infield/outfield" advisories."""

from __future__ import annotations

import math
from typing import Mapping

from fairplay.config import FIELD_POSITIONS, NEEDS_MIN_INNINGS, NEEDS_THRESHOLD_PERCENT


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def variety_score(position_counts: Mapping[str, int]) -> int:
    """0-100 breadth of distinct fielding positions played; DH and bench excluded."""

    distinct = sum(1 for code in FIELD_POSITIONS if position_counts.get(code, 0) > 0)
    return min(100, _round_half_up(100 * distinct / len(FIELD_POSITIONS)))


def needs_more(type_percentage: float, total_innings: int) -> bool:
    return total_innings >= NEEDS_MIN_INNINGS and type_percentage < NEEDS_THRESHOLD_PERCENT


def needs_infield(position_type_percentages: Mapping[str, float], total_innings: int) -> bool:
    return needs_more(position_type_percentages.get("infield", 0.0), total_innings)


def needs_outfield(position_type_percentages: Mapping[str, float], total_innings: int) -> bool:
    return needs_more(position_type_percentages.get("outfield", 0.0), total_innings)
