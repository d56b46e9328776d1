"""Bench and same-position streaks over a chronological inning sequence."""

from __future__ import annotations

from typing import Optional, Sequence

from fairplay.config import BENCH
from fairplay.models import BenchStreak, SamePositionStreak


def consecutive_bench(positions: Sequence[str]) -> int:
    """Trailing run of bench innings as of the most recent inning."""

    count = 0
    for position in reversed(positions):
        if position != BENCH:
            break
        count += 1
    return count


def bench_streak(positions: Sequence[str]) -> BenchStreak:
    longest = 0
    run = 0
    for position in positions:
        if position == BENCH:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return BenchStreak(current=consecutive_bench(positions), max=longest)


def same_position_streak(positions: Sequence[str]) -> SamePositionStreak:
    """Most recent run of innings at one field position.

    A bench inning breaks the run, so a sequence ending on the bench has no
    current streak.
    """

    current: Optional[str] = None
    run = 0
    for position in positions:
        if position == BENCH:
            current, run = None, 0
        elif position == current:
            run += 1
        else:
            current, run = position, 1
    return SamePositionStreak(position=current, count=run)
