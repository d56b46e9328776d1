"""Position history snapshot records.

Attributes are snake_case in Python; the persisted and wire form uses the
camelCase field names of the snapshot record format (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from fairplay.config import POSITION_CODES, POSITION_TYPES


def _zero_codes() -> Dict[str, int]:
    return {code: 0 for code in POSITION_CODES}


def _zero_code_percentages() -> Dict[str, float]:
    return {code: 0.0 for code in POSITION_CODES}


def _zero_types() -> Dict[str, int]:
    return {name: 0 for name in POSITION_TYPES}


def _zero_type_percentages() -> Dict[str, float]:
    return {name: 0.0 for name in POSITION_TYPES}


class BenchStreak(BaseModel):
    current: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class SamePositionStreak(BaseModel):
    position: Optional[str] = None
    count: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class TimeframeMetrics(BaseModel):
    """Fair-play metrics for one trailing window of games."""

    position_counts: Dict[str, int] = Field(default_factory=_zero_codes, alias="positionCounts")
    position_percentages: Dict[str, float] = Field(
        default_factory=_zero_code_percentages, alias="positionPercentages"
    )
    position_type_counts: Dict[str, int] = Field(default_factory=_zero_types, alias="positionTypeCounts")
    position_type_percentages: Dict[str, float] = Field(
        default_factory=_zero_type_percentages, alias="positionTypePercentages"
    )
    bench_percentage: float = Field(default=0.0, ge=0.0, le=100.0, alias="benchPercentage")
    playing_time_percentage: float = Field(default=0.0, ge=0.0, le=100.0, alias="playingTimePercentage")
    variety_score: int = Field(default=0, ge=0, le=100, alias="varietyScore")
    consecutive_bench: int = Field(default=0, ge=0, alias="consecutiveBench")
    bench_streak: BenchStreak = Field(default_factory=BenchStreak, alias="benchStreak")
    same_position_streak: SamePositionStreak = Field(
        default_factory=SamePositionStreak, alias="samePositionStreak"
    )
    needs_infield: bool = Field(default=False, alias="needsInfield")
    needs_outfield: bool = Field(default=False, alias="needsOutfield")
    total_innings: int = Field(default=0, ge=0, alias="totalInnings")
    games_played: int = Field(default=0, ge=0, alias="gamesPlayed")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class HistoryMetrics(BaseModel):
    season: TimeframeMetrics = Field(default_factory=TimeframeMetrics)
    last5_games: TimeframeMetrics = Field(default_factory=TimeframeMetrics, alias="last5Games")
    last3_games: TimeframeMetrics = Field(default_factory=TimeframeMetrics, alias="last3Games")
    last_game: TimeframeMetrics = Field(default_factory=TimeframeMetrics, alias="lastGame")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def window(self, name: str) -> TimeframeMetrics:
        """Look up a window by its wire name, raising KeyError if unknown."""

        for field_name, info in type(self).model_fields.items():
            if name in (field_name, info.alias):
                return getattr(self, field_name)
        raise KeyError(f"Unknown metrics window {name!r}")


class PlayerPositionHistory(BaseModel):
    """Persisted snapshot for one (player, team, season) key."""

    id: str = Field(..., min_length=1)
    player_id: str = Field(..., min_length=1, alias="playerId")
    team_id: str = Field(..., min_length=1, alias="teamId")
    season: str = Field(..., min_length=1)
    games_played: List[str] = Field(default_factory=list, alias="gamesPlayed")
    metrics: HistoryMetrics = Field(default_factory=HistoryMetrics)
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.player_id, self.team_id, self.season)


def history_id(player_id: str, team_id: str, season: str) -> str:
    return f"ph_{player_id}_{team_id}_{season}"
