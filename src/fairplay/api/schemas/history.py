from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RecomputeRequest(BaseModel):
    team_id: str = Field(..., min_length=1, alias="teamId")
    season: str = Field(..., min_length=1)
    player_id: str | None = Field(default=None, alias="playerId")

    model_config = ConfigDict(populate_by_name=True)


class LineupEventRequest(BaseModel):
    team_id: str = Field(..., min_length=1, alias="teamId")
    game_date: datetime = Field(..., alias="gameDate")
    action: Literal["created", "edited", "deleted"]
    player_ids: List[str] = Field(default_factory=list, alias="playerIds")
    previous_player_ids: List[str] = Field(default_factory=list, alias="previousPlayerIds")

    model_config = ConfigDict(populate_by_name=True)


class TeamFairPlayResponse(BaseModel):
    team_id: str = Field(..., alias="teamId")
    season: str
    window: str
    player_count: int = Field(..., alias="playerCount")
    bench_time_variance: float = Field(..., alias="benchTimeVariance")
    variety_variance: float = Field(..., alias="varietyVariance")
    fair_play_score: float = Field(..., alias="fairPlayScore")
    most_bench: List[str] = Field(default_factory=list, alias="mostBench")
    least_variety: List[str] = Field(default_factory=list, alias="leastVariety")
    needs_infield: List[str] = Field(default_factory=list, alias="needsInfield")
    needs_outfield: List[str] = Field(default_factory=list, alias="needsOutfield")
    average_bench_percentage: float = Field(0.0, alias="averageBenchPercentage")
    overplayed: List[str] = Field(default_factory=list)
    underplayed: List[str] = Field(default_factory=list)
    inequality_score: float = Field(0.0, alias="inequalityScore")
    fair_play_ratios: Dict[str, float] = Field(default_factory=dict, alias="fairPlayRatios")

    model_config = ConfigDict(populate_by_name=True)
