"""Saved game lineups as delivered by the lineup source.

These models are deliberately lenient: inning numbers and position codes are
accepted as-is so that a single bad inning can be skipped during extraction
instead of rejecting the whole lineup.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class LineupSlot(BaseModel):
    position: str = ""
    player_id: Optional[str] = Field(default=None, alias="playerId")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip().upper()

    @field_validator("player_id", mode="before")
    @classmethod
    def _normalize_player_id(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None


class LineupInning(BaseModel):
    inning: Optional[int] = None
    positions: List[LineupSlot] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("inning", mode="before")
    @classmethod
    def _coerce_inning(cls, value: Any) -> Optional[int]:
        # Unparseable indexes become "missing" and are rejected per inning later.
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None


class GameLineup(BaseModel):
    """One saved lineup for one game."""

    lineup_id: str = Field(..., min_length=1, alias="id")
    game_id: str = Field(..., min_length=1, alias="gameId")
    team_id: str = Field(..., min_length=1, alias="teamId")
    game_date: datetime = Field(..., alias="gameDate")
    innings: List[LineupInning] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("game_date")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def season(self) -> str:
        return season_for(self.game_date)


def season_for(game_date: datetime) -> str:
    """Seasons are UTC calendar years of the game date; naive dates are UTC."""

    if game_date.tzinfo is None:
        return str(game_date.year)
    return str(game_date.astimezone(timezone.utc).year)
