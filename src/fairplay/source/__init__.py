"""Game/lineup sources consumed by the position history service."""

from .lineups import (
    InMemoryLineupSource,
    JsonFileLineupSource,
    LineupSource,
    SourceUnavailableError,
    parse_lineup_documents,
)

__all__ = [
    "InMemoryLineupSource",
    "JsonFileLineupSource",
    "LineupSource",
    "SourceUnavailableError",
    "parse_lineup_documents",
]
