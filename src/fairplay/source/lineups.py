"""Lineup sources: the read side of the team's saved games and lineups."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol, Tuple

from pydantic import ValidationError

from fairplay.models import GameLineup


logger = logging.getLogger(__name__)


class SourceUnavailableError(RuntimeError):
    """Raised when saved lineups cannot be read; callers may retry."""


class LineupSource(Protocol):
    def list_lineups(self, team_id: str, season: str) -> List[GameLineup]:
        """Return every saved lineup for the team whose game falls in the season."""
        ...


def parse_lineup_documents(documents: Iterable[Any]) -> List[GameLineup]:
    """Validate raw lineup documents, skipping the ones that cannot be parsed."""

    lineups: List[GameLineup] = []
    for index, document in enumerate(documents):
        try:
            lineups.append(GameLineup.model_validate(document))
        except ValidationError as exc:
            identifier = document.get("id") if isinstance(document, dict) else None
            logger.warning(
                "Skipping lineup document %s (entry %d): %s",
                identifier,
                index,
                exc.errors(include_url=False),
            )
    return lineups


class InMemoryLineupSource:
    """Thread-safe in-process lineup source keyed by lineup id."""

    def __init__(self, lineups: Iterable[GameLineup] = ()):
        self._lock = threading.Lock()
        self._lineups: Dict[str, GameLineup] = {}
        for lineup in lineups:
            self.put(lineup)

    def put(self, lineup: GameLineup) -> None:
        with self._lock:
            self._lineups[lineup.lineup_id] = lineup

    def remove(self, lineup_id: str) -> GameLineup | None:
        with self._lock:
            return self._lineups.pop(lineup_id, None)

    def get(self, lineup_id: str) -> GameLineup | None:
        with self._lock:
            return self._lineups.get(lineup_id)

    def list_lineups(self, team_id: str, season: str) -> List[GameLineup]:
        with self._lock:
            lineups = list(self._lineups.values())
        return [lineup for lineup in lineups if lineup.team_id == team_id and lineup.season == season]


class JsonFileLineupSource:
    """Read lineups from a JSON export (``{"lineups": [...]}`` or a bare list).

    The file is re-read on every call so that edits are picked up by the next
    recompute.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> List[GameLineup]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SourceUnavailableError(f"Could not read lineups from {self.path}: {exc}") from exc
        documents = payload.get("lineups", []) if isinstance(payload, dict) else payload
        if not isinstance(documents, list):
            raise SourceUnavailableError(f"Lineup file {self.path} does not contain a list of lineups")
        return parse_lineup_documents(documents)

    def list_lineups(self, team_id: str, season: str) -> List[GameLineup]:
        return [
            lineup
            for lineup in self._load()
            if lineup.team_id == team_id and lineup.season == season
        ]

    def teams_and_seasons(self) -> List[Tuple[str, str]]:
        return sorted({(lineup.team_id, lineup.season) for lineup in self._load()})
