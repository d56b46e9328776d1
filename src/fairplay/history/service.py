"""Recompute and serve player position history snapshots."""

from __future__ import annotations

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from fairplay.analytics import PreparedGame, compute_metrics, player_games, prepare_games, team_player_ids
from fairplay.config.settings import max_workers, retry_backoff, write_retries
from fairplay.models import GameLineup, PlayerPositionHistory, history_id, season_for
from fairplay.persistence import HistoryStore, SnapshotConflictError
from fairplay.source import LineupSource, SourceUnavailableError


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)

HistoryKey = Tuple[str, str, str]


def lineup_players(lineup: GameLineup | None) -> set[str]:
    """Every player id listed anywhere in a lineup."""

    if lineup is None:
        return set()
    return {slot.player_id for inning in lineup.innings for slot in inning.positions if slot.player_id}


def build_history(
    player_id: str,
    team_id: str,
    season: str,
    games: Sequence[PreparedGame],
    *,
    updated_at: datetime,
) -> PlayerPositionHistory:
    """Full recompute of one snapshot from the season's prepared games."""

    records = player_games(games, player_id)
    return PlayerPositionHistory(
        id=history_id(player_id, team_id, season),
        player_id=player_id,
        team_id=team_id,
        season=season,
        games_played=[record.game_id for record in reversed(records)],
        metrics=compute_metrics(records),
        updated_at=updated_at,
    )


class _KeyLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class PositionHistoryService:
    """Full, idempotent recomputes of position history, serialized per key.

    Within the process a lock per (player, team, season) orders recomputes;
    across processes the store's write-if-still-latest check does, with the
    losing writer re-reading the source and trying again. A writer that keeps
    losing returns the winner's snapshot, which was rebuilt from the same
    lineups.
    """

    def __init__(
        self,
        source: LineupSource | None,
        store: HistoryStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        self.source = source
        self.store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._locks: Dict[HistoryKey, _KeyLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _key_lock(self, key: HistoryKey) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _KeyLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[key]

    def _read_games(self, team_id: str, season: str) -> List[PreparedGame]:
        if self.source is None:
            raise SourceUnavailableError("No lineup source is configured")
        try:
            lineups = self.source.list_lineups(team_id, season)
        except OSError as exc:
            raise SourceUnavailableError(f"Could not read lineups for team {team_id}: {exc}") from exc
        return prepare_games(lineups, season)

    def _next_timestamp(self, previous: Optional[datetime]) -> datetime:
        now = self._clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _recompute(
        self,
        player_id: str,
        team_id: str,
        season: str,
        games: Optional[List[PreparedGame]] = None,
    ) -> PlayerPositionHistory:
        key = (player_id, team_id, season)
        attempts = write_retries()
        with self._key_lock(key):
            attempt = 1
            while True:
                if games is None:
                    games = self._read_games(team_id, season)
                previous = self.store.get_history(player_id, team_id, season)
                prior = previous.updated_at if previous else None
                history = build_history(
                    player_id,
                    team_id,
                    season,
                    games,
                    updated_at=self._next_timestamp(prior),
                )
                try:
                    self.store.save_history(history, expected_updated_at=prior)
                except SnapshotConflictError:
                    if attempt >= attempts:
                        winner = self.store.get_history(player_id, team_id, season)
                        if winner is None:
                            raise
                        logger.info(
                            "Position history %s kept another writer's recompute after %d attempt(s)",
                            history.id,
                            attempt,
                        )
                        return winner
                    logger.warning(
                        "Position history %s changed during recompute (attempt %d/%d); retrying",
                        history.id,
                        attempt,
                        attempts,
                    )
                    time.sleep(random.uniform(0, retry_backoff() * attempt))
                    attempt += 1
                    games = None
                    continue
                logger.info(
                    "Recomputed position history %s from %d game(s)",
                    history.id,
                    len(history.games_played),
                )
                return history

    def compute(self, player_id: str, team_id: str, season: str) -> PlayerPositionHistory:
        """Recompute and persist one player's snapshot.

        A player without games in the season gets a zeroed snapshot.
        Raises SourceUnavailableError when lineups cannot be read and
        SnapshotWriteError when the snapshot cannot be stored. Losing every
        write race returns the snapshot the other writer committed.
        """

        return self._recompute(player_id, team_id, season)

    def get(self, player_id: str, team_id: str, season: str) -> Optional[PlayerPositionHistory]:
        return self.store.get_history(player_id, team_id, season)

    def list_team(self, team_id: str, season: str) -> List[PlayerPositionHistory]:
        return self.store.list_team_histories(team_id, season)

    def _recompute_many(
        self,
        team_id: str,
        season: str,
        player_ids: Iterable[str],
        games: List[PreparedGame],
    ) -> List[PlayerPositionHistory]:
        ordered = sorted(set(player_ids))
        if not ordered:
            return []
        workers = min(max_workers(), len(ordered))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(
                pool.map(lambda player_id: self._recompute(player_id, team_id, season, games), ordered)
            )

    def compute_for_team(self, team_id: str, season: str) -> List[PlayerPositionHistory]:
        """Recompute every player in the season's lineups or already on record."""

        games = self._read_games(team_id, season)
        player_ids = set(team_player_ids(games))
        player_ids.update(history.player_id for history in self.store.list_team_histories(team_id, season))
        logger.info(
            "Recomputing %d position histories for team %s season %s",
            len(player_ids),
            team_id,
            season,
        )
        return self._recompute_many(team_id, season, player_ids, games)

    def on_lineup_changed(
        self,
        team_id: str,
        game_date: datetime,
        player_ids: Iterable[str] = (),
        previous_player_ids: Iterable[str] = (),
    ) -> List[PlayerPositionHistory]:
        """Recompute hook for a lineup being created, edited or deleted.

        Pass the players of the lineup as saved now and as it was before the
        change; a deleted lineup has no current players, a new one no previous.
        """

        season = season_for(game_date)
        affected = set(player_ids) | set(previous_player_ids)
        if not affected:
            return []
        games = self._read_games(team_id, season)
        return self._recompute_many(team_id, season, affected, games)
