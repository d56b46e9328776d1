"""Persistence layer for player position history snapshots."""

from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fairplay.config.settings import DEFAULT_DB_PATH, db_path_override
from fairplay.models import HistoryMetrics, PlayerPositionHistory


class SnapshotConflictError(RuntimeError):
    """Raised when a snapshot changed between read and write."""


class SnapshotWriteError(RuntimeError):
    """Raised when a snapshot could not be written; the previous one is kept."""


class HistoryStore:
    """SQLite-backed store with one snapshot per (player, team, season)."""

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        if db_path is None:
            env_db = db_path_override()
            db_path = env_db if env_db else DEFAULT_DB_PATH
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path, timeout=30)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri, timeout=30)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS position_histories (
                    id TEXT PRIMARY KEY,
                    player_id TEXT NOT NULL,
                    team_id TEXT NOT NULL,
                    season TEXT NOT NULL,
                    games_played_json TEXT NOT NULL,
                    metrics_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE (player_id, team_id, season)
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_position_histories_team
                ON position_histories (team_id, season)
                """
            )
            conn.commit()

    def save_history(
        self,
        history: PlayerPositionHistory,
        *,
        expected_updated_at: Optional[datetime],
    ) -> PlayerPositionHistory:
        """Write a snapshot only if the stored one is still the one we read.

        ``expected_updated_at`` is the ``updated_at`` of the snapshot read
        before recomputing, or None when there was none. Raises
        SnapshotConflictError when another writer got there first.
        """

        payload = (
            history.id,
            history.player_id,
            history.team_id,
            history.season,
            json.dumps(history.games_played),
            history.metrics.model_dump_json(by_alias=True),
            history.updated_at.isoformat(),
        )
        try:
            with closing(self._connect()) as conn:
                if expected_updated_at is None:
                    try:
                        conn.execute(
                            """
                            INSERT INTO position_histories (
                                id, player_id, team_id, season,
                                games_played_json, metrics_json, updated_at
                            ) VALUES (?, ?, ?, ?, ?, ?, ?)
                            """,
                            payload,
                        )
                    except sqlite3.IntegrityError as exc:
                        conn.rollback()
                        raise SnapshotConflictError(
                            f"Position history {history.id} was created concurrently"
                        ) from exc
                else:
                    cursor = conn.execute(
                        """
                        UPDATE position_histories
                        SET games_played_json = ?, metrics_json = ?, updated_at = ?
                        WHERE player_id = ? AND team_id = ? AND season = ? AND updated_at = ?
                        """,
                        (
                            payload[4],
                            payload[5],
                            payload[6],
                            history.player_id,
                            history.team_id,
                            history.season,
                            expected_updated_at.isoformat(),
                        ),
                    )
                    if cursor.rowcount == 0:
                        conn.rollback()
                        raise SnapshotConflictError(
                            f"Position history {history.id} changed since {expected_updated_at.isoformat()}"
                        )
                conn.commit()
        except sqlite3.Error as exc:
            raise SnapshotWriteError(f"Could not write position history {history.id}: {exc}") from exc
        return history

    def get_history(self, player_id: str, team_id: str, season: str) -> Optional[PlayerPositionHistory]:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT * FROM position_histories WHERE player_id = ? AND team_id = ? AND season = ?",
                (player_id, team_id, season),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_history(row)

    def list_team_histories(self, team_id: str, season: str) -> List[PlayerPositionHistory]:
        with closing(self._connect()) as conn:
            rows = conn.execute(
                "SELECT * FROM position_histories WHERE team_id = ? AND season = ? ORDER BY player_id",
                (team_id, season),
            ).fetchall()
        return [self._row_to_history(row) for row in rows]

    def delete_history(self, player_id: str, team_id: str, season: str) -> bool:
        with closing(self._connect()) as conn:
            cursor = conn.execute(
                "DELETE FROM position_histories WHERE player_id = ? AND team_id = ? AND season = ?",
                (player_id, team_id, season),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_player_histories(self, player_id: str, team_id: str | None = None) -> int:
        query = "DELETE FROM position_histories WHERE player_id = ?"
        params: list[str] = [player_id]
        if team_id:
            query += " AND team_id = ?"
            params.append(team_id)
        with closing(self._connect()) as conn:
            cursor = conn.execute(query, tuple(params))
            conn.commit()
            return cursor.rowcount

    def delete_team_histories(self, team_id: str) -> int:
        with closing(self._connect()) as conn:
            cursor = conn.execute("DELETE FROM position_histories WHERE team_id = ?", (team_id,))
            conn.commit()
            return cursor.rowcount

    def _row_to_history(self, row: sqlite3.Row) -> PlayerPositionHistory:
        return PlayerPositionHistory(
            id=row["id"],
            player_id=row["player_id"],
            team_id=row["team_id"],
            season=row["season"],
            games_played=json.loads(row["games_played_json"]),
            metrics=HistoryMetrics.model_validate_json(row["metrics_json"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
