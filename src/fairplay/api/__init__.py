"""REST API for fair-play position analytics."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import List, Union

from fastapi import FastAPI, HTTPException, Query

from fairplay.analytics import summarize_team
from fairplay.api.schemas import LineupEventRequest, RecomputeRequest, TeamFairPlayResponse
from fairplay.config.settings import lineups_path
from fairplay.history import PositionHistoryService
from fairplay.models import PlayerPositionHistory
from fairplay.persistence import HistoryStore, SnapshotConflictError, SnapshotWriteError
from fairplay.source import JsonFileLineupSource, LineupSource, SourceUnavailableError


def _current_season() -> str:
    return str(datetime.now(timezone.utc).year)


def _unavailable(exc: Exception) -> HTTPException:
    return HTTPException(status_code=503, detail=str(exc))


def create_app(
    source: LineupSource | None = None,
    store: HistoryStore | None = None,
) -> FastAPI:
    app = FastAPI(title="fairplay position analytics")
    if source is None:
        path = lineups_path()
        source = JsonFileLineupSource(path) if path else None
    store = store or HistoryStore()
    service = PositionHistoryService(source, store)
    app.state.history_service = service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players/position-history", response_model=PlayerPositionHistory)
    def get_position_history(
        player_id: str = Query(..., alias="playerId", min_length=1),
        team_id: str = Query(..., alias="teamId", min_length=1),
        season: str | None = Query(None),
    ):
        history = service.get(player_id, team_id, season or _current_season())
        if history is None:
            raise HTTPException(status_code=404, detail="No position history found for this player")
        return history

    @app.get("/players/position-history/team", response_model=List[PlayerPositionHistory])
    def get_team_position_histories(
        team_id: str = Query(..., alias="teamId", min_length=1),
        season: str | None = Query(None),
    ):
        return service.list_team(team_id, season or _current_season())

    @app.post(
        "/players/position-history/recompute",
        response_model=Union[PlayerPositionHistory, List[PlayerPositionHistory]],
    )
    def recompute(payload: RecomputeRequest):
        try:
            if payload.player_id:
                return service.compute(payload.player_id, payload.team_id, payload.season)
            return service.compute_for_team(payload.team_id, payload.season)
        except (SourceUnavailableError, SnapshotWriteError, SnapshotConflictError) as exc:
            raise _unavailable(exc) from exc

    @app.post("/lineups/events", response_model=List[PlayerPositionHistory])
    def lineup_event(payload: LineupEventRequest):
        try:
            return service.on_lineup_changed(
                payload.team_id,
                payload.game_date,
                player_ids=payload.player_ids,
                previous_player_ids=payload.previous_player_ids,
            )
        except (SourceUnavailableError, SnapshotWriteError, SnapshotConflictError) as exc:
            raise _unavailable(exc) from exc

    @app.get("/teams/{team_id}/fair-play", response_model=TeamFairPlayResponse)
    def team_fair_play(
        team_id: str,
        season: str | None = Query(None),
        window: str = Query("season"),
    ):
        resolved_season = season or _current_season()
        histories = service.list_team(team_id, resolved_season)
        try:
            summary = summarize_team(team_id, resolved_season, histories, window=window)
        except KeyError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown window {window!r}") from exc
        return TeamFairPlayResponse.model_validate(asdict(summary))

    return app
