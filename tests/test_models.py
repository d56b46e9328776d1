from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from fairplay.models import GameLineup, PlayerPositionHistory, TimeframeMetrics, history_id, season_for


def test_game_lineup_parses_camel_case_documents():
    lineup = GameLineup.model_validate(
        {
            "id": "l1",
            "gameId": "g1",
            "teamId": "t1",
            "gameDate": "2025-05-03T18:00:00",
            "innings": [
                {"inning": "1", "positions": [{"position": "ss", "playerId": 7}]},
                {"inning": 2.5, "positions": [{"position": "P", "playerId": "p2"}]},
                {"inning": "first", "positions": []},
            ],
        }
    )

    assert lineup.game_date.tzinfo is not None
    assert lineup.season == "2025"
    assert lineup.innings[0].inning == 1
    assert lineup.innings[0].positions[0].position == "SS"
    assert lineup.innings[0].positions[0].player_id == "7"
    # Unparseable inning indexes survive validation as missing.
    assert lineup.innings[1].inning is None
    assert lineup.innings[2].inning is None


def test_game_lineup_requires_identifiers():
    with pytest.raises(ValidationError):
        GameLineup.model_validate({"id": "l1", "teamId": "t1", "gameDate": "2025-05-03"})


def test_timeframe_metrics_default_to_zero_for_every_key():
    metrics = TimeframeMetrics()
    dumped = metrics.model_dump(by_alias=True)

    assert set(dumped["positionCounts"]) == {"P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "DH", "BN"}
    assert all(value == 0 for value in dumped["positionCounts"].values())
    assert dumped["samePositionStreak"] == {"position": None, "count": 0}
    assert dumped["benchStreak"] == {"current": 0, "max": 0}


def test_history_is_frozen_and_dumps_wire_names():
    history = PlayerPositionHistory(
        id=history_id("p1", "t1", "2025"),
        player_id="p1",
        team_id="t1",
        season="2025",
        updated_at=datetime(2025, 5, 1, tzinfo=timezone.utc),
    )

    dumped = history.model_dump(by_alias=True)
    assert history.id == "ph_p1_t1_2025"
    assert set(dumped) == {"id", "playerId", "teamId", "season", "gamesPlayed", "metrics", "updatedAt"}
    assert set(dumped["metrics"]) == {"season", "last5Games", "last3Games", "lastGame"}
    assert history.metrics.window("last5Games") is history.metrics.last5_games

    with pytest.raises((TypeError, ValidationError)):
        history.season = "2026"  # type: ignore[misc]

    with pytest.raises(KeyError):
        history.metrics.window("last10Games")


def test_season_is_the_utc_calendar_year():
    eastern = timezone(timedelta(hours=-5))

    assert season_for(datetime(2025, 12, 31, 20, 0, tzinfo=eastern)) == "2026"
    assert season_for(datetime(2025, 12, 31, 18, 0, tzinfo=eastern)) == "2025"
    assert season_for(datetime(2025, 12, 31, 23, 30)) == "2025"

    lineup = GameLineup.model_validate(
        {"id": "l1", "gameId": "g1", "teamId": "t1", "gameDate": "2025-12-31T20:00:00-05:00", "innings": []}
    )
    assert lineup.season == "2026"
