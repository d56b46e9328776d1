"""Command-line interface for computing fair-play position histories."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from fairplay.analytics import summarize_team
from fairplay.api.schemas import TeamFairPlayResponse
from fairplay.history import PositionHistoryService
from fairplay.persistence import HistoryStore, SnapshotConflictError, SnapshotWriteError
from fairplay.source import JsonFileLineupSource, SourceUnavailableError


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fair-play position analytics for team lineups")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compute = subparsers.add_parser("compute", help="Recompute position histories from a lineup export")
    compute.add_argument("lineups", type=Path, help="Path to lineups JSON")
    compute.add_argument("--team", default=None, help="Team id (default: every team in the file)")
    compute.add_argument("--season", default=None, help="Season, e.g. 2025 (default: every season in the file)")
    compute.add_argument("--player", default=None, help="Only recompute this player id")
    compute.add_argument("--db", type=Path, default=None, help="SQLite snapshot store path")
    compute.add_argument("--output", type=Path, default=None, help="Write snapshots JSON here instead of stdout")

    summary = subparsers.add_parser("summary", help="Print the team fair-play summary from stored histories")
    summary.add_argument("--team", required=True, help="Team id")
    summary.add_argument("--season", required=True, help="Season, e.g. 2025")
    summary.add_argument(
        "--window",
        default="season",
        choices=["season", "last5Games", "last3Games", "lastGame"],
        help="Metrics window to summarize",
    )
    summary.add_argument("--db", type=Path, default=None, help="SQLite snapshot store path")

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def _compute(args: argparse.Namespace) -> int:
    source = JsonFileLineupSource(args.lineups)
    service = PositionHistoryService(source, HistoryStore(args.db))

    pairs = [
        (team_id, season)
        for team_id, season in source.teams_and_seasons()
        if (args.team is None or team_id == args.team) and (args.season is None or season == args.season)
    ]
    if args.team and args.season and not pairs:
        pairs = [(args.team, args.season)]

    histories = []
    for team_id, season in pairs:
        if args.player:
            histories.append(service.compute(args.player, team_id, season))
        else:
            histories.extend(service.compute_for_team(team_id, season))

    payload = [history.model_dump(mode="json", by_alias=True) for history in histories]
    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {len(payload)} position histories to {args.output}")
    else:
        print(text)
    return 0


def _summary(args: argparse.Namespace) -> int:
    store = HistoryStore(args.db)
    histories = store.list_team_histories(args.team, args.season)
    summary = summarize_team(args.team, args.season, histories, window=args.window)
    response = TeamFairPlayResponse.model_validate(asdict(summary))
    print(json.dumps(response.model_dump(by_alias=True), indent=2))
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    from fairplay.api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        if args.command == "compute":
            return _compute(args)
        if args.command == "summary":
            return _summary(args)
        return _serve(args)
    except SourceUnavailableError as exc:
        print(f"Lineup source unavailable: {exc}", file=sys.stderr)
        return 2
    except (SnapshotWriteError, SnapshotConflictError) as exc:
        print(f"Could not store position history: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
