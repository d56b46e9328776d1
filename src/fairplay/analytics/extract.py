"""Turn saved lineups into per-player, chronologically ordered position streams."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, cast

from fairplay.config import BENCH, is_position_code
from fairplay.models import GameLineup, LineupInning, season_for


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionAssignment:
    """One inning of one game for one player."""

    game_id: str
    game_date: datetime
    inning: int
    position: str

    @property
    def sort_key(self) -> tuple[datetime, str, int]:
        return (self.game_date, self.game_id, self.inning)


@dataclass(frozen=True)
class PlayerGameRecord:
    game_id: str
    game_date: datetime
    assignments: Tuple[PositionAssignment, ...]

    @property
    def positions(self) -> Tuple[str, ...]:
        return tuple(assignment.position for assignment in self.assignments)


@dataclass(frozen=True)
class PreparedGame:
    """A lineup reduced to its valid innings, each mapping player id to position."""

    game_id: str
    game_date: datetime
    lineup_id: str
    innings: Tuple[Tuple[int, Mapping[str, str]], ...]

    def player_ids(self) -> set[str]:
        return {player_id for _, slots in self.innings for player_id in slots}


def _inning_problem(inning: LineupInning, index_counts: Mapping[int, int]) -> Optional[str]:
    if inning.inning is None or inning.inning < 1:
        return "missing inning index"
    if index_counts[inning.inning] > 1:
        return f"duplicate inning index {inning.inning}"
    unknown = sorted({slot.position for slot in inning.positions if not is_position_code(slot.position)})
    if unknown:
        return f"unknown position code(s) {', '.join(repr(code) for code in unknown)}"
    players = Counter(slot.player_id for slot in inning.positions if slot.player_id)
    repeated = sorted(player_id for player_id, count in players.items() if count > 1)
    if repeated:
        return f"player(s) listed more than once: {', '.join(repeated)}"
    return None


def _prepare_game(lineup: GameLineup) -> PreparedGame:
    index_counts = Counter(
        inning.inning for inning in lineup.innings if inning.inning is not None and inning.inning >= 1
    )
    innings: List[Tuple[int, Mapping[str, str]]] = []
    for position, inning in enumerate(lineup.innings):
        problem = _inning_problem(inning, index_counts)
        if problem:
            logger.warning(
                "Skipping inning %s (entry %d) of lineup %s for game %s: %s",
                inning.inning,
                position,
                lineup.lineup_id,
                lineup.game_id,
                problem,
            )
            continue
        slots = {slot.player_id: slot.position for slot in inning.positions if slot.player_id}
        innings.append((cast(int, inning.inning), slots))
    innings.sort(key=lambda item: item[0])
    return PreparedGame(
        game_id=lineup.game_id,
        game_date=lineup.game_date,
        lineup_id=lineup.lineup_id,
        innings=tuple(innings),
    )


def prepare_games(lineups: Iterable[GameLineup], season: str) -> List[PreparedGame]:
    """Validate a team's lineups for one season and order them chronologically.

    Innings with a missing or duplicated index, an unknown position code, or
    a player listed twice are skipped; the rest of the lineup is kept. When a
    game has more than one lineup, the one with the most valid innings wins
    (the later one on a tie).
    """

    by_game: Dict[str, PreparedGame] = {}
    for lineup in lineups:
        if season_for(lineup.game_date) != season:
            continue
        prepared = _prepare_game(lineup)
        existing = by_game.get(prepared.game_id)
        if existing is not None:
            keep = prepared if len(prepared.innings) >= len(existing.innings) else existing
            dropped = existing if keep is prepared else prepared
            logger.warning(
                "Game %s has more than one lineup; using %s and ignoring %s",
                prepared.game_id,
                keep.lineup_id,
                dropped.lineup_id,
            )
            prepared = keep
        by_game[prepared.game_id] = prepared
    return sorted(by_game.values(), key=lambda game: (game.game_date, game.game_id))


def player_games(games: Sequence[PreparedGame], player_id: str) -> List[PlayerGameRecord]:
    """Build one record per game the player appears in.

    Within such a game, every valid inning that does not list the player
    counts as a bench inning.
    """

    records: List[PlayerGameRecord] = []
    for game in games:
        if not any(player_id in slots for _, slots in game.innings):
            continue
        assignments = tuple(
            PositionAssignment(
                game_id=game.game_id,
                game_date=game.game_date,
                inning=number,
                position=slots.get(player_id, BENCH),
            )
            for number, slots in game.innings
        )
        records.append(
            PlayerGameRecord(game_id=game.game_id, game_date=game.game_date, assignments=assignments)
        )
    records.sort(key=lambda record: (record.game_date, record.game_id))
    return records


def extract_player_games(
    lineups: Iterable[GameLineup],
    player_id: str,
    season: str,
) -> List[PlayerGameRecord]:
    return player_games(prepare_games(lineups, season), player_id)


def extract_assignments(
    lineups: Iterable[GameLineup],
    player_id: str,
    season: str,
) -> List[PositionAssignment]:
    """Flattened, chronologically ordered assignments for one player."""

    return [
        assignment
        for record in extract_player_games(lineups, player_id, season)
        for assignment in record.assignments
    ]


def team_player_ids(games: Iterable[PreparedGame]) -> List[str]:
    players: set[str] = set()
    for game in games:
        players.update(game.player_ids())
    return sorted(players)
