"""Win/loss standings aggregated over recorded games."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from .entities import GameRecord
from .enums import Alignment


@dataclass(frozen=True)
class Record:
    """Wins and losses of one player."""

    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_percentage(self) -> float:
        """Fraction of games won, NaN for a record with no games."""
        if self.games == 0:
            return math.nan
        return self.wins / self.games

    def with_result(self, won: bool) -> "Record":
        if won:
            return Record(self.wins + 1, self.losses)
        return Record(self.wins, self.losses + 1)


class Standings(Mapping):
    """Read-only mapping of player name to Record."""

    def __init__(self, records: Optional[Dict[str, Record]] = None):
        self._records: Dict[str, Record] = dict(records or {})

    def __getitem__(self, name: str) -> Record:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Standings({self._records!r})"


def _tally(records: Dict[str, Record], players: Iterable[str], winners) -> None:
    for name in players:
        records[name] = records.get(name, Record()).with_result(name in winners)


def compute_standings(games: Iterable[GameRecord]) -> Standings:
    """Fold games into one Record per player who appeared in any of them."""
    records: Dict[str, Record] = {}
    for game in games:
        _tally(records, game.all_players(), game.winners())
    return Standings(records)


def compute_standings_by_alignment(
    games: Iterable[GameRecord],
) -> Dict[Alignment, Standings]:
    """Standings split by the alignment each player held in each game.

    A player who played both sides has an entry under each alignment, each
    counting only the games played on that side. Both alignments are always
    present in the result.
    """
    buckets: Dict[Alignment, Dict[str, Record]] = {alignment: {} for alignment in Alignment}
    for game in games:
        winners = game.winners()
        for alignment in Alignment:
            _tally(buckets[alignment], game.players_with_alignment(alignment), winners)
    return {alignment: Standings(records) for alignment, records in buckets.items()}
