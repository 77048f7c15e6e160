"""Core entities for the avalon tracker."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from .enums import Alignment, QuestStatus, Role, VictoryType
from .errors import DecodingError

# Matches the width of the name columns in storage
MAX_NAME_LENGTH = 64


@dataclass(frozen=True)
class Quest:
    """One mission attempt within a game."""

    status: QuestStatus
    fails: int = 0  # number of sabotage cards played
    participants: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.status, QuestStatus):
            raise DecodingError(f"invalid quest status: {self.status!r}")
        if isinstance(self.fails, bool) or not isinstance(self.fails, int) or self.fails < 0:
            raise DecodingError(f"fails must be a non-negative integer, got {self.fails!r}")
        object.__setattr__(self, "participants", frozenset(self.participants))

    @property
    def succeeded(self) -> bool:
        return self.status == QuestStatus.SUCCESS


@dataclass(frozen=True)
class EndResult:
    """Declared winner of a game and how they won."""

    winner: Alignment
    victory_type: VictoryType

    def __post_init__(self):
        if not isinstance(self.winner, Alignment):
            raise DecodingError(f"invalid winner: {self.winner!r}")
        if not isinstance(self.victory_type, VictoryType):
            raise DecodingError(f"invalid victory type: {self.victory_type!r}")


@dataclass(frozen=True)
class GameRecord:
    """A completed game: role assignments, quests in play order and the result.

    Records are built complete, either from an imported document or from
    storage, and are never modified afterwards. Construction checks that
    player names are non-empty strings of at most MAX_NAME_LENGTH characters
    and that every quest participant is one of the game's players.
    """

    players: Mapping[str, Role]
    quests: Tuple[Quest, ...]
    result: EndResult

    def __post_init__(self):
        players = dict(self.players)
        for name, role in players.items():
            if not isinstance(name, str) or not name:
                raise DecodingError(f"player names must be non-empty strings, got {name!r}")
            if len(name) > MAX_NAME_LENGTH:
                raise DecodingError(
                    f"player name {name!r} is longer than {MAX_NAME_LENGTH} characters"
                )
            if not isinstance(role, Role):
                raise DecodingError(f"invalid role for {name}: {role!r}")

        quests = tuple(self.quests)
        for index, quest in enumerate(quests, start=1):
            if not isinstance(quest, Quest):
                raise DecodingError(f"quest {index} is not a Quest: {quest!r}")
            unknown = quest.participants - players.keys()
            if unknown:
                raise DecodingError(
                    f"quest {index} references unknown players: {', '.join(sorted(unknown))}"
                )

        object.__setattr__(self, "players", MappingProxyType(players))
        object.__setattr__(self, "quests", quests)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameRecord):
            return NotImplemented
        return (
            dict(self.players) == dict(other.players)
            and self.quests == other.quests
            and self.result == other.result
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.players.items()), self.quests, self.result))

    def winners(self) -> FrozenSet[str]:
        """Players on the winning side."""
        return self.players_with_alignment(self.result.winner)

    def all_players(self) -> FrozenSet[str]:
        return frozenset(self.players)

    def players_with_alignment(self, alignment: Alignment) -> FrozenSet[str]:
        """Players whose role belongs to ``alignment``, regardless of who won."""
        return frozenset(
            name for name, role in self.players.items() if role.alignment == alignment
        )

    def quest_tally(self) -> Tuple[int, int]:
        """Return (successful quests, failed quests)."""
        successes = sum(1 for quest in self.quests if quest.succeeded)
        return successes, len(self.quests) - successes
