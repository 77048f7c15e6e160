"""Core enums for the avalon tracker."""

from enum import Enum
from typing import Any, Dict

from .errors import DecodingError


class _LowercaseEnum(Enum):
    """Enum decoded from a fixed set of lowercase strings."""

    @classmethod
    def from_string(cls, value: Any):
        """Decode a raw string into a member.

        Only exact matches are accepted; anything else raises DecodingError
        instead of falling back to a default member.
        """
        if not isinstance(value, str):
            raise DecodingError(
                f"expected a string for {cls.__name__}, got {type(value).__name__}"
            )
        for member in cls:
            if member.value == value:
                return member
        raise DecodingError(f"unknown {cls.__name__} value {value!r}")


class Alignment(_LowercaseEnum):
    """Faction a role belongs to."""

    GOOD = "good"
    EVIL = "evil"


class Role(_LowercaseEnum):
    """Avalon character roles."""

    ASSASSIN = "assassin"
    MERLIN = "merlin"
    MINION = "minion"
    MORDRED = "mordred"
    MORGANA = "morgana"
    OBERON = "oberon"
    PERCIVAL = "percival"
    REVERSE_OBERON = "reverseoberon"
    SERVANT = "servant"

    @property
    def alignment(self) -> Alignment:
        """Alignment this role plays for."""
        return alignment_of(self)


class QuestStatus(_LowercaseEnum):
    """Outcome of a single quest."""

    SUCCESS = "success"
    FAIL = "fail"


class VictoryType(_LowercaseEnum):
    """How the winning side won the game."""

    ASSASSINATION = "assassination"
    QUEST = "quest"


_ROLE_ALIGNMENTS: Dict[Role, Alignment] = {
    Role.ASSASSIN: Alignment.EVIL,
    Role.MORGANA: Alignment.EVIL,
    Role.MINION: Alignment.EVIL,
    Role.MORDRED: Alignment.EVIL,
    Role.OBERON: Alignment.EVIL,
    Role.MERLIN: Alignment.GOOD,
    Role.PERCIVAL: Alignment.GOOD,
    Role.REVERSE_OBERON: Alignment.GOOD,
    Role.SERVANT: Alignment.GOOD,
}


def alignment_of(role: Role) -> Alignment:
    """Map a role to its alignment.

    Raises:
        DecodingError: If ``role`` is not a Role member.
    """
    if not isinstance(role, Role):
        raise DecodingError(f"not a role: {role!r}")
    return _ROLE_ALIGNMENTS[role]
