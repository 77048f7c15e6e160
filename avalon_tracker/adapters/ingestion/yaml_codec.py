"""YAML game sheets.

A game sheet is a YAML list of games::

    - players:
        alice: merlin
        bob: assassin
      quests:
        - status: success
          fails: 0
          participants: [alice, bob]
      result:
        winner: evil
        type: assassination

``fails`` may be omitted and defaults to 0. Every enumerated value must be one
of the lowercase names of the core enums.
"""

from collections.abc import Hashable
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import structlog
import yaml

from ...core.entities import EndResult, GameRecord, Quest
from ...core.enums import Alignment, QuestStatus, Role, VictoryType
from ...core.errors import DecodingError

logger = structlog.get_logger()

_MERGE_TAG = "tag:yaml.org,2002:merge"


class _UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that rejects mappings with repeated keys.

    Plain ``yaml.safe_load`` keeps the last value of a repeated key, which
    would silently drop a player listed twice. Merge keys (``<<``) are left
    to the base loader, so merged entries may be overridden as usual.
    """

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            if key_node.tag == _MERGE_TAG:
                continue
            key = self.construct_object(key_node, deep=deep)
            if isinstance(key, Hashable):
                if key in seen:
                    raise DecodingError(
                        f"duplicate key {key!r} on line {key_node.start_mark.line + 1}"
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _require(raw: Mapping[str, Any], key: str, expected_type: type, what: str):
    if key not in raw:
        raise DecodingError(f"missing required field '{key}' in {what}")
    value = raw[key]
    if not isinstance(value, expected_type):
        raise DecodingError(
            f"field '{key}' in {what} must be a {expected_type.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _decode_players(raw_players: Mapping[Any, Any]) -> Dict[str, Role]:
    players: Dict[str, Role] = {}
    for name, role in raw_players.items():
        if not isinstance(name, str) or not name:
            raise DecodingError(f"player names must be non-empty strings, got {name!r}")
        players[name] = Role.from_string(role)
    return players


def _decode_quest(raw: Any, number: int) -> Quest:
    what = f"quest {number}"
    if not isinstance(raw, dict):
        raise DecodingError(f"{what} must be a mapping")

    status = QuestStatus.from_string(_require(raw, "status", str, what))

    fails = raw.get("fails")
    if fails is None:
        fails = 0
    elif isinstance(fails, bool) or not isinstance(fails, int) or fails < 0:
        raise DecodingError(f"fails in {what} must be a non-negative integer, got {fails!r}")

    participants = _require(raw, "participants", list, what)
    for name in participants:
        if not isinstance(name, str):
            raise DecodingError(f"participant names in {what} must be strings, got {name!r}")

    return Quest(status=status, fails=fails, participants=frozenset(participants))


def decode_game(raw: Any, index: Optional[int] = None) -> GameRecord:
    """Decode one game mapping into a GameRecord.

    Raises:
        DecodingError: On any schema violation; ``context`` names the game
    """
    context = f"game {index}" if index is not None else None
    try:
        if not isinstance(raw, dict):
            raise DecodingError("game must be a mapping")

        players = _decode_players(_require(raw, "players", dict, "game"))
        quests = tuple(
            _decode_quest(quest, number)
            for number, quest in enumerate(_require(raw, "quests", list, "game"), start=1)
        )
        result = _require(raw, "result", dict, "game")
        end_result = EndResult(
            winner=Alignment.from_string(_require(result, "winner", str, "result")),
            victory_type=VictoryType.from_string(_require(result, "type", str, "result")),
        )
        return GameRecord(players=players, quests=quests, result=end_result)
    except DecodingError as e:
        if context is None or e.context is not None:
            raise
        raise DecodingError(e.message, context=context) from e


def parse(text: str) -> List[GameRecord]:
    """Parse a game sheet into validated game records.

    The whole document is decoded before anything is returned, so one bad
    game rejects the entire sheet.

    Raises:
        DecodingError: If the document is not valid YAML or any game is invalid
    """
    try:
        raw = yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise DecodingError(f"invalid YAML: {e}") from e

    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DecodingError("game sheet must be a list of games")

    games = [decode_game(entry, index) for index, entry in enumerate(raw, start=1)]
    logger.debug("Parsed game sheet", games=len(games))
    return games


def parse_file(path: Union[str, Path]) -> List[GameRecord]:
    """Read and parse a game sheet from disk."""
    text = Path(path).read_text(encoding="utf-8")
    games = parse(text)
    logger.info("Loaded game sheet", path=str(path), games=len(games))
    return games


def encode_game(game: GameRecord) -> Dict[str, Any]:
    """Convert a GameRecord into the game sheet mapping layout."""
    return {
        "players": {name: role.value for name, role in game.players.items()},
        "quests": [
            {
                "status": quest.status.value,
                "fails": quest.fails,
                "participants": sorted(quest.participants),
            }
            for quest in game.quests
        ],
        "result": {
            "winner": game.result.winner.value,
            "type": game.result.victory_type.value,
        },
    }


def dump(games: Iterable[GameRecord]) -> str:
    """Serialize game records into a game sheet accepted by parse()."""
    return yaml.safe_dump(
        [encode_game(game) for game in games],
        sort_keys=False,
        default_flow_style=False,
    )
