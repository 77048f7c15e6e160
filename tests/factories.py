"""Test data factories for creating game records."""
from typing import Dict, Iterable, Optional

from avalon_tracker.core.entities import EndResult, GameRecord, Quest
from avalon_tracker.core.enums import Alignment, QuestStatus, Role, VictoryType


SAMPLE_SHEET = """
- players:
    player1: merlin
    player2: morgana
    player3: percival
    player4: servant
    player5: assassin
  quests:
    - status: success
      fails: 0
      participants:
        - player1
        - player2
    - status: fail
      fails: 1
      participants:
        - player1
        - player2
        - player4
    - status: fail
      fails: 2
      participants:
        - player2
        - player4
        - player5
    - status: success
      fails: 0
      participants:
        - player1
        - player3
        - player4
    - status: success
      fails: 0
      participants:
        - player1
        - player3
        - player4

  result:
    winner: evil
    type: assassination

- players:
    player1: merlin
    player2: morgana
    player3: percival
    player4: servant
    player5: reverseoberon
    player6: assassin
  quests:
    - status: success
      fails: 0
      participants:
        - player1
        - player2
    - status: fail
      fails: 1
      participants:
        - player1
        - player2
        - player4
    - status: fail
      fails: 2
      participants:
        - player2
        - player4
        - player5
    - status: success
      fails: 0
      participants:
        - player1
        - player3
        - player4
    - status: success
      fails: 0
      participants:
        - player1
        - player3
        - player4

  result:
    winner: good
    type: quest
"""


FIVE_PLAYER_ROLES = {
    "player1": Role.MERLIN,
    "player2": Role.MORGANA,
    "player3": Role.PERCIVAL,
    "player4": Role.SERVANT,
    "player5": Role.ASSASSIN,
}


class QuestFactory:
    """Factory for creating Quest test instances."""

    @staticmethod
    def create(
        participants: Iterable[str] = (),
        status: QuestStatus = QuestStatus.SUCCESS,
        fails: Optional[int] = None,
    ) -> Quest:
        if fails is None:
            fails = 0 if status == QuestStatus.SUCCESS else 1
        return Quest(status=status, fails=fails, participants=frozenset(participants))


class GameRecordFactory:
    """Factory for creating GameRecord test instances."""

    @staticmethod
    def create(
        players: Optional[Dict[str, Role]] = None,
        quests: Optional[Iterable[Quest]] = None,
        winner: Alignment = Alignment.EVIL,
        victory_type: VictoryType = VictoryType.ASSASSINATION,
    ) -> GameRecord:
        """Create a GameRecord; defaults to the five player sample lineup."""
        if players is None:
            players = dict(FIVE_PLAYER_ROLES)
        return GameRecord(
            players=players,
            quests=tuple(quests or ()),
            result=EndResult(winner=winner, victory_type=victory_type),
        )

    @staticmethod
    def five_player_game(
        winner: Alignment = Alignment.EVIL,
        victory_type: VictoryType = VictoryType.ASSASSINATION,
    ) -> GameRecord:
        """The first game of SAMPLE_SHEET, optionally with another outcome."""
        return GameRecordFactory.create(
            players=dict(FIVE_PLAYER_ROLES),
            quests=[
                QuestFactory.create(["player1", "player2"]),
                QuestFactory.create(["player1", "player2", "player4"], QuestStatus.FAIL, 1),
                QuestFactory.create(["player2", "player4", "player5"], QuestStatus.FAIL, 2),
                QuestFactory.create(["player1", "player3", "player4"]),
                QuestFactory.create(["player1", "player3", "player4"]),
            ],
            winner=winner,
            victory_type=victory_type,
        )
