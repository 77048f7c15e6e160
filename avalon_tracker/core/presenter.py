"""Text rendering for standings and individual games."""

import math
from typing import List, Mapping, Tuple

from .entities import GameRecord
from .enums import Alignment
from .standings import Record

SEPARATOR = "---------"


def _sort_key(item: Tuple[str, Record]):
    name, record = item
    percentage = record.win_percentage
    if math.isnan(percentage):
        percentage = -1.0
    return (-record.wins, -percentage, name)


def rank(standings: Mapping[str, Record]) -> List[Tuple[str, Record]]:
    """Order players by wins, then win percentage (both descending), then name."""
    return sorted(standings.items(), key=_sort_key)


def render(standings: Mapping[str, Record], title: str = "Standings") -> str:
    """Render standings as a ranked text table."""
    lines = [
        title,
        f"{'Name':^10} {'W':^4}   {'L':^4}  {'%':^4}",
    ]
    for name, record in rank(standings):
        lines.append(
            f"{name:<10} {record.wins:^4} - {record.losses:^4}: {record.win_percentage:^4.2f}"
        )
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def render_by_alignment(by_alignment: Mapping[Alignment, Mapping[str, Record]]) -> str:
    """Render one standings table per alignment, good side first."""
    return "\n".join(
        render(by_alignment.get(alignment, {}), title=f"Standings ({alignment.value})")
        for alignment in (Alignment.GOOD, Alignment.EVIL)
    )


def render_game(game_id: str, game: GameRecord) -> str:
    """Render a single stored game for display."""
    successes, failures = game.quest_tally()
    lines = [
        f"Game {game_id}",
        f"Winner: {game.result.winner.value} ({game.result.victory_type.value})",
        f"Quests: {successes} succeeded, {failures} failed",
        "Players:",
    ]
    for name in sorted(game.players):
        role = game.players[name]
        lines.append(f"  {name:<10} {role.value:<14} {role.alignment.value}")
    lines.append("Quests:")
    for number, quest in enumerate(game.quests, start=1):
        participants = ", ".join(sorted(quest.participants))
        lines.append(
            f"  {number}. {quest.status.value:<7} fails={quest.fails} [{participants}]"
        )
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"
