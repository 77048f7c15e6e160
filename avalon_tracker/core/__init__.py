"""Core domain layer for the avalon tracker.

Pure, I/O-free types and functions: the game record model, the queries that
decide winners, standings aggregation and text rendering.
"""

from .entities import EndResult, GameRecord, Quest
from .enums import Alignment, QuestStatus, Role, VictoryType, alignment_of
from .errors import AvalonTrackerError, DecodingError, NotFoundError
from .standings import Record, Standings, compute_standings, compute_standings_by_alignment

__all__ = [
    "EndResult",
    "GameRecord",
    "Quest",
    "Alignment",
    "QuestStatus",
    "Role",
    "VictoryType",
    "alignment_of",
    "AvalonTrackerError",
    "DecodingError",
    "NotFoundError",
    "Record",
    "Standings",
    "compute_standings",
    "compute_standings_by_alignment",
]
