"""Error taxonomy for the avalon tracker."""

from typing import Optional


class AvalonTrackerError(Exception):
    """Base class for every error raised by the tracker."""


class DecodingError(AvalonTrackerError):
    """Raised when a game document or a stored row cannot be decoded.

    Covers unknown enumerated values, missing fields, duplicate player names
    and quest participants that are not part of the game.
    """

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(f"{context}: {message}" if context else message)


class NotFoundError(AvalonTrackerError):
    """Raised when a requested game id does not exist in storage."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game not found: {game_id}")
