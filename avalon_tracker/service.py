"""Main service class for the Avalon tracker."""

from pathlib import Path
from typing import Dict, List, Optional, Union

import structlog

from avalon_tracker.config import Config
from avalon_tracker.adapters.database.manager import DatabaseManager
from avalon_tracker.adapters.ingestion import parse_file
from avalon_tracker.core.entities import GameRecord
from avalon_tracker.core.enums import Alignment
from avalon_tracker.core.errors import NotFoundError
from avalon_tracker.core.standings import (
    Standings,
    compute_standings,
    compute_standings_by_alignment,
)

logger = structlog.get_logger()


class AvalonTrackerService:
    """Wires the database and game sheet adapters to the standings core."""

    def __init__(self, config: Config, database_manager: Optional[DatabaseManager] = None):
        """Initialize the service.

        Args:
            config: Service configuration
            database_manager: Optional manager for dependency injection.
                              If not provided, one is created from config on start().
        """
        self.config = config
        self._database_manager = database_manager
        self._owns_database_manager = database_manager is None

    async def start(self) -> None:
        if self._database_manager is None:
            self._database_manager = DatabaseManager(self.config)
            await self._database_manager.initialize()

    async def stop(self) -> None:
        if self._owns_database_manager and self._database_manager is not None:
            await self._database_manager.close()
            self._database_manager = None

    async def __aenter__(self) -> "AvalonTrackerService":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    @property
    def database(self) -> DatabaseManager:
        if self._database_manager is None:
            raise RuntimeError("Service not started. Call start() first.")
        return self._database_manager

    async def init_db(self) -> None:
        await self.database.create_tables()

    async def import_games(self, path: Union[str, Path]) -> List[str]:
        """Import every game of a game sheet.

        The sheet is fully decoded before the first game is stored, so a
        decoding error leaves storage untouched.

        Returns:
            Identifiers of the stored games, in sheet order
        """
        games = parse_file(path)
        game_ids = []
        for game in games:
            game_ids.append(await self.database.store_game(game))
        logger.info("Imported games", path=str(path), count=len(game_ids))
        return game_ids

    async def load_game(self, game_id: str) -> GameRecord:
        return await self.database.find_game(game_id)

    async def delete_game(self, game_id: str) -> None:
        """Remove a stored game, e.g. one imported by mistake.

        Raises:
            NotFoundError: If no game has this identifier
        """
        if not await self.database.delete_game(game_id):
            raise NotFoundError(game_id)
        logger.info("Deleted game", game_id=game_id)

    async def standings(self) -> Standings:
        games = await self.database.load_all_games()
        logger.debug("Computing standings", games=len(games))
        return compute_standings(games)

    async def standings_by_alignment(self) -> Dict[Alignment, Standings]:
        games = await self.database.load_all_games()
        logger.debug("Computing standings by alignment", games=len(games))
        return compute_standings_by_alignment(games)
