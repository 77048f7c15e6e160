"""Database infrastructure layer for recorded games."""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from ...config import Config
from ...core.entities import EndResult, GameRecord, Quest
from ...core.enums import Alignment, QuestStatus, Role, VictoryType
from ...core.errors import NotFoundError
from .models import Base, Game as GameModel, PlayerRole, QuestRow, QuestParticipant

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the database connection and stores and loads game records."""

    def __init__(self, config: Config):
        self.config = config
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def initialize(self) -> None:
        """Initialize database engine and session factory."""
        if self._engine is not None:
            logger.warning("Database manager already initialized")
            return

        url = self.config.get_database_url()
        if url.startswith("sqlite") and ":memory:" in url:
            # Every pooled connection would otherwise see its own empty database
            engine_options = {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        else:
            engine_options = {"poolclass": NullPool, "pool_pre_ping": True}

        self._engine = create_async_engine(
            url,
            echo=self.config.log_level == "DEBUG",
            **engine_options,
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info("Database manager initialized successfully")

    async def close(self) -> None:
        """Close database engine and clean up resources."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database manager closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with automatic cleanup."""
        if self._session_factory is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )

        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_tables(self) -> None:
        """Create all database tables. Used for testing and initial setup."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all database tables. Used for testing cleanup."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        logger.info("Database tables dropped successfully")

    @property
    def engine(self) -> AsyncEngine:
        """Get the database engine."""
        if self._engine is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )
        return self._engine

    # Conversion methods
    def _convert_core_entity_to_db_game(self, game_id: str, game: GameRecord) -> GameModel:
        """Build the row graph for a game record.

        Args:
            game_id: Identifier assigned to the stored game
            game: Core GameRecord entity

        Returns:
            Unsaved Game model with roles, quests and participants attached
        """
        record = GameModel(
            game_id=game_id,
            winner=game.result.winner.value,
            victory_type=game.result.victory_type.value,
        )
        record.player_roles = [
            PlayerRole(name=name, role=role.value) for name, role in game.players.items()
        ]
        record.quests = [
            QuestRow(
                position=position,
                status=quest.status.value,
                fails=quest.fails or 0,
                participants=[
                    QuestParticipant(name=name, role=game.players[name].value)
                    for name in sorted(quest.participants)
                ],
            )
            for position, quest in enumerate(game.quests)
        ]
        return record

    def _convert_db_game_to_core_entity(self, record: GameModel) -> GameRecord:
        """Convert a stored Game row graph back into a GameRecord.

        Stored values are trusted as-is: quest status and victory type are
        decoded verbatim rather than recomputed from fail counts.

        Raises:
            DecodingError: If a stored value is not a known enumerated value
        """
        players = {row.name: Role.from_string(row.role) for row in record.player_roles}
        quests = [
            Quest(
                status=QuestStatus.from_string(row.status),
                fails=row.fails if row.fails is not None else 0,
                participants=frozenset(p.name for p in row.participants),
            )
            for row in sorted(record.quests, key=lambda q: q.position)
        ]
        return GameRecord(
            players=players,
            quests=tuple(quests),
            result=EndResult(
                winner=Alignment.from_string(record.winner),
                victory_type=VictoryType.from_string(record.victory_type),
            ),
        )

    def _select_games(self):
        return select(GameModel).options(
            selectinload(GameModel.player_roles),
            selectinload(GameModel.quests).selectinload(QuestRow.participants),
        )

    # Game repository methods
    async def store_game(self, game: GameRecord) -> str:
        """Store a game record in a single transaction.

        Returns:
            Freshly generated identifier of the stored game
        """
        game_id = str(uuid.uuid4())
        async with self.get_session() as session:
            session.add(self._convert_core_entity_to_db_game(game_id, game))
            await session.commit()

        logger.info(f"Stored game {game_id} with {len(game.players)} players")
        return game_id

    async def find_game(self, game_id: str) -> GameRecord:
        """Load a stored game by its identifier.

        Raises:
            NotFoundError: If no game has this identifier
        """
        async with self.get_session() as session:
            result = await session.execute(
                self._select_games().where(GameModel.game_id == game_id)
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError(game_id)
            return self._convert_db_game_to_core_entity(record)

    async def load_all_games(self) -> List[GameRecord]:
        """Load every stored game in storage order."""
        async with self.get_session() as session:
            result = await session.execute(self._select_games().order_by(GameModel.id))
            return [self._convert_db_game_to_core_entity(r) for r in result.scalars().all()]

    async def list_game_ids(self) -> List[str]:
        """Identifiers of every stored game in storage order."""
        async with self.get_session() as session:
            result = await session.execute(select(GameModel.game_id).order_by(GameModel.id))
            return list(result.scalars().all())

    async def count_games(self) -> int:
        async with self.get_session() as session:
            result = await session.execute(select(func.count(GameModel.id)))
            return result.scalar_one()

    async def delete_game(self, game_id: str) -> bool:
        """Delete a stored game together with its roles and quests."""
        async with self.get_session() as session:
            result = await session.execute(
                self._select_games().where(GameModel.game_id == game_id)
            )
            record = result.scalar_one_or_none()
            if record is None:
                return False
            await session.delete(record)
            await session.commit()
            return True
