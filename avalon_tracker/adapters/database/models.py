"""SQLAlchemy models for the Avalon tracker."""

from datetime import datetime
from typing import List

from sqlalchemy import (
    String,
    DateTime,
    Integer,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ...core.entities import MAX_NAME_LENGTH

Base = declarative_base()


class Game(Base):
    """Header row of a recorded game."""

    __tablename__ = "games"

    # Surrogate key; ascending order is storage order
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    winner: Mapped[str] = mapped_column(String(10), nullable=False)  # good / evil
    victory_type: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())

    player_roles: Mapped[List["PlayerRole"]] = relationship(
        "PlayerRole", back_populates="game", cascade="all, delete-orphan"
    )
    quests: Mapped[List["QuestRow"]] = relationship(
        "QuestRow",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="QuestRow.position",
    )

    def __repr__(self) -> str:
        return f"<Game(game_id='{self.game_id}', winner='{self.winner}')>"


class PlayerRole(Base):
    """Role a player held in one game."""

    __tablename__ = "player_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_pk: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)

    game: Mapped["Game"] = relationship("Game", back_populates="player_roles")

    __table_args__ = (
        UniqueConstraint("game_pk", "name", name="uq_player_roles_game_name"),
        Index("idx_player_roles_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<PlayerRole(name='{self.name}', role='{self.role}')>"


class QuestRow(Base):
    """One quest of a game; ``position`` keeps play order."""

    __tablename__ = "quests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_pk: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False)
    fails: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    game: Mapped["Game"] = relationship("Game", back_populates="quests")
    participants: Mapped[List["QuestParticipant"]] = relationship(
        "QuestParticipant", back_populates="quest", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("game_pk", "position", name="uq_quests_game_position"),
    )

    def __repr__(self) -> str:
        return f"<QuestRow(position={self.position}, status='{self.status}', fails={self.fails})>"


class QuestParticipant(Base):
    """A player sent on a quest, with the role they held in that game."""

    __tablename__ = "quest_participants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quest_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quests.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)

    quest: Mapped["QuestRow"] = relationship("QuestRow", back_populates="participants")

    __table_args__ = (
        Index("idx_quest_participants_quest", "quest_id"),
    )

    def __repr__(self) -> str:
        return f"<QuestParticipant(name='{self.name}', role='{self.role}')>"
