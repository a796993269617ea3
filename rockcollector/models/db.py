"""
SQLAlchemy ORM models for persistent storage.

A save is stored whole, as a JSON blob, under (player_id, save_key).
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SaveGameDB(Base):
    """
    One player's serialized game state.

    The payload mirrors GameState.to_save(); the database never looks
    inside it.
    """

    __tablename__ = "save_games"
    __table_args__ = (UniqueConstraint("player_id", "save_key", name="uq_player_save_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(255), index=True)
    save_key: Mapped[str] = mapped_column(String(100))
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SaveGameDB(player_id={self.player_id}, save_key={self.save_key})>"
