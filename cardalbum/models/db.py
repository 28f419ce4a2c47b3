"""
SQLAlchemy ORM models for persistent storage.

Player state is stored as one row per player. Inventory, redeemed codes
and album placements are JSON documents so a row can be read back even
when one of them is damaged.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PlayerStateDB(Base):
    """
    A player's saved game state.

    Mirrors models.player_state.PlayerState.
    """

    __tablename__ = "player_states"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    coins: Mapped[int] = mapped_column(Integer, default=0)
    card_id_counter: Mapped[int] = mapped_column(Integer, default=1)

    # List of card dicts, in acquisition order
    inventory: Mapped[Any] = mapped_column(JSON, default=list)
    # List of normalized promo codes
    redeemed_codes: Mapped[Any] = mapped_column(JSON, default=list)
    # List of {"team", "number", "card_id"} placements
    album: Mapped[Any] = mapped_column(JSON, default=list)

    # ISO calendar date of the last daily bonus
    last_login: Mapped[str | None] = mapped_column(String(10), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<PlayerStateDB(user_id={self.user_id}, coins={self.coins})>"
