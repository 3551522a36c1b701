"""
SQLAlchemy ORM models for persistent storage.

Player state is stored as one JSON text payload per (player, category).
Payloads are kept as raw text so a corrupt row can be detected and
replaced on load without affecting the other categories.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PersistedStateDB(Base):
    """
    One persisted category of one player's state.

    Categories: "owned", "codex", "history".
    """

    __tablename__ = "persisted_state"
    __table_args__ = (UniqueConstraint("player_id", "category", name="uq_player_category"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(255), index=True)
    category: Mapped[str] = mapped_column(String(32))
    payload: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<PersistedStateDB(player={self.player_id}, category={self.category})>"
