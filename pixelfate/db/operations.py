"""
Database CRUD operations.

Provides async functions for reading, writing and deleting persisted
player state payloads.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pixelfate.models.db import PersistedStateDB


async def get_state_row(
    session: AsyncSession, player_id: str, category: str
) -> PersistedStateDB | None:
    """
    Get one persisted category for a player.

    Returns None if nothing has been stored yet.
    """
    result = await session.execute(
        select(PersistedStateDB).where(
            PersistedStateDB.player_id == player_id,
            PersistedStateDB.category == category,
        )
    )
    return result.scalar_one_or_none()


async def read_state_blob(session: AsyncSession, player_id: str, category: str) -> str | None:
    """Raw payload text for a category, or None if absent."""
    row = await get_state_row(session, player_id, category)
    return row.payload if row else None


async def write_state_blob(
    session: AsyncSession,
    player_id: str,
    category: str,
    payload: str,
) -> PersistedStateDB:
    """
    Insert or replace the payload for a category.

    Writes are whole-payload replacements, so repeating one is harmless.
    """
    row = await get_state_row(session, player_id, category)
    if row is None:
        row = PersistedStateDB(player_id=player_id, category=category, payload=payload)
        session.add(row)
    else:
        row.payload = payload
    await session.flush()
    return row


async def delete_player_state(session: AsyncSession, player_id: str) -> int:
    """
    Delete every persisted category for a player.

    Returns the number of rows removed.
    """
    result = await session.execute(
        delete(PersistedStateDB).where(PersistedStateDB.player_id == player_id)
    )
    return result.rowcount or 0

