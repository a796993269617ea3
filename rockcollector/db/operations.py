"""
Save blob CRUD operations.

One blob per (player_id, save_key). Writes replace the whole blob.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rockcollector.models.db import SaveGameDB


async def get_save_record(
    session: AsyncSession, player_id: str, save_key: str
) -> SaveGameDB | None:
    """Get the stored save row, None if the player has never saved."""
    result = await session.execute(
        select(SaveGameDB).where(
            SaveGameDB.player_id == player_id,
            SaveGameDB.save_key == save_key,
        )
    )
    return result.scalar_one_or_none()


async def load_save(session: AsyncSession, player_id: str, save_key: str) -> dict[str, Any] | None:
    """
    Read a player's save blob.

    Returns None if no save exists (a fresh game).
    """
    record = await get_save_record(session, player_id, save_key)
    if record is None:
        return None
    return dict(record.payload)


async def store_save(
    session: AsyncSession,
    player_id: str,
    save_key: str,
    payload: dict[str, Any],
) -> SaveGameDB:
    """
    Write a player's save blob, creating the row on first save.

    The whole blob is replaced.
    """
    record = await get_save_record(session, player_id, save_key)
    if record is None:
        record = SaveGameDB(player_id=player_id, save_key=save_key, payload=payload)
        session.add(record)
    else:
        record.payload = payload

    await session.flush()
    return record


async def delete_save(session: AsyncSession, player_id: str, save_key: str) -> bool:
    """
    Delete a player's save.

    Returns True if deleted, False if not found.
    """
    record = await get_save_record(session, player_id, save_key)
    if record is None:
        return False

    await session.delete(record)
    return True
