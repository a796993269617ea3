"""
Shared API dependencies.

Each request loads one player's save, runs the load-time catch-up, performs
one engine operation and writes the save back in the same DB session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rockcollector.config import settings
from rockcollector.db.database import get_session
from rockcollector.db.operations import load_save, store_save
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.game_state import GameState
from rockcollector.services.catalog_loader import get_catalog
from rockcollector.services.engine import GameEngine
from rockcollector.services.sessions import get_player_session


def get_game_catalog() -> GameCatalog:
    """Dependency that provides the static catalog (overridable in tests)."""
    return get_catalog()


SessionDep = Annotated[AsyncSession, Depends(get_session)]
CatalogDep = Annotated[GameCatalog, Depends(get_game_catalog)]


async def load_game(session: AsyncSession, player_id: str, catalog: GameCatalog) -> GameEngine:
    """
    Build the engine for a player from their stored save.

    A missing save starts a fresh game. Missing sections are backfilled.
    Expeditions that finished while the player was away complete here,
    before any operation runs. The engine is dirty only if either step
    changed the save.
    """
    blob = await load_save(session, player_id, settings.save_key)
    state, needs_save = GameState.from_save(blob)
    engine = GameEngine(catalog, state, session=get_player_session(player_id))
    if needs_save:
        engine.save()
    engine.check_on_load()
    return engine


async def save_game(session: AsyncSession, player_id: str, engine: GameEngine) -> None:
    """Write the engine's state back if any operation asked for a save."""
    if engine.dirty:
        await store_save(session, player_id, settings.save_key, engine.state.to_save())
