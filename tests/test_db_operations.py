"""Tests for save blob persistence."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rockcollector.db.operations import delete_save, get_save_record, load_save, store_save
from rockcollector.models.db import Base
from rockcollector.models.game_state import GameState

SAVE_KEY = "rockGameState"


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


class TestSaveOperations:
    async def test_load_missing_save(self, session: AsyncSession) -> None:
        """Returns None for a player who never saved."""
        assert await load_save(session, "nobody", SAVE_KEY) is None

    async def test_store_and_load(self, session: AsyncSession) -> None:
        """A stored blob reads back unchanged."""
        blob = GameState().to_save()

        await store_save(session, "player-1", SAVE_KEY, blob)
        await session.commit()

        assert await load_save(session, "player-1", SAVE_KEY) == blob

    async def test_store_replaces_blob(self, session: AsyncSession) -> None:
        """Writing again replaces the whole blob in the same row."""
        state = GameState()
        first = await store_save(session, "player-1", SAVE_KEY, state.to_save())
        await session.commit()

        state.player.packs_opened = 7
        second = await store_save(session, "player-1", SAVE_KEY, state.to_save())
        await session.commit()

        assert second.id == first.id
        loaded = await load_save(session, "player-1", SAVE_KEY)
        assert loaded["player"]["packsOpened"] == 7

    async def test_saves_are_per_player(self, session: AsyncSession) -> None:
        await store_save(session, "player-1", SAVE_KEY, {"player": {"packsOpened": 1}})
        await store_save(session, "player-2", SAVE_KEY, {"player": {"packsOpened": 2}})
        await session.commit()

        loaded = await load_save(session, "player-2", SAVE_KEY)
        assert loaded["player"]["packsOpened"] == 2

    async def test_delete_save(self, session: AsyncSession) -> None:
        await store_save(session, "player-1", SAVE_KEY, {})
        await session.commit()

        assert await delete_save(session, "player-1", SAVE_KEY) is True
        await session.commit()

        assert await get_save_record(session, "player-1", SAVE_KEY) is None

    async def test_delete_missing_save(self, session: AsyncSession) -> None:
        assert await delete_save(session, "nobody", SAVE_KEY) is False
