from collections.abc import Iterable

import pytest

from rockcollector.models.catalog import (
    CardDefinition,
    GameCatalog,
    PackDefinition,
    RegionDefinition,
    UnlockRule,
    UnlockType,
)
from rockcollector.models.game_state import GameState
from rockcollector.models.rarity import Rarity
from rockcollector.services.sessions import reset_player_sessions


class ScriptedRandom:
    """Random source that replays queued draws, then repeats a default."""

    def __init__(self, values: Iterable[float] = (), default: float = 0.5) -> None:
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


class FakeClock:
    """Millisecond clock the test moves by hand."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def _card(card_id: str, name: str, rarity: Rarity, region: str) -> CardDefinition:
    return CardDefinition(card_id=card_id, name=name, rarity=rarity, region=region)


def _region(region_id: str, unlock_type: UnlockType, value: int) -> RegionDefinition:
    return RegionDefinition(region_id=region_id, unlock=UnlockRule(type=unlock_type, value=value))


def make_catalog() -> GameCatalog:
    cards = [
        _card("r-common-1", "Pebble", Rarity.COMMON, "riverbed"),
        _card("r-common-2", "Cobble", Rarity.COMMON, "riverbed"),
        _card("r-uncommon", "Agate", Rarity.UNCOMMON, "riverbed"),
        _card("r-rare", "Jasper", Rarity.RARE, "riverbed"),
        _card("g-common", "Flint", Rarity.COMMON, "grassland"),
        _card("g-mythic", "Sunstone", Rarity.MYTHIC, "grassland"),
        _card("d-common", "Sandstone", Rarity.COMMON, "desert"),
        _card("d-rare", "Desert Rose", Rarity.RARE, "desert"),
    ]
    regions = [
        _region("riverbed", UnlockType.PACKS, 0),
        _region("grassland", UnlockType.PACKS, 10),
        _region("desert", UnlockType.UNIQUE, 3),
        _region("void", UnlockType.PACKS, 0),
    ]
    packs = [
        PackDefinition("basic", {Rarity.COMMON: 80, Rarity.UNCOMMON: 17, Rarity.RARE: 3}),
        PackDefinition(
            "explorer",
            {Rarity.COMMON: 60, Rarity.UNCOMMON: 30, Rarity.RARE: 9, Rarity.MYTHIC: 1},
        ),
        PackDefinition("advanced", {Rarity.RARE: 50, Rarity.COMMON: 50}),
        PackDefinition("deluxe", {Rarity.MYTHIC: 100}),
        PackDefinition("collector", {}),
    ]
    return GameCatalog(
        cards={card.card_id: card for card in cards},
        packs={pack.pack_type: pack for pack in packs},
        regions={region.region_id: region for region in regions},
    )


@pytest.fixture(autouse=True)
def clear_player_sessions():
    """Transient per-player sessions live in a module registry; isolate tests."""
    reset_player_sessions()
    yield
    reset_player_sessions()


@pytest.fixture
def catalog() -> GameCatalog:
    """Small catalog: riverbed and void always open, grassland at 10 packs, desert at 3 uniques."""
    return make_catalog()


@pytest.fixture
def state() -> GameState:
    """A brand new game."""
    return GameState()


@pytest.fixture
def scripted() -> type[ScriptedRandom]:
    """Factory for scripted random sources: scripted([0.1, 0.9], default=0.5)."""
    return ScriptedRandom


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
