"""Tests for the game engine's save discipline and lifecycle."""

import pytest

from rockcollector.models.catalog import GameCatalog
from rockcollector.models.expedition import SlotStatus
from rockcollector.models.failure import PreconditionRejected
from rockcollector.models.game_state import GameState
from rockcollector.models.loot import LootKind
from rockcollector.services.archive import ArchiveSort
from rockcollector.services.engine import GameEngine
from rockcollector.services.minigames import FishingEvent, SiftingEvent


@pytest.fixture
def saves() -> list[dict]:
    return []


@pytest.fixture
def engine(catalog: GameCatalog, state: GameState, clock, scripted, saves) -> GameEngine:
    engine = GameEngine(
        catalog,
        state,
        rng=scripted(),
        clock=clock,
        save=lambda saved: saves.append(saved.to_save()),
    )
    engine.check_on_load()
    return engine


class TestLifecycle:
    def test_check_on_load_without_changes_does_not_save(
        self, engine: GameEngine, saves: list[dict]
    ) -> None:
        assert engine.loaded is True
        assert engine.caught_up == []
        assert saves == []
        assert engine.dirty is False

    def test_check_on_load_completes_overdue_expeditions(
        self, catalog: GameCatalog, clock, scripted
    ) -> None:
        state = GameState()
        GameEngine(catalog, state, rng=scripted(), clock=clock).start_expedition(0)
        clock.now = 10 * 60 * 60 * 1000

        saves: list[dict] = []
        reloaded = GameEngine(
            catalog, state, rng=scripted(), clock=clock, save=lambda s: saves.append(s.to_save())
        )

        assert reloaded.check_on_load() == [0]
        assert reloaded.caught_up == [0]
        assert state.expeditions[0].status == SlotStatus.COMPLETE
        assert saves[-1]["expeditions"][0]["status"] == "complete"

    def test_quiet_tick_does_not_save(self, engine: GameEngine, saves: list[dict]) -> None:
        engine.tick()

        assert len(saves) == 0

    def test_tick_saves_on_completion(self, engine: GameEngine, clock, saves) -> None:
        engine.start_expedition(0)
        clock.now = 5 * 60 * 1000

        result = engine.tick()

        assert result.completed_expeditions == [0]
        assert len(saves) == 2


class TestOperations:
    def test_open_pack_saves(self, engine: GameEngine, saves: list[dict]) -> None:
        reveal = engine.open_pack("basic")

        assert len(reveal.cards) == 3
        assert saves[-1]["player"]["packsOpened"] == 1
        assert saves[-1]["player"]["packsInventory"]["basic"] == 4

    def test_rejected_operation_does_not_save(
        self, engine: GameEngine, saves: list[dict]
    ) -> None:
        with pytest.raises(PreconditionRejected):
            engine.open_pack("explorer")

        assert len(saves) == 0

    def test_add_packs(self, engine: GameEngine, saves: list[dict]) -> None:
        assert engine.add_packs("deluxe", 2) is True
        assert engine.add_packs("mystery") is False

        assert engine.state.player.pack_count("deluxe") == 2
        assert len(saves) == 1

    def test_queries(self, engine: GameEngine) -> None:
        engine.open_pack("basic")

        assert engine.unlocked_regions()[0] == "riverbed"
        assert engine.unique_card_count() == engine.state.player.uniques_owned
        assert len(engine.expedition_status()) == 3
        assert len(engine.sorted_archive(ArchiveSort.RARITY_ASC)) == len(engine.state.inventory)

    def test_conversion_round_trip(self, engine: GameEngine, saves: list[dict]) -> None:
        for _ in range(11):
            engine.state.inventory.add("r-rare")
        for _ in range(10):
            preview = engine.toggle_conversion_selection("r-rare")

        assert preview.points == 100
        result = engine.confirm_conversion()

        assert result.reward == "advanced"
        assert saves[-1]["player"]["packsInventory"]["advanced"] == 1
        assert engine.conversion_preview().points == 0

    def test_toggle_unowned_card(self, engine: GameEngine) -> None:
        with pytest.raises(PreconditionRejected):
            engine.toggle_conversion_selection("r-rare")

    def test_museum(self, engine: GameEngine, saves: list[dict]) -> None:
        engine.state.inventory.add("r-rare")

        engine.place_in_museum(0, "r-rare")

        assert saves[-1]["museum"]["slots"][0]["cardId"] == "r-rare"
        engine.clear_museum_slot(0)
        assert saves[-1]["museum"]["slots"][0] is None


class TestMinigames:
    def test_fishing_catch_saves_reward(
        self, catalog: GameCatalog, state: GameState, clock, scripted, saves
    ) -> None:
        # Cast wait draw, then the reward table roll lands on a basic pack
        engine = GameEngine(
            catalog,
            state,
            rng=scripted([0.0, 0.2]),
            clock=clock,
            save=lambda saved: saves.append(saved.to_save()),
        )
        engine.fishing_action()
        clock.now = 3_500

        steps = engine.fishing_action()

        assert [s.event for s in steps] == [FishingEvent.BITE, FishingEvent.CAUGHT]
        assert steps[-1].reward.kind == LootKind.PACK
        assert saves[-1]["player"]["packsInventory"]["basic"] == 6

    def test_leaving_cancels_minigames(self, engine: GameEngine, clock) -> None:
        engine.fishing_action()
        engine.start_sifting()

        engine.leave_minigames()
        clock.now = 60_000
        result = engine.tick()

        assert result.fishing == []
        assert result.sifting is None

    def test_sifting_times_out_on_tick(self, engine: GameEngine, clock) -> None:
        engine.start_sifting()
        clock.now = 20_000

        assert engine.tick().sifting.event == SiftingEvent.TIME_UP
