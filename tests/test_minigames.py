"""Tests for the fishing and sifting minigames."""

from rockcollector.config import FISHING_REWARDS, MINIGAME_ROCK_LIST, SIFTING_REWARDS
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.game_state import GameState
from rockcollector.models.inventory import BASE_ART, Foil
from rockcollector.models.loot import LootKind
from rockcollector.services.card_resolver import FallbackPath
from rockcollector.services.minigames import (
    FishingEvent,
    FishingGame,
    FishingState,
    MinigameReward,
    SiftingEvent,
    SiftingRound,
    resolve_minigame_reward,
)


def _no_reward() -> MinigameReward:
    return MinigameReward(kind=LootKind.NONE, message="nothing")


class TestMinigameReward:
    def test_pack_grant(self, catalog: GameCatalog, state: GameState, scripted) -> None:
        reward = resolve_minigame_reward(FISHING_REWARDS, catalog, state, scripted([0.0]))

        assert reward.kind == LootKind.PACK
        assert reward.pack_type == "advanced"
        assert reward.granted is True
        assert state.player.pack_count("advanced") == 1

    def test_basic_pack_band(self, catalog: GameCatalog, state: GameState, scripted) -> None:
        reward = resolve_minigame_reward(FISHING_REWARDS, catalog, state, scripted([0.2]))

        assert reward.pack_type == "basic"
        assert state.player.pack_count("basic") == 6

    def test_card_grant_is_base_art_non_foil(
        self, catalog: GameCatalog, state: GameState, scripted
    ) -> None:
        """Roll 50 hits the riverbed card row, then a wild common."""
        reward = resolve_minigame_reward(
            FISHING_REWARDS, catalog, state, scripted([0.5, 0.5, 0.0])
        )

        assert reward.kind == LootKind.CARD
        assert reward.card_id == "r-common-1"
        assert state.inventory.find("r-common-1", BASE_ART, Foil.NORMAL) is not None
        assert state.player.uniques_owned == 1

    def test_locked_card_region_is_substituted(
        self, catalog: GameCatalog, state: GameState, scripted
    ) -> None:
        """Sifting targets the desert, which a fresh game has not unlocked."""
        reward = resolve_minigame_reward(
            SIFTING_REWARDS, catalog, state, scripted([0.5, 0.5, 0.0])
        )

        assert reward.card_id == "r-common-1"
        assert reward.resolution is not None
        assert reward.resolution.fallbacks == (FallbackPath.REGION_SUBSTITUTED,)

    def test_nothing(self, catalog: GameCatalog, state: GameState, scripted) -> None:
        reward = resolve_minigame_reward(FISHING_REWARDS, catalog, state, scripted([0.9]))

        assert reward.kind == LootKind.NONE
        assert reward.message == "An old boot..."
        assert reward.granted is False
        assert len(state.inventory) == 0


class TestFishing:
    def test_cast_waits_three_to_eight_seconds(self, scripted) -> None:
        game = FishingGame()

        steps = game.act(0, scripted([0.5]), _no_reward)

        assert [s.event for s in steps] == [FishingEvent.CAST]
        assert game.state == FishingState.WAITING
        assert game.deadline == 5_500

    def test_acting_while_waiting_scares_fish(self, scripted) -> None:
        game = FishingGame()
        game.act(0, scripted([0.0]), _no_reward)

        steps = game.act(1_000, scripted(), _no_reward)

        assert steps[-1].event == FishingEvent.SCARED_AWAY
        assert game.state == FishingState.IDLE
        assert game.deadline is None

    def test_bite_then_catch(self, scripted) -> None:
        game = FishingGame()
        caught = MinigameReward(kind=LootKind.PACK, pack_type="basic")
        game.act(0, scripted([0.0]), _no_reward)

        assert [s.event for s in game.advance(3_000)] == [FishingEvent.BITE]
        steps = game.act(4_000, scripted(), lambda: caught)

        assert steps[-1].event == FishingEvent.CAUGHT
        assert steps[-1].reward is caught
        assert game.state == FishingState.REELING

    def test_reeling_cooldown(self, scripted) -> None:
        game = FishingGame()
        game.act(0, scripted([0.0]), _no_reward)
        game.advance(3_000)
        game.act(4_000, scripted(), _no_reward)

        assert game.act(5_000, scripted(), _no_reward)[-1].event == FishingEvent.BUSY
        assert [s.event for s in game.advance(6_500)] == [FishingEvent.READY]
        assert game.state == FishingState.IDLE

    def test_missed_bite_window(self, scripted) -> None:
        game = FishingGame()
        game.act(0, scripted([0.0]), _no_reward)

        steps = game.advance(5_000)

        assert [s.event for s in steps] == [FishingEvent.BITE, FishingEvent.GOT_AWAY]
        assert game.state == FishingState.IDLE

    def test_late_press_recasts(self, scripted) -> None:
        """Deadlines fire before the press, so a late reel is a fresh cast."""
        game = FishingGame()
        game.act(0, scripted([0.0]), _no_reward)

        steps = game.act(6_000, scripted([0.0]), _no_reward)

        assert [s.event for s in steps] == [
            FishingEvent.BITE,
            FishingEvent.GOT_AWAY,
            FishingEvent.CAST,
        ]
        assert game.deadline == 9_000

    def test_cancel(self, scripted) -> None:
        game = FishingGame()
        game.act(0, scripted([0.0]), _no_reward)

        game.cancel()

        assert game.advance(100_000) == []


class TestSifting:
    def test_start_builds_round(self, scripted) -> None:
        sifting = SiftingRound()

        step = sifting.start(0, scripted())

        assert step.event == SiftingEvent.STARTED
        assert len(sifting.find_list) == 3
        assert len(sifting.sieve) == 10
        assert set(sifting.find_list) <= set(sifting.sieve)
        assert set(sifting.sieve) <= set(MINIGAME_ROCK_LIST)
        assert len(set(sifting.sieve)) == 10
        assert sifting.seconds_left(0) == 20

    def test_find_all_targets_wins(self, scripted) -> None:
        sifting = SiftingRound()
        sifting.start(0, scripted())
        targets = list(sifting.find_list)
        won = MinigameReward(kind=LootKind.PACK, pack_type="basic")

        first = sifting.pick(targets[0], 1_000, _no_reward)
        second = sifting.pick(targets[1], 2_000, _no_reward)
        last = sifting.pick(targets[2], 3_000, lambda: won)

        assert first.event == SiftingEvent.FOUND
        assert first.remaining_targets == targets[1:]
        assert second.event == SiftingEvent.FOUND
        assert last.event == SiftingEvent.WON
        assert last.reward is won
        assert sifting.active is False

    def test_decoy_is_a_miss(self, scripted) -> None:
        sifting = SiftingRound()
        sifting.start(0, scripted())
        decoy = next(rock for rock in sifting.sieve if rock not in sifting.find_list)

        step = sifting.pick(decoy, 1_000, _no_reward)

        assert step.event == SiftingEvent.MISS
        assert len(step.remaining_targets) == 3

    def test_time_up(self, scripted) -> None:
        sifting = SiftingRound()
        sifting.start(0, scripted())
        target = sifting.find_list[0]

        assert sifting.advance(19_999) is None
        assert sifting.seconds_left(19_001) == 1
        assert sifting.pick(target, 20_000, _no_reward).event == SiftingEvent.TIME_UP
        assert sifting.active is False

    def test_pick_without_round(self) -> None:
        step = SiftingRound().pick("rock-001", 0, _no_reward)

        assert step.event == SiftingEvent.NOT_ACTIVE

    def test_restart_replaces_round(self, scripted) -> None:
        sifting = SiftingRound()
        sifting.start(0, scripted())

        sifting.start(10_000, scripted())

        assert sifting.seconds_left(10_000) == 20
