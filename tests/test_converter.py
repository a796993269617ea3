"""Tests for the duplicate converter."""

import pytest

from rockcollector.config import PACK_THRESHOLDS
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.failure import FailureKind, PreconditionRejected
from rockcollector.models.game_state import GameState
from rockcollector.models.inventory import Foil
from rockcollector.services.converter import (
    ConversionSelection,
    SelectedCard,
    best_reward,
    card_points,
    confirm,
    score,
)


def _give(state: GameState, card_id: str, copies: int, foil: Foil = Foil.NORMAL) -> None:
    for _ in range(copies):
        state.inventory.add(card_id, foil=foil)


def _select(selection: ConversionSelection, state: GameState, card_id: str, copies: int) -> None:
    stack = state.inventory.find(card_id)
    for _ in range(copies):
        selection.toggle(stack)


class TestScoring:
    def test_best_reward_thresholds(self) -> None:
        assert best_reward(100) == "advanced"
        assert best_reward(99) == "explorer"
        assert best_reward(9) is None
        assert best_reward(10) == "basic"
        assert best_reward(1000) == "collector"
        assert best_reward(0) is None

    def test_best_reward_never_drops_as_points_grow(self) -> None:
        ladder = [pack_type for pack_type, _ in reversed(PACK_THRESHOLDS)]
        previous = -1
        for points in range(0, 1101):
            reward = best_reward(points)
            rank = -1 if reward is None else ladder.index(reward)
            assert rank >= previous, f"reward dropped at {points} points"
            previous = rank
        assert previous == len(ladder) - 1

    def test_card_points_by_rarity(self, catalog: GameCatalog) -> None:
        assert card_points("r-common-1", catalog) == 1
        assert card_points("r-uncommon", catalog) == 3
        assert card_points("r-rare", catalog) == 10
        assert card_points("g-mythic", catalog) == 30

    def test_unknown_card_scores_zero(self, catalog: GameCatalog) -> None:
        assert card_points("missing", catalog) == 0

    def test_score_is_linear(self, catalog: GameCatalog) -> None:
        selection = [
            SelectedCard("r-rare", 0, Foil.NORMAL, 3),
            SelectedCard("r-uncommon", 0, Foil.NORMAL, 2),
        ]

        assert score(selection, catalog) == 36
        assert score(selection + selection, catalog) == 72


class TestSelection:
    def test_toggle_cycles_up_to_spare_copies(self, state: GameState) -> None:
        _give(state, "r-rare", 3)
        stack = state.inventory.find("r-rare")
        selection = ConversionSelection()

        assert selection.toggle(stack) == 1
        assert selection.toggle(stack) == 2
        assert selection.toggle(stack) == 0
        assert len(selection) == 0

    def test_single_copy_not_selectable(self, state: GameState) -> None:
        _give(state, "r-rare", 1)

        with pytest.raises(PreconditionRejected) as exc_info:
            ConversionSelection().toggle(state.inventory.find("r-rare"))

        assert exc_info.value.kind == FailureKind.INVALID_SELECTION

    def test_variants_are_separate_stacks(self, state: GameState) -> None:
        _give(state, "r-rare", 2)
        _give(state, "r-rare", 2, foil=Foil.FOIL)
        selection = ConversionSelection()

        selection.toggle(state.inventory.find("r-rare"))
        selection.toggle(state.inventory.find("r-rare", foil=Foil.FOIL))

        assert [entry.foil for entry in selection] == [Foil.NORMAL, Foil.FOIL]

    def test_preview(self, catalog: GameCatalog, state: GameState) -> None:
        _give(state, "r-rare", 4)
        selection = ConversionSelection()
        _select(selection, state, "r-rare", 3)

        preview = selection.preview(catalog)

        assert preview.points == 30
        assert preview.reward == "explorer"
        assert preview.selected[0].count == 3


class TestConfirm:
    def test_confirm_trades_for_best_pack(self, catalog: GameCatalog, state: GameState) -> None:
        _give(state, "r-rare", 11)
        selection = ConversionSelection()
        _select(selection, state, "r-rare", 10)

        result = confirm(state, selection, catalog)

        assert result.points == 100
        assert result.reward == "advanced"
        assert state.player.pack_count("advanced") == 1
        assert state.inventory.find("r-rare").count == 1
        assert len(selection) == 0

    def test_below_threshold_rejected(self, catalog: GameCatalog, state: GameState) -> None:
        _give(state, "r-common-1", 5)
        selection = ConversionSelection()
        _select(selection, state, "r-common-1", 4)

        with pytest.raises(PreconditionRejected) as exc_info:
            confirm(state, selection, catalog)

        assert exc_info.value.kind == FailureKind.NO_QUALIFYING_REWARD
        assert state.inventory.find("r-common-1").count == 5
        assert len(selection) == 1

    def test_never_takes_last_copy(self, catalog: GameCatalog, state: GameState) -> None:
        """A stack that shrank after selection is re-checked at confirm time."""
        _give(state, "r-rare", 3)
        selection = ConversionSelection()
        _select(selection, state, "r-rare", 2)
        state.inventory.find("r-rare").count = 2

        with pytest.raises(PreconditionRejected) as exc_info:
            confirm(state, selection, catalog)

        assert exc_info.value.kind == FailureKind.INVALID_SELECTION
        assert state.inventory.find("r-rare").count == 2
        assert state.player.pack_count("basic") == 5

    def test_every_stack_keeps_a_copy(self, catalog: GameCatalog, state: GameState) -> None:
        for card_id in ("r-rare", "r-uncommon", "g-mythic"):
            _give(state, card_id, 5)
        selection = ConversionSelection()
        for card_id in ("r-rare", "r-uncommon", "g-mythic"):
            _select(selection, state, card_id, 4)

        confirm(state, selection, catalog)

        assert all(entry.count >= 1 for entry in state.inventory)
        assert state.player.pack_count("advanced") == 1
