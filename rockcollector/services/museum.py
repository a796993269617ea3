"""Museum display slots. Cosmetic only; no effect on progression."""

from rockcollector.models.failure import ConfigurationError, FailureKind, PreconditionRejected
from rockcollector.models.game_state import DisplayedCard, GameState
from rockcollector.models.inventory import BASE_ART, Foil


def _check_slot(state: GameState, slot: int) -> None:
    if not 0 <= slot < len(state.museum.slots):
        raise ConfigurationError(FailureKind.UNKNOWN_SLOT, f"No museum slot {slot}")


def place_in_museum(
    state: GameState,
    slot: int,
    card_id: str,
    art: int = BASE_ART,
    foil: Foil = Foil.NORMAL,
) -> DisplayedCard:
    """
    Show an owned card variant in a museum slot, replacing what was there.

    Raises:
        ConfigurationError: If the slot does not exist
        PreconditionRejected: If the variant is not owned
    """
    _check_slot(state, slot)
    if state.inventory.find(card_id, art, foil) is None:
        raise PreconditionRejected(
            FailureKind.NOT_OWNED, f"{card_id} (art {art}, {foil.value}) is not owned"
        )

    shown = DisplayedCard(card_id=card_id, art=art, foil=foil)
    state.museum.slots[slot] = shown
    return shown


def clear_museum_slot(state: GameState, slot: int) -> None:
    _check_slot(state, slot)
    state.museum.slots[slot] = None
