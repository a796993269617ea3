"""Pack endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from rockcollector.api.deps import CatalogDep, SessionDep, load_game, save_game
from rockcollector.models.inventory import Foil
from rockcollector.services.pack_opener import PackReveal

router = APIRouter(prefix="/game/{player_id}/packs", tags=["packs"])


class RevealedCardModel(BaseModel):
    """One card of a pack reveal."""

    card_id: str
    name: str
    rarity: str
    art: int
    foil: Foil
    is_new: bool = Field(
        ...,
        description="True if no copy of this card was owned before the pack was opened",
    )


class PackRevealResponse(BaseModel):
    pack_type: str
    cards: list[RevealedCardModel] = Field(default_factory=list)
    packs_remaining: int
    packs_opened: int

    @classmethod
    def from_reveal(cls, reveal: PackReveal) -> "PackRevealResponse":
        return cls(
            pack_type=reveal.pack_type,
            cards=[
                RevealedCardModel(
                    card_id=card.card_id,
                    name=card.name,
                    rarity=card.rarity.value,
                    art=card.art,
                    foil=card.foil,
                    is_new=card.is_new,
                )
                for card in reveal.cards
            ],
            packs_remaining=reveal.packs_remaining,
            packs_opened=reveal.packs_opened,
        )


@router.post("/{pack_type}/open", response_model=PackRevealResponse)
async def open_pack(
    player_id: str,
    pack_type: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> PackRevealResponse:
    """
    Open one pack.

    Returns 409 if the player has none of that pack, 400 if the pack type
    is unknown.
    """
    engine = await load_game(session, player_id, catalog)
    reveal = engine.open_pack(pack_type)
    await save_game(session, player_id, engine)
    return PackRevealResponse.from_reveal(reveal)
